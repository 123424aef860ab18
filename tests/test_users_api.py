from conftest import create_course


def test_admin_lists_users_without_password_hashes(client, admin, student, instructor):
    resp = client.get("/api/users", headers=admin[0])

    assert resp.status_code == 200
    emails = {u["email"] for u in resp.json()}
    assert emails == {"ada@school.edu", "sam@school.edu", "ivy@school.edu"}
    assert all("password_hash" not in u for u in resp.json())


def test_non_admins_are_forbidden(client, student, instructor):
    assert client.get("/api/users", headers=student[0]).status_code == 403
    assert client.get("/api/users", headers=instructor[0]).status_code == 403


def test_get_user_includes_enrollments(client, admin, instructor, student):
    course = create_course(client, instructor[0])
    client.post(f"/api/courses/{course['course_id']}/enroll", headers=student[0])

    resp = client.get(f"/api/users/{student[1]['user_id']}", headers=admin[0])

    assert resp.status_code == 200
    assert resp.json()["enrolled_courses"] == [course["course_id"]]


def test_get_missing_user(client, admin):
    resp = client.get("/api/users/missing", headers=admin[0])
    assert resp.status_code == 404


def test_admin_changes_role(client, admin, student):
    resp = client.put(
        f"/api/users/{student[1]['user_id']}",
        json={"role": "instructor", "name": "Sam Ward"},
        headers=admin[0],
    )

    assert resp.status_code == 200
    assert resp.json()["role"] == "instructor"
    assert resp.json()["name"] == "Sam Ward"

    # The new role applies to the existing token
    course = client.post(
        "/api/courses", json={"title": "T", "description": "D"}, headers=student[0]
    )
    assert course.status_code == 201


def test_admin_resets_password(client, admin, student):
    client.put(
        f"/api/users/{student[1]['user_id']}",
        json={"password": "new-secret"},
        headers=admin[0],
    )

    old = client.post("/api/auth/login", json={"email": "sam@school.edu", "password": "secret123"})
    new = client.post("/api/auth/login", json={"email": "sam@school.edu", "password": "new-secret"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_to_taken_email_is_conflict(client, admin, student, instructor):
    resp = client.put(
        f"/api/users/{student[1]['user_id']}",
        json={"email": "ivy@school.edu"},
        headers=admin[0],
    )
    assert resp.status_code == 409


def test_delete_user(client, admin, student):
    resp = client.delete(f"/api/users/{student[1]['user_id']}", headers=admin[0])
    assert resp.status_code == 200
    assert client.get(f"/api/users/{student[1]['user_id']}", headers=admin[0]).status_code == 404


def test_deleting_student_frees_their_seat(client, admin, instructor, student, other_student):
    course = create_course(client, instructor[0], max_enrollments=1)
    url = f"/api/courses/{course['course_id']}/enroll"
    client.post(url, headers=student[0])

    client.delete(f"/api/users/{student[1]['user_id']}", headers=admin[0])

    assert client.post(url, headers=other_student[0]).status_code == 200
