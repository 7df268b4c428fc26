"""
Test suite for user endpoints.

Covers admin-only creation and listing, and self-or-admin access to a
single user's record.
"""

import pytest
from app.core.security import decode_token, verify_password
from app.models.user import Application, User


NEW_USER = {
    "username": "u-new",
    "firstName": "First-new",
    "lastName": "Last-new",
    "password": "password-new",
    "email": "new@email.com",
    "isAdmin": False,
}


class TestUserCreation:
    """Tests for POST /users"""

    def test_create_as_admin(self, client, seeded, admin_headers):
        response = client.post("/users", json=NEW_USER, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["user"] == {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-new",
            "email": "new@email.com",
            "isAdmin": False,
        }
        assert decode_token(data["token"])["username"] == "u-new"

    def test_create_admin_as_admin(self, client, seeded, admin_headers):
        response = client.post("/users", json=dict(NEW_USER, isAdmin=True), headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"]["isAdmin"] is True
        assert decode_token(response.json()["token"])["isAdmin"] is True

    def test_password_is_hashed(self, client, db_session, seeded, admin_headers):
        client.post("/users", json=NEW_USER, headers=admin_headers)

        user = db_session.get(User, "u-new")
        assert user.password != "password-new"
        assert verify_password("password-new", user.password)

    def test_create_as_non_admin(self, client, db_session, seeded, u1_headers):
        response = client.post("/users", json=NEW_USER, headers=u1_headers)

        assert response.status_code == 401
        assert db_session.get(User, "u-new") is None

    def test_create_missing_email(self, client, db_session, seeded, admin_headers):
        data = {k: v for k, v in NEW_USER.items() if k != "email"}
        response = client.post("/users", json=data, headers=admin_headers)

        assert response.status_code == 400
        messages = response.json()["error"]["message"]
        assert isinstance(messages, list) and messages
        assert any("email" in msg for msg in messages)
        assert db_session.get(User, "u-new") is None

    def test_create_invalid_email(self, client, seeded, admin_headers):
        response = client.post("/users", json=dict(NEW_USER, email="not-an-email"), headers=admin_headers)
        assert response.status_code == 400

    def test_create_duplicate(self, client, seeded, admin_headers):
        response = client.post("/users", json=dict(NEW_USER, username="u1"), headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate username: u1"


class TestUserListing:
    """Tests for GET /users"""

    def test_list_as_admin(self, client, seeded, admin_headers):
        response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["username"] for u in users] == ["u1", "u2", "u3"]
        assert "password" not in users[0]

    def test_list_as_non_admin(self, client, seeded, u1_headers):
        response = client.get("/users", headers=u1_headers)
        assert response.status_code == 401

    def test_list_anonymous(self, client, seeded):
        response = client.get("/users")
        assert response.status_code == 401


class TestUserRetrieval:
    """Tests for GET /users/{username}"""

    def test_get_self(self, client, seeded, u1_headers):
        response = client.get("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "username": "u1",
                "firstName": "U1F",
                "lastName": "U1L",
                "email": "user1@user.com",
                "isAdmin": False,
                "jobs": [],
            }
        }

    def test_get_other_as_admin(self, client, seeded, admin_headers):
        response = client.get("/users/u1", headers=admin_headers)
        assert response.status_code == 200

    def test_get_other_as_non_admin(self, client, seeded, u2_headers):
        response = client.get("/users/u1", headers=u2_headers)
        assert response.status_code == 401

    def test_get_anonymous(self, client, seeded):
        response = client.get("/users/u1")
        assert response.status_code == 401

    def test_get_nonexistent_as_admin(self, client, seeded, admin_headers):
        response = client.get("/users/nope", headers=admin_headers)
        assert response.status_code == 404

    def test_get_nonexistent_as_non_admin(self, client, seeded, u1_headers):
        """Existence is not revealed to other users"""
        response = client.get("/users/nope", headers=u1_headers)
        assert response.status_code == 401


class TestUserUpdate:
    """Tests for PATCH /users/{username}"""

    def test_update_self(self, client, seeded, u1_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["firstName"] == "New"
        assert user["lastName"] == "U1L"

    def test_update_password(self, client, db_session, seeded, u1_headers):
        response = client.patch("/users/u1", json={"password": "new-password"}, headers=u1_headers)

        assert response.status_code == 200
        assert verify_password("new-password", db_session.get(User, "u1").password)

    def test_update_other_as_admin(self, client, seeded, admin_headers):
        response = client.patch("/users/u1", json={"isAdmin": True}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["user"]["isAdmin"] is True

    def test_non_admin_cannot_promote_self(self, client, db_session, seeded, u1_headers):
        response = client.patch("/users/u1", json={"isAdmin": True}, headers=u1_headers)

        assert response.status_code == 401
        assert db_session.get(User, "u1").is_admin is False

    def test_update_other_as_non_admin(self, client, seeded, u2_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u2_headers)
        assert response.status_code == 401

    def test_unauthorized_before_validation(self, client, seeded, u2_headers):
        """A bad payload for someone else's record is still a 401"""
        response = client.patch("/users/u1", json={"username": "hijack"}, headers=u2_headers)
        assert response.status_code == 401

    def test_update_invalid_data(self, client, seeded, u1_headers):
        response = client.patch("/users/u1", json={"firstName": 42}, headers=u1_headers)
        assert response.status_code == 400

    def test_cannot_change_username(self, client, seeded, u1_headers):
        response = client.patch("/users/u1", json={"username": "u1-new"}, headers=u1_headers)
        assert response.status_code == 400

    def test_update_nonexistent(self, client, seeded, admin_headers):
        response = client.patch("/users/nope", json={"firstName": "New"}, headers=admin_headers)
        assert response.status_code == 404


class TestUserDeletion:
    """Tests for DELETE /users/{username}"""

    def test_delete_self(self, client, db_session, seeded, u1_headers):
        response = client.delete("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}
        assert db_session.get(User, "u1") is None

    def test_delete_as_admin(self, client, seeded, admin_headers):
        response = client.delete("/users/u1", headers=admin_headers)
        assert response.status_code == 200

    def test_delete_other_as_non_admin(self, client, db_session, seeded, u2_headers):
        response = client.delete("/users/u1", headers=u2_headers)

        assert response.status_code == 401
        assert db_session.get(User, "u1") is not None

    def test_delete_nonexistent(self, client, seeded, admin_headers):
        response = client.delete("/users/nope", headers=admin_headers)
        assert response.status_code == 404


class TestJobApplication:
    """Tests for POST /users/{username}/jobs/{id}"""

    def test_apply_self(self, client, seeded, u1_headers):
        job_id = seeded["job_ids"][0]
        response = client.post(f"/users/u1/jobs/{job_id}", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"applied": job_id}

        user = client.get("/users/u1", headers=u1_headers).json()["user"]
        assert user["jobs"] == [job_id]

    def test_apply_as_admin(self, client, seeded, admin_headers):
        job_id = seeded["job_ids"][1]
        response = client.post(f"/users/u1/jobs/{job_id}", headers=admin_headers)
        assert response.status_code == 200

    def test_apply_for_other_user(self, client, db_session, seeded, u2_headers):
        job_id = seeded["job_ids"][0]
        response = client.post(f"/users/u1/jobs/{job_id}", headers=u2_headers)

        assert response.status_code == 401
        assert db_session.query(Application).count() == 0

    def test_apply_twice(self, client, seeded, u1_headers):
        job_id = seeded["job_ids"][0]
        client.post(f"/users/u1/jobs/{job_id}", headers=u1_headers)
        response = client.post(f"/users/u1/jobs/{job_id}", headers=u1_headers)
        assert response.status_code == 400

    def test_apply_unknown_job(self, client, seeded, u1_headers):
        response = client.post("/users/u1/jobs/99999", headers=u1_headers)
        assert response.status_code == 404

    def test_apply_job_id_out_of_range(self, client, seeded, u1_headers):
        response = client.post("/users/u1/jobs/100000000000000000000", headers=u1_headers)
        assert response.status_code == 400

    def test_out_of_range_id_for_other_user_is_unauthorized(self, client, seeded, u2_headers):
        response = client.post("/users/u1/jobs/100000000000000000000", headers=u2_headers)
        assert response.status_code == 401

    def test_apply_unknown_user(self, client, seeded, admin_headers):
        job_id = seeded["job_ids"][0]
        response = client.post(f"/users/nope/jobs/{job_id}", headers=admin_headers)
        assert response.status_code == 404
