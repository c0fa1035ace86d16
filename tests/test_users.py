"""
Tests for users endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from social_api.models.thought import Thought
from social_api.models.user import User
from social_api.services.auth import verify_password


class TestCreateUser:
    """Tests for user creation."""

    def test_create_user_success(self, client: TestClient, db: Session):
        """Test creation returns the generated id and hides the password."""
        response = client.post(
            "/users",
            json={"username": "a", "email": "a@x.com", "password": "p"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["username"] == "a"
        assert data["email"] == "a@x.com"
        assert data["thoughts"] == []
        assert data["friends"] == []
        assert data.get("password") != "p"
        assert "password_hash" not in data

        stored = db.query(User).filter(User.id == data["id"]).one()
        assert stored.password_hash != "p"
        assert verify_password("p", stored.password_hash)

    def test_create_user_duplicate_email(self, client: TestClient, test_user: User):
        """Test that a second user with the same email is rejected."""
        response = client.post(
            "/users",
            json={"username": "copy", "email": test_user.email, "password": "p"},
        )
        assert response.status_code == 400
        assert "Email" in response.json()["detail"]

        users = client.get("/users").json()
        assert len(users) == 1
        assert users[0]["username"] == test_user.username

    def test_create_user_missing_fields(self, client: TestClient):
        """Test that required fields are enforced."""
        response = client.post("/users", json={"username": "a"})
        assert response.status_code == 422
        errors = response.json()["errors"]
        assert any("email" in e for e in errors)
        assert any("password" in e for e in errors)

    def test_create_user_empty_password(self, client: TestClient):
        """Test that an empty password is rejected."""
        response = client.post(
            "/users",
            json={"username": "a", "email": "a@x.com", "password": ""},
        )
        assert response.status_code == 422


class TestListUsers:
    """Tests for listing users."""

    def test_list_users_empty(self, client: TestClient):
        """Test listing users when none exist."""
        response = client.get("/users")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_users_expands_thoughts_and_friends(
        self,
        client: TestClient,
        test_user: User,
        other_user: User,
        test_thought: Thought,
    ):
        """Test that references are returned as full entities."""
        client.post(f"/users/{test_user.id}/friends/{other_user.id}")

        response = client.get("/users")
        assert response.status_code == 200
        users = {u["id"]: u for u in response.json()}

        me = users[test_user.id]
        assert [t["id"] for t in me["thoughts"]] == [test_thought.id]
        assert me["thoughts"][0]["thoughtText"] == "First thought"
        assert [f["id"] for f in me["friends"]] == [other_user.id]
        assert me["friends"][0]["username"] == "otheruser"
        assert "password" not in me["friends"][0]

    def test_list_users_skips_dangling_references(self, client: TestClient, test_user: User):
        """Test that ids pointing at deleted records are tolerated."""
        client.post(f"/users/{test_user.id}/friends/no-such-user")

        response = client.get("/users")
        assert response.status_code == 200
        assert response.json()[0]["friends"] == []


class TestGetUser:
    """Tests for getting a single user."""

    def test_get_user_success(self, client: TestClient, test_user: User, test_thought: Thought):
        """Test getting a user with thoughts expanded."""
        response = client.get(f"/users/{test_user.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_user.id
        assert data["thoughts"][0]["id"] == test_thought.id

    def test_get_user_not_found(self, client: TestClient):
        """Test that an unknown user id is not-found."""
        response = client.get("/users/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404


class TestUpdateUser:
    """Tests for updating users."""

    def test_update_username(self, client: TestClient, test_user: User, db: Session):
        """Test that an unrelated update leaves the password hash untouched."""
        original_hash = test_user.password_hash

        response = client.put(f"/users/{test_user.id}", json={"username": "renamed"})
        assert response.status_code == 200
        assert response.json()["username"] == "renamed"
        assert response.json()["email"] == test_user.email

        db.expire_all()
        stored = db.query(User).filter(User.id == test_user.id).one()
        assert stored.password_hash == original_hash

    def test_update_password_is_rehashed(self, client: TestClient, test_user: User, db: Session):
        """Test that a new password is stored hashed."""
        response = client.put(f"/users/{test_user.id}", json={"password": "NewSecret1!"})
        assert response.status_code == 200

        db.expire_all()
        stored = db.query(User).filter(User.id == test_user.id).one()
        assert stored.password_hash != "NewSecret1!"
        assert verify_password("NewSecret1!", stored.password_hash)

    def test_update_unknown_user(self, client: TestClient, db: Session):
        """Test that updating a missing user is not-found and creates nothing."""
        response = client.put(
            "/users/00000000-0000-0000-0000-000000000000",
            json={"username": "ghost", "email": "ghost@x.com", "password": "p"},
        )
        assert response.status_code == 404
        assert db.query(User).count() == 0

    def test_update_email_taken(self, client: TestClient, test_user: User, other_user: User):
        """Test that changing to another user's email is rejected."""
        response = client.put(f"/users/{other_user.id}", json={"email": test_user.email})
        assert response.status_code == 400

    def test_update_required_field_null(self, client: TestClient, test_user: User):
        """Test that nulling a required field is rejected."""
        response = client.put(f"/users/{test_user.id}", json={"username": None})
        assert response.status_code == 400


class TestDeleteUser:
    """Tests for deleting users."""

    def test_delete_user_success(self, client: TestClient, test_user: User):
        """Test successful user deletion."""
        response = client.delete(f"/users/{test_user.id}")
        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/users").json() == []

    def test_delete_user_keeps_thoughts(
        self, client: TestClient, test_user: User, test_thought: Thought
    ):
        """Test that deleting a user leaves their thoughts."""
        client.delete(f"/users/{test_user.id}")
        thoughts = client.get("/thoughts").json()
        assert [t["id"] for t in thoughts] == [test_thought.id]

    def test_delete_user_not_found(self, client: TestClient):
        """Test that deleting an unknown user is not-found."""
        response = client.delete("/users/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404


class TestFriends:
    """Tests for attaching and detaching friends."""

    def test_add_friend(self, client: TestClient, test_user: User, other_user: User):
        """Test that a friend id is added and the user returned."""
        response = client.post(f"/users/{test_user.id}/friends/{other_user.id}")
        assert response.status_code == 201
        assert response.json()["friends"] == [other_user.id]

    def test_add_friend_is_not_symmetric(
        self, client: TestClient, test_user: User, other_user: User
    ):
        """Test that adding a friend does not add the reverse link."""
        client.post(f"/users/{test_user.id}/friends/{other_user.id}")
        other = client.get(f"/users/{other_user.id}").json()
        assert other["friends"] == []

    def test_add_then_remove_friend_restores_set(
        self, client: TestClient, test_user: User, other_user: User
    ):
        """Test that add then remove restores the friends set."""
        before = client.get(f"/users/{test_user.id}").json()["friends"]

        client.post(f"/users/{test_user.id}/friends/{other_user.id}")
        response = client.delete(f"/users/{test_user.id}/friends/{other_user.id}")
        assert response.status_code == 204

        after = client.get(f"/users/{test_user.id}").json()["friends"]
        assert after == before

    def test_remove_non_member_is_noop(self, client: TestClient, test_user: User):
        """Test that removing a non-member succeeds."""
        response = client.delete(f"/users/{test_user.id}/friends/not-a-friend")
        assert response.status_code == 204

    def test_add_friend_unknown_user(self, client: TestClient, other_user: User):
        """Test that adding a friend to an unknown user is not-found."""
        response = client.post(f"/users/missing/friends/{other_user.id}")
        assert response.status_code == 404
