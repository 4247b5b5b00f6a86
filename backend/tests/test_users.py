from __future__ import annotations

from backend.app.errors import NotFoundError
from backend.app.security import verify_password
from backend.app.services import UserService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_create_user_never_exposes_password(client, api, database):
    response = client.post(
        api("/users"),
        json={
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@biomed.test",
            "phone": "+15550001111",
            "password": "compiler",
        },
    )

    assert response.status_code == 201
    user = response.json()["data"]
    assert user["role"] == "STUDENT"
    assert user["status"] == "ACTIVE"
    assert "password" not in user
    assert "password_hash" not in user

    stored = database.fetch_one("SELECT password_hash FROM users WHERE id = :p0", {"p0": user["id"]})
    assert stored["password_hash"] != "compiler"
    assert verify_password("compiler", stored["password_hash"])


def test_create_user_validation_messages(client, api):
    missing = client.post(api("/users"), json={"first_name": "Solo"})
    assert missing.status_code == 400
    assert missing.json()["message"] == (
        "Missing required fields: first_name, last_name, email, phone, password"
    )

    base = {"first_name": "A", "last_name": "B", "email": "a@b.co", "phone": "123"}
    short = client.post(api("/users"), json={**base, "password": "12345"})
    assert short.status_code == 400
    assert short.json()["message"] == "Password must be at least 6 characters long"

    bad_email = client.post(api("/users"), json={**base, "email": "not-an-email", "password": "123456"})
    assert bad_email.status_code == 400
    assert bad_email.json()["message"] == "Invalid email format"


def test_duplicate_email_or_phone_conflicts(client, api, create_user):
    user = create_user()

    same_email = client.post(
        api("/users"),
        json={
            "first_name": "X",
            "last_name": "Y",
            "email": user["email"],
            "phone": "+10000000000",
            "password": "123456",
        },
    )
    same_phone = client.post(
        api("/users"),
        json={
            "first_name": "X",
            "last_name": "Y",
            "email": "fresh@biomed.test",
            "phone": user["phone"],
            "password": "123456",
        },
    )

    assert same_email.status_code == 409
    assert same_phone.status_code == 409
    assert same_email.json()["message"] == "Email or phone already exists"


def test_list_users_filters_and_paginates(client, api, create_user):
    create_user(first_name="Marie", role="INSTRUCTOR")
    create_user(first_name="Pierre")
    create_user(first_name="Irene", status="INACTIVE")

    everyone = client.get(api("/users")).json()
    assert everyone["pagination"] == {"page": 1, "limit": 20, "total": 3, "pages": 1}

    inactive = client.get(api("/users"), params={"status": "INACTIVE"}).json()
    assert [user["first_name"] for user in inactive["data"]] == ["Irene"]

    search = client.get(api("/users"), params={"search": "mar"}).json()
    assert [user["first_name"] for user in search["data"]] == ["Marie"]


def test_list_users_rejects_unknown_role(client, api):
    response = client.get(api("/users"), params={"role": "WIZARD"})

    assert response.status_code == 400
    assert "role" in response.json()["message"]


def test_instructors_include_role_or_flag(client, api, create_user):
    by_role = create_user(role="INSTRUCTOR")
    by_flag = create_user(is_instructor=True)
    create_user()
    create_user(role="INSTRUCTOR", status="INACTIVE")

    payload = client.get(api("/users/instructors"), params={"status": "ACTIVE"}).json()

    assert payload["pagination"]["total"] == 2
    assert {user["id"] for user in payload["data"]} == {by_role["id"], by_flag["id"]}

    all_instructors = client.get(api("/users/instructors")).json()
    assert all_instructors["pagination"]["total"] == 3


def test_get_user_by_id_and_email(client, api, create_user):
    user = create_user()

    assert client.get(api(f"/users/{user['id']}")).json()["data"] == user
    assert client.get(api(f"/users/email/{user['email']}")).json()["data"] == user
    assert client.get(api("/users/email/ghost@biomed.test")).status_code == 404
    assert client.get(api("/users/999")).json()["message"] == "User not found"


def test_update_user(client, api, create_user):
    user = create_user()

    response = client.put(
        api(f"/users/{user['id']}"),
        json={"biography": "Pathologist", "email": "ignored@biomed.test"},
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["biography"] == "Pathologist"
    assert updated["email"] == user["email"]


def test_update_user_without_fields(client, api, create_user):
    user = create_user()

    response = client.put(api(f"/users/{user['id']}"), json={"password": "new-secret"})

    assert response.status_code == 400
    assert response.json()["message"] == "No valid fields to update"


def test_change_status(client, api, create_user):
    user = create_user()

    response = client.patch(api(f"/users/{user['id']}/status"), json={"status": "INACTIVE"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "INACTIVE"

    invalid = client.patch(api(f"/users/{user['id']}/status"), json={"status": "BANNED"})
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid status. Must be ACTIVE or INACTIVE"

    missing = client.patch(api("/users/999/status"), json={"status": "ACTIVE"})
    assert missing.status_code == 404


def test_delete_user(client, api, create_user):
    user = create_user()

    response = client.delete(api(f"/users/{user['id']}"))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == user["id"]
    assert client.delete(api(f"/users/{user['id']}")).status_code == 404


def test_upload_profile_image_sets_url(client, api, create_user, media_client):
    user = create_user()

    response = client.post(
        api(f"/users/{user['id']}/profile-image"),
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 201
    uploaded = response.json()["data"]
    assert uploaded["cloudinary_id"].startswith("biomed/profiles/")
    assert uploaded["cloudinary_id"] in media_client.assets

    refreshed = client.get(api(f"/users/{user['id']}")).json()["data"]
    assert refreshed["profile_image_url"] == uploaded["url"]


def test_upload_profile_image_for_missing_user_uploads_nothing(client, api, media_client):
    response = client.post(
        api("/users/999/profile-image"),
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 404
    assert media_client.assets == {}


def test_upload_profile_image_discards_asset_when_user_update_fails(
    client, api, create_user, media_client, monkeypatch
):
    user = create_user()

    def vanished(database, user_id, url):
        raise NotFoundError("User not found")

    monkeypatch.setattr(UserService, "set_profile_image", staticmethod(vanished))

    response = client.post(
        api(f"/users/{user['id']}/profile-image"),
        files={"image": ("avatar.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 404
    assert len(media_client.destroyed) == 1
    assert media_client.destroyed[0].startswith("biomed/profiles/")
    assert media_client.assets == {}


def test_upload_profile_image_requires_a_file(client, api, create_user):
    user = create_user()

    response = client.post(api(f"/users/{user['id']}/profile-image"))

    assert response.status_code == 400
    assert response.json()["message"] == "No image file provided"
