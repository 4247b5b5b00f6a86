from __future__ import annotations


def _subscribe(client, api, email):
    return client.post(api("/newsletter/subscribe"), json={"email": email})


def test_subscribe_creates_active_subscriber_and_sends_welcome(client, api, notification_client):
    response = _subscribe(client, api, "reader@biomed.test")

    assert response.status_code == 201
    payload = response.json()
    assert payload["message"] == "Successfully subscribed to newsletter!"
    assert payload["data"]["email"] == "reader@biomed.test"
    assert payload["data"]["status"] == "active"

    assert [record["destination"] for record in notification_client.records] == ["reader@biomed.test"]
    assert "Welcome" in notification_client.records[0]["subject"]


def test_subscribe_twice_is_a_conflict_and_keeps_one_row(client, api, database):
    assert _subscribe(client, api, "twice@biomed.test").status_code == 201

    response = _subscribe(client, api, "twice@biomed.test")

    assert response.status_code == 409
    assert response.json()["message"] == "This email is already subscribed"
    count = database.fetch_scalar(
        "SELECT COUNT(*) FROM newsletter_subscribers WHERE email = :p0", {"p0": "twice@biomed.test"}
    )
    assert count == 1


def test_resubscribe_after_unsubscribe_reactivates(client, api, database, notification_client):
    _subscribe(client, api, "back@biomed.test")
    unsubscribed = client.post(api("/newsletter/unsubscribe"), json={"email": "back@biomed.test"})
    assert unsubscribed.status_code == 200
    assert unsubscribed.json()["data"]["status"] == "unsubscribed"

    response = _subscribe(client, api, "back@biomed.test")

    assert response.status_code == 200
    assert response.json()["message"] == "Welcome back! You have been resubscribed"
    assert response.json()["data"]["status"] == "active"
    assert database.fetch_scalar("SELECT COUNT(*) FROM newsletter_subscribers") == 1
    assert len(notification_client.records) == 3


def test_subscribe_validates_email(client, api):
    missing = client.post(api("/newsletter/subscribe"), json={})
    invalid = _subscribe(client, api, "nope")

    assert missing.status_code == 400
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Valid email is required"


def test_subscribe_succeeds_when_email_delivery_fails(client, api, notification_client, monkeypatch):
    def explode(**_kwargs):
        raise RuntimeError("provider down")

    monkeypatch.setattr(notification_client, "send_message", explode)

    response = _subscribe(client, api, "resilient@biomed.test")

    assert response.status_code == 201


def test_confirm_and_unsubscribe_unknown_email(client, api):
    confirm = client.post(api("/newsletter/confirm"), json={"email": "ghost@biomed.test"})
    unsubscribe = client.post(api("/newsletter/unsubscribe"), json={"email": "ghost@biomed.test"})

    assert confirm.status_code == 404
    assert unsubscribe.status_code == 404
    assert unsubscribe.json()["message"] == "Subscriber not found"


def test_confirm_existing_subscriber(client, api):
    _subscribe(client, api, "known@biomed.test")

    response = client.post(api("/newsletter/confirm"), json={"email": "known@biomed.test"})

    assert response.status_code == 200
    assert response.json()["message"] == "You are already subscribed to our newsletter!"


def test_unsubscribe_requires_email(client, api):
    response = client.post(api("/newsletter/unsubscribe"), json={"email": "  "})

    assert response.status_code == 400
    assert response.json()["message"] == "Email is required"


def test_list_get_and_statistics(client, api):
    for email in ("a@biomed.test", "b@biomed.test", "c@other.test"):
        _subscribe(client, api, email)
    client.post(api("/newsletter/unsubscribe"), json={"email": "c@other.test"})

    listing = client.get(api("/newsletter"), params={"status": "active"}).json()
    assert listing["pagination"]["total"] == 2

    search = client.get(api("/newsletter"), params={"search": "OTHER"}).json()
    assert [subscriber["email"] for subscriber in search["data"]] == ["c@other.test"]

    single = client.get(api("/newsletter/a@biomed.test"))
    assert single.status_code == 200
    assert client.get(api("/newsletter/zzz@biomed.test")).status_code == 404

    stats = client.get(api("/newsletter/stats/summary")).json()["data"]
    assert stats == {"total": 3, "active": 2, "pending": 0, "unsubscribed": 1}
