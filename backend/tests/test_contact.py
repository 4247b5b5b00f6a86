from __future__ import annotations

VALID_MESSAGE = {
    "full_name": "Rosalind Franklin",
    "email": "rosalind@biomed.test",
    "country_code": "+44",
    "phone_number": "2071234567",
    "interest_topic": "Courses",
    "message": "Do you offer <b>crystallography</b> courses?",
    "agreed_to_terms": True,
}


def _submit(client, api, **overrides):
    return client.post(api("/contact/submit"), json={**VALID_MESSAGE, **overrides})


def test_submit_stores_message_and_notifies(client, api, mailer, notification_client):
    response = _submit(client, api)

    assert response.status_code == 201
    message = response.json()["data"]
    assert message["status"] == "new"
    assert message["agreed_to_terms"] is True
    assert message["message"] == VALID_MESSAGE["message"]

    destinations = [record["destination"] for record in notification_client.records]
    assert destinations == ["rosalind@biomed.test", mailer.admin_email]
    admin_email = notification_client.records[1]
    assert "&lt;b&gt;crystallography&lt;/b&gt;" in admin_email["html_text"]
    assert "<b>crystallography</b>" not in admin_email["html_text"]


def test_submit_validation(client, api):
    missing = _submit(client, api, message="")
    assert missing.status_code == 400
    assert missing.json()["message"] == "Full name, email, and message are required"

    bad_email = _submit(client, api, email="rosalind-at-kings")
    assert bad_email.json()["message"] == "Valid email address is required"

    no_terms = _submit(client, api, agreed_to_terms=False)
    assert no_terms.status_code == 400
    assert no_terms.json()["message"] == "You must agree to the terms and conditions"


def test_submit_survives_email_failures(client, api, notification_client, monkeypatch):
    def explode(**_kwargs):
        raise RuntimeError("smtp unreachable")

    monkeypatch.setattr(notification_client, "send_message", explode)

    response = _submit(client, api)

    assert response.status_code == 201
    assert client.get(api(f"/contact/{response.json()['data']['id']}")).status_code == 200


def test_list_filter_and_statistics(client, api):
    first = _submit(client, api).json()["data"]
    _submit(client, api, full_name="James Watson", email="james@biomed.test", message="Hello")
    _submit(client, api, full_name="Francis Crick", email="francis@biomed.test", message="Hi")
    client.put(api(f"/contact/{first['id']}/status"), json={"status": "resolved"})

    listing = client.get(api("/contact")).json()
    assert listing["pagination"] == {"page": 1, "limit": 10, "total": 3, "pages": 1}

    new_only = client.get(api("/contact"), params={"status": "new"}).json()
    assert new_only["pagination"]["total"] == 2

    search = client.get(api("/contact"), params={"search": "crick"}).json()
    assert [message["full_name"] for message in search["data"]] == ["Francis Crick"]

    stats = client.get(api("/contact/stats/summary")).json()["data"]
    assert stats == {"total": 3, "new": 2, "responded": 0, "resolved": 1}


def test_update_status(client, api):
    message = _submit(client, api).json()["data"]

    response = client.put(api(f"/contact/{message['id']}/status"), json={"status": "responded"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "responded"

    missing_status = client.put(api(f"/contact/{message['id']}/status"), json={})
    assert missing_status.json()["message"] == "Status is required"

    invalid = client.put(api(f"/contact/{message['id']}/status"), json={"status": "archived"})
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid status. Must be one of: new, responded, resolved"

    unknown = client.put(api("/contact/999/status"), json={"status": "resolved"})
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Message not found"


def test_delete_returns_the_removed_message(client, api):
    message = _submit(client, api).json()["data"]

    response = client.delete(api(f"/contact/{message['id']}"))

    assert response.status_code == 200
    assert response.json()["data"] == message
    assert client.get(api(f"/contact/{message['id']}")).status_code == 404
    assert client.delete(api(f"/contact/{message['id']}")).status_code == 404
