from __future__ import annotations

from decimal import Decimal


def test_create_course_with_prices(client, api):
    response = client.post(
        api("/courses"),
        json={
            "title": "Clinical pharmacology",
            "price": "149.99",
            "discount_flag": True,
            "discounted_price": "99.50",
            "level": "advanced",
            "category_id": 4,
        },
    )

    assert response.status_code == 201
    course = response.json()["data"]
    assert Decimal(str(course["price"])) == Decimal("149.99")
    assert Decimal(str(course["discounted_price"])) == Decimal("99.50")
    assert course["discount_flag"] is True
    assert course["status"] == "active"
    assert course["date_added"]
    assert course["last_modified"]


def test_create_course_requires_title(client, api):
    response = client.post(api("/courses"), json={"level": "beginner"})

    assert response.status_code == 400
    assert response.json()["message"] == "Title is required"


def test_list_courses_orders_by_id_descending(client, api, create_course):
    ids = [create_course()["id"] for _ in range(3)]

    payload = client.get(api("/courses")).json()

    assert payload["count"] == 3
    assert [course["id"] for course in payload["data"]] == sorted(ids, reverse=True)


def test_filtered_courses(client, api, create_course):
    create_course(title="Intro to anatomy", level="beginner", is_free_course=True)
    create_course(title="Advanced anatomy", level="advanced")
    create_course(title="Biochemistry", level="beginner")

    response = client.get(
        api("/courses/filtered"), params={"search": "ANATOMY", "level": "beginner"}
    )

    payload = response.json()
    assert [course["title"] for course in payload["data"]] == ["Intro to anatomy"]
    assert payload["pagination"]["total"] == 1

    free = client.get(api("/courses/filtered"), params={"is_free_course": True}).json()
    assert [course["title"] for course in free["data"]] == ["Intro to anatomy"]


def test_courses_by_category(client, api, create_course):
    for _ in range(3):
        create_course(category_id=9)
    create_course(category_id=1)

    response = client.get(api("/courses/category/9"), params={"limit": 2})

    payload = response.json()
    assert response.status_code == 200
    assert len(payload["data"]) == 2
    assert payload["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert all(course["category_id"] == 9 for course in payload["data"])


def test_get_course_not_found(client, api):
    response = client.get(api("/courses/77"))

    assert response.status_code == 404
    assert response.json()["message"] == "Course not found"


def test_update_course(client, api, create_course):
    course = create_course(level="beginner")

    response = client.put(api(f"/courses/{course['id']}"), json={"price": "10.00", "level": "intermediate"})

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["level"] == "intermediate"
    assert Decimal(str(updated["price"])) == Decimal("10.00")
    assert updated["title"] == course["title"]


def test_update_course_without_fields_is_rejected(client, api, create_course):
    course = create_course()

    response = client.put(api(f"/courses/{course['id']}"), json={"date_added": "2021-01-01"})

    assert response.status_code == 400
    assert client.get(api(f"/courses/{course['id']}")).json()["data"] == course


def test_delete_course(client, api, create_course):
    course = create_course()

    assert client.delete(api(f"/courses/{course['id']}")).status_code == 200
    assert client.get(api(f"/courses/{course['id']}")).status_code == 404
    assert client.delete(api(f"/courses/{course['id']}")).status_code == 404
