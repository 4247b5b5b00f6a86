from __future__ import annotations


def test_create_blog_returns_stored_record(client, api):
    response = client.post(
        api("/blogs"),
        json={
            "title": "Cardiac anatomy",
            "slug": "cardiac-anatomy",
            "category_id": 2,
            "author_id": 5,
            "content": "The heart has four chambers.",
            "short_description": "Basics",
        },
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Blog created successfully"
    blog = payload["data"]
    assert blog["id"] > 0
    assert blog["slug"] == "cardiac-anatomy"
    assert blog["status"] == "draft"
    assert blog["visibility"] == "private"
    assert blog["allow_comments"] is True
    assert blog["is_popular"] is False
    assert "timestamp" in payload


def test_create_alias_route(client, api):
    response = client.post(
        api("/blogs/create"),
        json={"title": "T", "slug": "t", "category_id": 1, "author_id": 1, "content": "c"},
    )

    assert response.status_code == 201


def test_create_blog_requires_core_fields(client, api):
    response = client.post(api("/blogs"), json={"title": "Missing the rest"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Bad Request"
    assert payload["message"] == "Title, content, category_id, author_id, and slug are required"


def test_create_blog_rejects_wrongly_typed_field(client, api):
    response = client.post(
        api("/blogs"),
        json={"title": "T", "slug": "s", "category_id": "cardio", "author_id": 1, "content": "c"},
    )

    assert response.status_code == 400
    assert "category_id" in response.json()["message"]


def test_duplicate_slug_is_a_conflict(client, api, create_blog):
    create_blog(slug="same-slug")

    response = client.post(
        api("/blogs"),
        json={"title": "Other", "slug": "same-slug", "category_id": 1, "author_id": 1, "content": "c"},
    )

    assert response.status_code == 409
    assert response.json()["message"] == "A blog with this slug already exists"


def test_list_blogs_returns_newest_first_with_count(client, api, create_blog):
    first = create_blog()
    second = create_blog()

    response = client.get(api("/blogs"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 2
    assert [blog["id"] for blog in payload["data"]] == [second["id"], first["id"]]


def test_get_blog_by_id_and_slug(client, api, create_blog):
    blog = create_blog(slug="lungs")

    by_id = client.get(api(f"/blogs/{blog['id']}"))
    by_slug = client.get(api("/blogs/slug/lungs"))

    assert by_id.status_code == 200
    assert by_slug.status_code == 200
    assert by_id.json()["data"]["id"] == by_slug.json()["data"]["id"] == blog["id"]


def test_missing_blog_is_not_found(client, api):
    assert client.get(api("/blogs/999")).status_code == 404
    response = client.get(api("/blogs/slug/nowhere"))
    assert response.status_code == 404
    assert response.json()["message"] == "Blog not found"


def test_filtered_search_counts_matching_rows(client, api, create_blog):
    create_blog(title="foo")
    create_blog(title="foobar")
    create_blog(title="baz")

    response = client.get(api("/blogs/filtered"), params={"search": "foo"})

    assert response.status_code == 200
    payload = response.json()
    assert sorted(blog["title"] for blog in payload["data"]) == ["foo", "foobar"]
    assert payload["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}


def test_filtered_combines_filters_and_paginates(client, api, create_blog):
    for _ in range(3):
        create_blog(category_id=7, status="published")
    create_blog(category_id=7, status="draft")
    create_blog(category_id=8, status="published")

    response = client.get(
        api("/blogs/filtered"),
        params={"category_id": 7, "status": "published", "page": 2, "limit": 2},
    )

    payload = response.json()
    assert len(payload["data"]) == 1
    assert payload["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}


def test_filtered_boolean_false_is_a_filter(client, api, create_blog):
    create_blog(is_popular=True)
    create_blog(is_popular=False)

    response = client.get(api("/blogs/filtered"), params={"is_popular": "false"})

    payload = response.json()
    assert payload["pagination"]["total"] == 1
    assert payload["data"][0]["is_popular"] is False


def test_filtered_page_past_the_end_is_empty(client, api, create_blog):
    create_blog()

    response = client.get(api("/blogs/filtered"), params={"page": 5})

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"] == []
    assert payload["pagination"] == {"page": 5, "limit": 10, "total": 1, "pages": 1}


def test_filtered_page_beyond_integer_range_is_empty(client, api, create_blog):
    create_blog()

    response = client.get(api("/blogs/filtered"), params={"page": "99999999999999999999"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"] == []
    assert payload["pagination"]["total"] == 1
    assert payload["pagination"]["pages"] == 1


def test_repeated_filtered_listing_is_identical(client, api, create_blog):
    for _ in range(3):
        create_blog(category_id=4)
    create_blog(category_id=5)
    params = {"category_id": 4, "limit": 2}

    first = client.get(api("/blogs/filtered"), params=params).json()
    second = client.get(api("/blogs/filtered"), params=params).json()

    assert second["data"] == first["data"]
    assert second["pagination"] == first["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 3,
        "pages": 2,
    }


def test_filtered_ignores_malformed_paging(client, api, create_blog):
    create_blog()

    response = client.get(api("/blogs/filtered"), params={"page": "zero", "limit": "-3"})

    assert response.status_code == 200
    assert response.json()["pagination"]["page"] == 1
    assert response.json()["pagination"]["limit"] == 10


def test_search_treats_wildcards_literally(client, api, create_blog):
    create_blog(title="100% organic")
    create_blog(title="1000 organic")

    response = client.get(api("/blogs/filtered"), params={"search": "0%"})

    assert [blog["title"] for blog in response.json()["data"]] == ["100% organic"]


def test_update_changes_only_supplied_fields(client, api, create_blog):
    blog = create_blog(short_description="before")

    response = client.put(
        api(f"/blogs/{blog['id']}"),
        json={"title": "After", "status": "published"},
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["title"] == "After"
    assert updated["status"] == "published"
    assert updated["short_description"] == "before"
    assert updated["slug"] == blog["slug"]


def test_update_without_writable_fields_leaves_record_unchanged(client, api, create_blog):
    blog = create_blog()

    response = client.put(api(f"/blogs/{blog['id']}"), json={"id": 42, "created_at": "2020-01-01"})

    assert response.status_code == 400
    assert response.json()["message"] == "No valid fields to update"
    assert client.get(api(f"/blogs/{blog['id']}")).json()["data"] == blog


def test_update_rejects_null_for_required_column(client, api, create_blog):
    blog = create_blog()

    response = client.put(api(f"/blogs/{blog['id']}"), json={"title": None})

    assert response.status_code == 400


def test_update_missing_blog_is_not_found(client, api):
    response = client.put(api("/blogs/404"), json={"title": "x"})

    assert response.status_code == 404


def test_update_to_existing_slug_is_a_conflict(client, api, create_blog):
    create_blog(slug="taken")
    blog = create_blog(slug="free")

    response = client.put(api(f"/blogs/{blog['id']}"), json={"slug": "taken"})

    assert response.status_code == 409


def test_delete_blog(client, api, create_blog):
    blog = create_blog()

    response = client.delete(api(f"/blogs/{blog['id']}"))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == blog["id"]
    assert client.get(api(f"/blogs/{blog['id']}")).status_code == 404
    assert client.delete(api(f"/blogs/{blog['id']}")).status_code == 404
