from conftest import book_payload


def _create(client, **overrides):
    resp = client.post("/books", json=book_payload(**overrides))
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def _assert_error_body(resp, status):
    assert resp.status_code == status
    body = resp.get_json()
    assert body["status"] == status
    assert body["message"]
    assert body["timestamp"]
    assert body["path"] == resp.request.path
    return body


def test_health_text(client):
    resp = client.get("/books/health")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Book Service is running on port 8081"


def test_list_empty(client):
    resp = client.get("/books")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_create_returns_created_book(client):
    body = _create(client)
    assert body["id"] == 1
    assert body["title"] == "Cien años de soledad"
    assert body["category"] == "FICTION"
    assert body["totalCopies"] == 5
    assert body["availableCopies"] == 3
    assert body["available"] is True


def test_create_without_available_defaults_to_total(client):
    payload = book_payload()
    del payload["availableCopies"]
    resp = client.post("/books", json=payload)
    assert resp.status_code == 201
    assert resp.get_json()["availableCopies"] == 5


def test_create_validation_error_lists_fields(client):
    resp = client.post("/books", json={"title": "", "totalCopies": 0})
    body = _assert_error_body(resp, 400)
    errors = body["errors"]
    for field in ("title", "author", "isbn", "category", "totalCopies"):
        assert field in errors


def test_create_without_json_body(client):
    resp = client.post("/books", data="nope", content_type="text/plain")
    body = _assert_error_body(resp, 400)
    assert "body" in body["errors"]


def test_create_duplicate_isbn(client):
    _create(client)
    resp = client.post("/books", json=book_payload(title="Copy"))
    body = _assert_error_body(resp, 400)
    assert "already exists" in body["message"]
    assert "errors" not in body
    assert client.get("/books/1").get_json()["title"] == "Cien años de soledad"


def test_get_by_id_and_not_found(client):
    created = _create(client)
    resp = client.get(f"/books/{created['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["isbn"] == created["isbn"]

    body = _assert_error_body(client.get("/books/99"), 404)
    assert "99" in body["message"]


def test_update_full_replace(client):
    created = _create(client)
    payload = book_payload(title="El otoño del patriarca", isbn="978-0060882860",
                           totalCopies=4, availableCopies=4)
    resp = client.put(f"/books/{created['id']}", json=payload)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] == created["id"]
    assert body["title"] == "El otoño del patriarca"
    assert body["totalCopies"] == 4


def test_update_errors(client):
    a = _create(client)
    b = _create(client, isbn="B-1")
    _assert_error_body(client.put(f"/books/{b['id']}", json=book_payload(isbn=a["isbn"])), 400)
    _assert_error_body(client.put("/books/50", json=book_payload()), 404)
    body = _assert_error_body(client.put(f"/books/{a['id']}", json=book_payload(availableCopies=9)), 400)
    assert "availableCopies" in body["errors"]


def test_delete(client):
    created = _create(client)
    resp = client.delete(f"/books/{created['id']}")
    assert resp.status_code == 204
    assert resp.get_data() == b""
    _assert_error_body(client.get(f"/books/{created['id']}"), 404)
    _assert_error_body(client.delete(f"/books/{created['id']}"), 404)


def test_availability_patch_scenario(client):
    created = _create(client, totalCopies=5, availableCopies=3)
    url = f"/books/{created['id']}/availability"

    resp = client.patch(url, query_string={"copies": -1})
    assert resp.status_code == 200
    assert resp.get_data() == b""
    assert client.get(f"/books/{created['id']}").get_json()["availableCopies"] == 2

    body = _assert_error_body(client.patch(url, query_string={"copies": -5}), 400)
    assert "Available: 2" in body["message"]

    _assert_error_body(client.patch(url, query_string={"copies": 10}), 400)
    assert client.get(f"/books/{created['id']}").get_json()["availableCopies"] == 2


def test_availability_patch_bad_input(client):
    created = _create(client)
    body = _assert_error_body(client.patch(f"/books/{created['id']}/availability?copies=abc"), 400)
    assert "copies" in body["errors"]
    _assert_error_body(client.patch(f"/books/{created['id']}/availability"), 400)
    _assert_error_body(client.patch("/books/77/availability?copies=1"), 404)


def test_is_available_endpoint(client):
    created = _create(client, totalCopies=1, availableCopies=1)
    resp = client.get(f"/books/{created['id']}/available")
    assert resp.status_code == 200
    assert resp.get_json() is True

    client.patch(f"/books/{created['id']}/availability?copies=-1")
    assert client.get(f"/books/{created['id']}/available").get_json() is False
    _assert_error_body(client.get("/books/5/available"), 404)


def test_available_listing(client):
    _create(client, isbn="1", totalCopies=1, availableCopies=0)
    _create(client, isbn="2")
    resp = client.get("/books/available")
    assert resp.status_code == 200
    assert [b["isbn"] for b in resp.get_json()] == ["2"]


def test_category_filter(client):
    _create(client, isbn="1")
    _create(client, isbn="2", category="HISTORY")
    resp = client.get("/books/category?category=HISTORY")
    assert [b["isbn"] for b in resp.get_json()] == ["2"]

    body = _assert_error_body(client.get("/books/category?category=POETRY"), 400)
    assert "category" in body["errors"]
    _assert_error_body(client.get("/books/category"), 400)


def test_category_count_and_listing(client):
    _create(client, isbn="1")
    _create(client, isbn="2")
    resp = client.get("/books/category/count?category=fiction")
    assert resp.get_json() == {"category": "FICTION", "displayName": "Ficción", "count": 2}

    resp = client.get("/books/categories")
    assert resp.get_json()["SCIENCE"] == "Ciencia"


def test_search_by_author_and_title(client):
    _create(client)
    _create(client, isbn="2", title="La casa de los espíritus", author="Isabel Allende")

    resp = client.get("/books/search/author", query_string={"author": "garcía"})
    assert resp.status_code == 200
    assert [b["author"] for b in resp.get_json()] == ["Gabriel García Márquez"]

    resp = client.get("/books/search/title", query_string={"title": "CASA"})
    assert [b["title"] for b in resp.get_json()] == ["La casa de los espíritus"]

    resp = client.get("/books/search/author", query_string={"author": "allende", "category": "SCIENCE"})
    assert resp.get_json() == []

    _assert_error_body(client.get("/books/search/title"), 400)


def test_unknown_route_uses_error_body(client):
    _assert_error_body(client.get("/nope"), 404)
    _assert_error_body(client.post("/books/1"), 405)


def test_unexpected_error_is_500(app, client, monkeypatch):
    from book_catalog.services.book_service import BookService

    def boom():
        raise RuntimeError("db exploded")

    monkeypatch.setattr(BookService, "list_books", staticmethod(boom))
    body = _assert_error_body(client.get("/books"), 500)
    assert body["message"] == "Internal server error"


def test_search_with_uppercase_accents(client):
    _create(client)
    resp = client.get("/books/search/author", query_string={"author": "GARCÍA"})
    assert [b["author"] for b in resp.get_json()] == ["Gabriel García Márquez"]
    resp = client.get("/books/search/title", query_string={"title": "CIEN AÑOS"})
    assert [b["title"] for b in resp.get_json()] == ["Cien años de soledad"]


def test_oversized_numbers_are_client_errors(client):
    body = _assert_error_body(client.post("/books", json=book_payload(totalCopies=10**20)), 400)
    assert "totalCopies" in body["errors"]
    assert client.get("/books").get_json() == []

    _assert_error_body(client.get("/books/99999999999999999999"), 404)
    _assert_error_body(client.get("/books/99999999999999999999/available"), 404)
