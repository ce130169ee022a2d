"""Negative & edge case tests for the Courses API."""

from fastapi.testclient import TestClient


def create_course(client: TestClient, title: str = "Temp Title", price=10):
    return client.post(
        "/api/courses",
        json={"title": title, "price": price, "description": "Desc"},
    )


def field_names(response):
    return {f["field"] for f in response.json()["fields"]}


class TestCourseNegative:
    def test_missing_title(self, test_client: TestClient):
        resp = test_client.post("/api/courses", json={"price": 10})
        assert resp.status_code == 422
        assert resp.json()["kind"] == "ValidationError"
        assert "title" in field_names(resp)

    def test_empty_title(self, test_client: TestClient):
        resp = create_course(test_client, title="")
        assert resp.status_code == 422
        assert "title" in field_names(resp)

    def test_whitespace_title(self, test_client: TestClient):
        resp = create_course(test_client, title="   ")
        assert resp.status_code == 422
        assert resp.json()["kind"] == "ValidationError"

    def test_negative_price(self, test_client: TestClient):
        resp = create_course(test_client, price=-1)
        assert resp.status_code == 422
        assert "price" in field_names(resp)

    def test_non_numeric_price(self, test_client: TestClient):
        resp = create_course(test_client, price="forty")
        assert resp.status_code == 422
        assert "price" in field_names(resp)

    def test_missing_price(self, test_client: TestClient):
        resp = test_client.post("/api/courses", json={"title": "No price"})
        assert resp.status_code == 422
        assert "price" in field_names(resp)

    def test_invalid_published_filter(self, test_client: TestClient):
        resp = test_client.get("/api/courses", params={"published": "maybe"})
        assert resp.status_code == 422
        assert resp.json()["kind"] == "ValidationError"

    def test_non_integer_course_id(self, test_client: TestClient):
        resp = test_client.get("/api/courses/not-a-number")
        assert resp.status_code == 422

    def test_get_missing_course(self, test_client: TestClient):
        resp = test_client.get("/api/courses/999999")
        assert resp.status_code == 404
        body = resp.json()
        assert body["kind"] == "NotFoundError"
        assert body["success"] is False

    def test_delete_missing_course(self, test_client: TestClient):
        resp = test_client.delete("/api/courses/999999")
        assert resp.status_code == 404

    def test_lessons_of_missing_course(self, test_client: TestClient):
        resp = test_client.get("/api/courses/999999/lessons")
        assert resp.status_code == 404
        assert resp.json()["kind"] == "NotFoundError"

    def test_unknown_route(self, test_client: TestClient):
        resp = test_client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["kind"] == "NotFoundError"

    def test_create_and_fetch_against_real_database(self, test_client: TestClient):
        created = create_course(test_client, title="Persisted")
        assert created.status_code == 201, created.text
        cid = created.json()["id"]
        fetched = test_client.get(f"/api/courses/{cid}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Persisted"
