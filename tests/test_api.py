"""HTTP tests for the /todos routes, through the full application."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from todo_api.main import create_app


def create(client: TestClient, **body) -> dict:
    response = client.post("/todos", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestScenario:
    def test_buy_milk_lifecycle(self, client: TestClient) -> None:
        created = create(client, title="Buy milk")
        todo_id = created["id"]
        assert isinstance(todo_id, int)
        assert created["order"] == 0
        assert created["completed"] is False

        patched = client.patch(f"/todos/{todo_id}", json={"completed": True})
        assert patched.status_code == 200
        assert {k: patched.json()[k] for k in ("title", "order", "completed")} == {
            "title": "Buy milk", "order": 0, "completed": True,
        }

        assert client.delete(f"/todos/{todo_id}").status_code == 204
        assert client.get(f"/todos/{todo_id}").status_code == 404
        assert client.get("/todos").json() == []


class TestCreateAndRead:
    def test_should_render_absolute_url(self, client: TestClient) -> None:
        created = create(client, title="link me")

        assert created["url"] == f"http://testserver/todos/{created['id']}"

    def test_should_keep_given_order_and_completed(self, client: TestClient) -> None:
        created = create(client, title="x", order=7, completed=True)

        fetched = client.get(f"/todos/{created['id']}").json()

        assert fetched == created

    def test_should_list_all_todos(self, client: TestClient) -> None:
        ids = [create(client, title=t)["id"] for t in ("a", "b")]

        listed = client.get("/todos").json()

        assert [t["id"] for t in listed] == ids

    def test_should_reject_missing_title(self, client: TestClient) -> None:
        assert client.post("/todos", json={"order": 1}).status_code == 400

    def test_should_trim_path_id(self, client: TestClient) -> None:
        created = create(client, title="padded")

        assert client.get(f"/todos/%20{created['id']}%20").status_code == 200


class TestUpdate:
    def test_should_merge_only_present_fields(self, client: TestClient) -> None:
        created = create(client, title="A", order=1)

        patched = client.patch(f"/todos/{created['id']}", json={"title": "B"}).json()

        assert (patched["title"], patched["order"], patched["completed"]) == ("B", 1, False)
        assert client.get(f"/todos/{created['id']}").json() == patched

    def test_should_accept_post_as_patch_alias(self, client: TestClient) -> None:
        created = create(client, title="A")

        response = client.post(f"/todos/{created['id']}", json={"order": 3})

        assert response.status_code == 200
        assert response.json()["order"] == 3

    def test_should_return_404_for_unknown_id(self, client: TestClient) -> None:
        assert client.patch("/todos/999", json={"title": "ghost"}).status_code == 404

    def test_should_reject_null_field(self, client: TestClient) -> None:
        created = create(client, title="A")

        response = client.patch(f"/todos/{created['id']}", json={"title": None})

        assert response.status_code == 400


class TestDelete:
    def test_should_return_404_for_unknown_id(self, client: TestClient) -> None:
        assert client.delete("/todos/999").status_code == 404

    def test_should_delete_everything(self, client: TestClient) -> None:
        for title in ("a", "b", "c"):
            create(client, title=title)

        assert client.delete("/todos").status_code == 204
        assert client.get("/todos").json() == []


class TestBadInput:
    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "99999999999", "1_0", "%D9%A1"])
    def test_should_reject_malformed_id(self, client: TestClient, raw_id: str) -> None:
        response = client.get(f"/todos/{raw_id}")

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_should_reject_malformed_body(self, client: TestClient) -> None:
        response = client.post("/todos", content="{not json", headers={"content-type": "application/json"})

        assert response.status_code == 400

    @pytest.mark.parametrize("order", [2**31, -(2**31) - 1, 2**70])
    def test_should_reject_out_of_range_order_on_create(
        self, client: TestClient, order: int
    ) -> None:
        response = client.post("/todos", json={"title": "x", "order": order})

        assert response.status_code == 400
        assert "detail" in response.json()
        assert client.get("/todos").json() == []

    def test_should_reject_out_of_range_order_on_patch(self, client: TestClient) -> None:
        created = create(client, title="x", order=1)

        response = client.patch(f"/todos/{created['id']}", json={"order": 2**70})

        assert response.status_code == 400
        assert client.get(f"/todos/{created['id']}").json()["order"] == 1

    def test_should_accept_int32_bounds_for_order(self, client: TestClient) -> None:
        low = create(client, title="low", order=-(2**31))
        high = create(client, title="high", order=2**31 - 1)

        assert client.get(f"/todos/{low['id']}").json()["order"] == -(2**31)
        assert client.get(f"/todos/{high['id']}").json()["order"] == 2**31 - 1


class TestHttpGlue:
    def test_should_answer_cors_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/todos/1",
            headers={
                "Origin": "http://frontend.example",
                "Access-Control-Request-Method": "PATCH",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://frontend.example")

    def test_should_log_requests(self, make_settings) -> None:
        messages: list[str] = []
        app = create_app(make_settings(LOG_REQUESTS=True))

        with TestClient(app) as client:
            # create_app() resets loguru handlers: capture must be added afterwards
            handler_id = logger.add(lambda m: messages.append(m.record["message"]))
            try:
                client.get("/todos")
            finally:
                logger.remove(handler_id)

        assert any(m.startswith("GET /todos => 200") for m in messages)
