import asyncio
import json

import httpx
import pytest

from formsmith.app import create_app
from formsmith.client import HTTPStore
from formsmith.errors import SchemaNotFound, StoreUnavailable
from formsmith.repo_json import JSONStorage


def make_store(handler):
    return HTTPStore("http://store.test/", transport=httpx.MockTransport(handler))


def test_create_posts_schema_and_returns_id(scenario_document):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "data": {"id": "abc"}})

    form_id = asyncio.run(make_store(handler).create(scenario_document))

    assert form_id == "abc"
    assert seen == {"method": "POST", "path": "/forms", "body": scenario_document}


def test_get_returns_data(scenario_document):
    def handler(request):
        assert request.url.path == "/forms/abc"
        return httpx.Response(200, json={"success": True, "data": {**scenario_document, "_id": "abc"}})

    document = asyncio.run(make_store(handler).get("abc"))

    assert document["_id"] == "abc"
    assert document["fields"] == scenario_document["fields"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404, json={"detail": "Form not found"}),
        httpx.Response(404, json={"success": False, "message": "Form not found"}),
        httpx.Response(200, json={"success": False, "message": "Form not found"}),
    ],
)
def test_get_missing_form(response):
    with pytest.raises(SchemaNotFound):
        asyncio.run(make_store(lambda request: response).get("abc"))


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["unexpected"]),
    ],
)
def test_unusable_responses_are_store_unavailable(response):
    store = make_store(lambda request: response)

    with pytest.raises(StoreUnavailable):
        asyncio.run(store.submit({"formId": "abc", "answers": [], "submittedAt": "2026-10-18T09:30:00Z"}))


def test_transport_error_is_store_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = make_store(handler)

    with pytest.raises(StoreUnavailable):
        asyncio.run(store.list())
    with pytest.raises(StoreUnavailable):
        asyncio.run(store.get("abc"))


def test_list_tolerates_non_list_data():
    store = make_store(lambda request: httpx.Response(200, json={"success": True, "data": None}))

    assert asyncio.run(store.list()) == []


def test_round_trip_against_app(tmp_path, scenario_document):
    app = create_app(storage=JSONStorage(tmp_path / "jsonstore.json"))
    store = HTTPStore("http://store.test", transport=httpx.ASGITransport(app=app))

    async def scenario():
        form_id = await store.create(scenario_document)
        fetched = await store.get(form_id)
        await store.submit(
            {
                "formId": form_id,
                "answers": [{"label": "Name", "value": "Ann"}, {"label": "Color", "value": "Blue"}],
                "submittedAt": "2026-10-18T09:30:00.000Z",
            }
        )
        return form_id, fetched, await store.list()

    form_id, fetched, listed = asyncio.run(scenario())

    assert fetched == {**scenario_document, "_id": form_id}
    assert [item["formId"] for item in listed] == [form_id]
    with pytest.raises(SchemaNotFound):
        asyncio.run(store.get("missing"))
