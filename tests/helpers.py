"""Shared test helpers: an in-memory Bitmovin API served through httpx.MockTransport."""

from __future__ import annotations

import itertools
import json
from collections import defaultdict
from typing import Any

import httpx

ENDPOINT = "https://api.bitmovin.test/v1/"
_PREFIX = "/v1/"

# Collections that answer GET with a paginated listing.
LISTABLE = {
    "encoding/configurations/audio/aac",
    "encoding/configurations/video/h264",
    "encoding/encodings",
}


def _envelope(result: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"requestId": "req-test", "status": "SUCCESS", "data": {"result": result}},
    )


def _error(message: str, status_code: int = 400) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"requestId": "req-test", "status": "ERROR", "data": {"code": 1000, "message": message}},
    )


class FakeBitmovin:
    """Stores resources per collection path and records every request.

    Resource bodies are returned without ``customData``; it is only served by
    the ``.../customData`` sub-resource, as on the real API. Encoding and
    manifest states can be scripted through ``encoding_states`` and
    ``manifest_states``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.resources: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.encoding_states: dict[str, dict[str, Any]] = {}
        # Manifest statuses returned once the manifest was started; the last one repeats.
        self.manifest_states: dict[str, list[str]] = {}
        self.started_manifests: set[str] = set()
        self.failures: dict[tuple[str, str], str] = {}
        self._ids = itertools.count(1)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # Inspection helpers

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and self._path(r) == path]

    def posts_under(self, suffix: str) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and self._path(r).endswith(suffix) and r.content
        ]

    def add(self, collection: str, body: dict[str, Any]) -> str:
        resource_id = body.get("id") or f"id-{next(self._ids)}"
        self.resources[collection][resource_id] = {**body, "id": resource_id}
        return resource_id

    # Request handling

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path[len(_PREFIX):] if request.url.path.startswith(_PREFIX) else request.url.path

    def _find(self, path: str) -> tuple[str, str] | None:
        collection, _, resource_id = path.rpartition("/")
        if resource_id in self.resources.get(collection, {}):
            return collection, resource_id
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._path(request)
        method = request.method

        if (method, path) in self.failures:
            return _error(self.failures[(method, path)])

        parent, _, action = path.rpartition("/")

        if method == "GET" and action == "status":
            return self._status(parent)
        if method == "GET" and action == "customData":
            found = self._find(parent)
            if not found:
                return _error("Resource not found", 404)
            collection, resource_id = found
            return _envelope({"customData": self.resources[collection][resource_id].get("customData", {})})
        if method == "POST" and action in ("start", "stop"):
            return self._action(parent, action)

        if method == "GET":
            found = self._find(path)
            if found:
                collection, resource_id = found
                body = dict(self.resources[collection][resource_id])
                body.pop("customData", None)
                return _envelope(body)
            if path in LISTABLE:
                return self._list(path, request)
            return _error("Resource not found", 404)

        if method == "POST":
            body = json.loads(request.content) if request.content else {}
            resource_id = self.add(path, body)
            result = dict(self.resources[path][resource_id])
            result.pop("customData", None)
            return _envelope(result, 201)

        if method == "DELETE":
            found = self._find(path)
            if not found:
                return _error("Resource not found", 404)
            collection, resource_id = found
            del self.resources[collection][resource_id]
            return _envelope({"id": resource_id})

        return _error(f"Unsupported request {method} {path}", 405)

    def _list(self, path: str, request: httpx.Request) -> httpx.Response:
        items = list(self.resources.get(path, {}).values())
        offset = int(request.url.params.get("offset", 0))
        limit = int(request.url.params.get("limit", 25))
        page = [{k: v for k, v in item.items() if k != "customData"} for item in items[offset:offset + limit]]
        return _envelope({"totalCount": len(items), "items": page})

    def _status(self, resource_path: str) -> httpx.Response:
        collection, _, resource_id = resource_path.rpartition("/")
        if collection == "encoding/encodings":
            return _envelope(self.encoding_states.get(resource_id, {"status": "CREATED", "progress": 0}))
        if collection == "encoding/manifests/hls":
            if resource_id not in self.started_manifests:
                return _envelope({"status": "CREATED"})
            states = self.manifest_states.get(resource_id) or ["FINISHED"]
            state = states.pop(0) if len(states) > 1 else states[0]
            return _envelope({"status": state})
        return _error("Resource not found", 404)

    def _action(self, resource_path: str, action: str) -> httpx.Response:
        collection, _, resource_id = resource_path.rpartition("/")
        if collection == "encoding/manifests/hls" and action == "start":
            self.started_manifests.add(resource_id)
        elif collection == "encoding/encodings":
            status = "QUEUED" if action == "start" else "CANCELED"
            self.encoding_states[resource_id] = {"status": status, "progress": 0}
        return _envelope({"id": resource_id})
