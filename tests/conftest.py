"""Pytest fixtures for fittrack tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from fittrack.api.client import SheetsClient
from fittrack.api.images import ImageUploader
from fittrack.api.services import Services
from fittrack.config.settings import (
    BackendConfig,
    DefaultsConfig,
    ImageHostConfig,
    Settings,
)

BACKEND_URL = "https://script.example.com/macros/s/abc/exec"
API_KEY = "test-key"
CLOUDINARY_BASE = "https://images.example.com/v1_1"
CLOUD_NAME = "demo"

DASHBOARD_PAYLOAD = {
    "currentWeight": 82.4,
    "currentBodyFat": 18.5,
    "bmi": 25.1,
    "progressPercentage": 42.0,
    "targetWeight": 75,
    "oneRepMax": {"bench": 100, "squat": 140, "deadlift": 170},
    "personalRecords": [
        {"exercise": "Sentadilla", "weight": 120, "reps": 5, "date": "2024-01-10"},
        {"exercise": "Press de Banca", "weight": 85, "reps": 5, "date": "2024-01-09"},
        {"exercise": "Peso Muerto", "weight": 150, "reps": 3, "date": "2024-01-08"},
        {"exercise": "Press Militar", "weight": 50, "reps": 6, "date": "2024-01-07"},
        {"exercise": "Remo con Barra", "weight": 70, "reps": 8, "date": "2024-01-06"},
        {"exercise": "Dominadas", "weight": 10, "reps": 8, "date": "2024-01-05"},
    ],
    "habitsCompliance": 71,
    "recentPhotos": [
        {"date": "2024-01-05", "url": "https://img/1.jpg", "description": "Frente"},
    ],
}

Handler = Callable[[httpx.Request], httpx.Response]
Route = Union[dict, httpx.Response, Handler]


class FakeBackend:
    """Records requests and answers them from registered routes.

    Routes are keyed by the logical backend path (the ``path`` query
    parameter or JSON field) or by the image host action
    ("image/upload", "delete_by_token").
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Route] = {}

    def route(self, key: str, answer: Route) -> None:
        self.routes[key] = answer

    def ok(self, key: str, data: Any = None) -> None:
        self.route(key, {"success": True, "data": data})

    def fail(self, key: str, error: str) -> None:
        self.route(key, {"success": False, "error": error})

    @staticmethod
    def logical_path(request: httpx.Request) -> str:
        if request.url.host == "images.example.com":
            return request.url.path.split(f"/{CLOUD_NAME}/", 1)[1]
        if request.method == "GET":
            return request.url.params["path"]
        return json.loads(request.content)["path"]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = self.logical_path(request)
        answer = self.routes.get(key)
        if answer is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        if isinstance(answer, httpx.Response):
            return httpx.Response(
                answer.status_code, headers=answer.headers, content=answer.content
            )
        if callable(answer):
            return answer(request)
        return httpx.Response(200, json=answer)


def make_settings(
    url: Optional[str] = BACKEND_URL,
    api_key: Optional[str] = API_KEY,
    cloud_name: Optional[str] = CLOUD_NAME,
    upload_preset: Optional[str] = "unsigned",
) -> Settings:
    return Settings(
        backend=BackendConfig(url=url, api_key=api_key),
        images=ImageHostConfig(
            cloud_name=cloud_name,
            upload_preset=upload_preset,
            api_base=CLOUDINARY_BASE,
        ),
        defaults=DefaultsConfig(),
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def http_client(backend):
    client = httpx.Client(transport=httpx.MockTransport(backend))
    yield client
    client.close()


@pytest.fixture
def client(settings, http_client) -> SheetsClient:
    return SheetsClient(settings, http_client)


@pytest.fixture
def uploader(settings, http_client) -> ImageUploader:
    return ImageUploader(settings, http_client)


@pytest.fixture
def services(settings, http_client) -> Services:
    return Services.from_settings(settings, http_client)


@pytest.fixture
def image_file(tmp_path):
    """A small file with an image extension."""
    path = tmp_path / "front.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * 128)
    return path
