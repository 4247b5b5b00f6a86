from fastapi.testclient import TestClient

from backend.app.main import (
    API_PREFIX,
    _load_allowed_origins_from_env,
    _resolve_allowed_origins,
    _split_raw_origins,
    app,
)

FRONTEND_ORIGIN = "http://localhost:5173"


def test_split_raw_origins_accepts_commas_and_whitespace():
    raw = "http://localhost:5173, https://biomed.example.com https://admin.biomed.example.com"
    assert _split_raw_origins(raw) == [
        "http://localhost:5173",
        "https://biomed.example.com",
        "https://admin.biomed.example.com",
    ]


def test_load_allowed_origins_from_env_normalizes_and_sorts(monkeypatch):
    monkeypatch.setenv(
        "BACKEND_ALLOWED_ORIGINS",
        "https://biomed.example.com/ http://localhost:5173,,",
    )

    origins = _load_allowed_origins_from_env()

    assert origins == [
        "http://localhost:5173",
        "https://biomed.example.com",
    ]


def test_allowed_origins_default_to_wildcard(monkeypatch):
    monkeypatch.delenv("BACKEND_ALLOWED_ORIGINS", raising=False)

    assert _resolve_allowed_origins() == ["*"]


def test_preflight_includes_cors_headers():
    client = TestClient(app)

    response = client.options(
        f"{API_PREFIX}/blogs",
        headers={
            "Origin": FRONTEND_ORIGIN,
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == FRONTEND_ORIGIN
