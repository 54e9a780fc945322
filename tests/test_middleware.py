from fastapi import FastAPI

from fastapi.testclient import TestClient

from docscan.middleware.ratelimit import RateLimitMiddleware, SlidingWindow, make_key_func
from docscan.utils.security import create_access_token


def _limited_app(max_calls=2):
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=60,
        max_calls=max_calls,
        key_func=make_key_func("test-secret"),
        include_path_prefixes=("/scanUpload",),
    )

    @app.post("/scanUpload")
    def scan():
        return {"ok": True}

    @app.get("/free")
    def free():
        return {"ok": True}

    return app


def test_rate_limit_blocks_after_max_calls():
    client = TestClient(_limited_app())
    assert client.post("/scanUpload").status_code == 200
    assert client.post("/scanUpload").status_code == 200

    response = client.post("/scanUpload")
    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) >= 1

    # paths outside the guarded prefixes are untouched
    assert client.get("/free").status_code == 200


def test_rate_limit_keys_by_session_subject():
    client = TestClient(_limited_app(max_calls=1))
    alice = {"Authorization": f"Bearer {create_access_token('1', 'user')}"}
    bob = {"Authorization": f"Bearer {create_access_token('2', 'user')}"}

    assert client.post("/scanUpload", headers=alice).status_code == 200
    assert client.post("/scanUpload", headers=alice).status_code == 429
    assert client.post("/scanUpload", headers=bob).status_code == 200


def test_sliding_window_forgets_idle_callers():
    limiter = SlidingWindow(window_seconds=10, max_calls=1)
    for n in range(200):
        assert limiter.hit(f"user:{n}", now=0.0) is None
    assert len(limiter) == 200

    assert limiter.hit("user:0", now=5.0) == 5
    # first call after the window triggers a sweep of every expired key
    assert limiter.hit("user:late", now=11.0) is None
    assert len(limiter) == 1


def test_sliding_window_drops_emptied_key_on_touch():
    limiter = SlidingWindow(window_seconds=10, max_calls=1)
    limiter.hit("a", now=0.0)
    limiter.hit("b", now=1.0)
    limiter.sweep(2.0)
    assert limiter.hit("a", now=10.5) is None
    assert len(limiter) == 2
    limiter.sweep(11.5)
    assert len(limiter) == 1

def test_ui_pages(client):
    assert client.get("/ui").status_code == 200

    response = client.get("/ui/dashboard", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/ui"

    client.post("/auth/register", json={"username": "alice", "password": "pw1"})
    client.post("/auth/login", json={"username": "alice", "password": "pw1"})
    response = client.get("/ui/dashboard")
    assert response.status_code == 200
    assert "Scan a document" in response.text


def test_root(client):
    assert client.get("/").json() == {"name": "DocScan", "env": "dev"}


def test_ui_script_renders_api_data_as_text(client):
    script = client.get("/static/app.js")
    assert script.status_code == 200
    assert "innerHTML" not in script.text
    assert "createTextNode" in script.text
