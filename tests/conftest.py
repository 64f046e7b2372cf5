import base64, io
from types import SimpleNamespace

import pytest

from app import create_app
from services import model

PNG_SIGNATURE = b"\x89PNG"


@pytest.fixture
def uploads_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(uploads_dir):
    return create_app({
        "TESTING": True,
        "UPLOADS_DIR": str(uploads_dir),
        "GEMINI_API_KEY": "test-key",
        "GEMINI_MODEL": "test-model",
        "GEMINI_TIMEOUT_SECONDS": 5,
    })


@pytest.fixture
def client(app):
    return app.test_client()


# ---------- fake provider ----------
def inline_part(data, mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)

def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)

def response_with(*candidate_parts):
    """Each positional arg is the parts list of one candidate."""
    return SimpleNamespace(candidates=[
        SimpleNamespace(content=SimpleNamespace(role="model", parts=list(parts)))
        for parts in candidate_parts
    ])


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, *, model, contents, **kwargs):
        self.calls.append({"model": model, "contents": contents, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


class FakeGenaiClient:
    def __init__(self, response=None, error=None):
        self.models = FakeModels(response, error)
        self.created_with = None


@pytest.fixture
def fake_provider(monkeypatch):
    """Swap the provider client factory; returns the fake so tests can set its response."""
    fake = FakeGenaiClient(response=response_with([inline_part(base64.b64encode(PNG_SIGNATURE).decode())]))

    def _make_client(api_key, timeout_seconds=None):
        fake.created_with = (api_key, timeout_seconds)
        return fake

    monkeypatch.setattr(model, "make_client", _make_client)
    return fake


# ---------- requests-like adapter over the Flask test client ----------
class _Resp:
    def __init__(self, r):
        self.status_code = r.status_code
        self.headers = r.headers
        self.content = r.data

    def json(self):
        import json
        return json.loads(self.content.decode("utf-8"))

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


class FlaskSession:
    """Enough of requests.Session for the controller, backed by a Flask test client."""

    def __init__(self, test_client, base_url="http://photobooth.test"):
        self.test_client = test_client
        self.base_url = base_url
        self.closed = False

    def _path(self, url):
        assert url.startswith(self.base_url), url
        return url[len(self.base_url):]

    def post(self, url, files=None, data=None, timeout=None):
        form = dict(data or {})
        for field, (name, content, mime) in (files or {}).items():
            form[field] = (io.BytesIO(content), name, mime)
        r = self.test_client.post(self._path(url), data=form, content_type="multipart/form-data")
        return _Resp(r)

    def get(self, url, timeout=None):
        return _Resp(self.test_client.get(self._path(url)))

    def close(self):
        self.closed = True


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)


# ---------- fake camera device ----------
class FakeCapture:
    def __init__(self, frames=None, opened=True):
        self.frames = list(frames or [])
        self.opened = opened
        self.released = False
        self.props = {}

    def isOpened(self):
        return self.opened and not self.released

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True
