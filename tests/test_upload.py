import io, os, re

from routes import upload as upload_route

URL_RE = re.compile(r"^/uploads/\d+-[0-9a-f-]{36}\.jpg$")


def _jpeg_10kb():
    return b"\xff\xd8\xff\xe0" + os.urandom(10 * 1024 - 4)


def test_upload_then_fetch_returns_identical_bytes(client, uploads_dir):
    data = _jpeg_10kb()
    r = client.post("/api/photobooth/upload",
                    data={"file": (io.BytesIO(data), "selfie.JPG", "image/jpeg")},
                    content_type="multipart/form-data")
    assert r.status_code == 200
    url = r.get_json()["url"]
    assert URL_RE.match(url)

    got = client.get(url)
    assert got.status_code == 200
    assert got.data == data
    assert len(os.listdir(uploads_dir)) == 1


def test_upload_without_file_is_missing_input(client, uploads_dir):
    r = client.post("/api/photobooth/upload", data={}, content_type="multipart/form-data")
    assert r.status_code == 400
    assert r.get_json() == {"error": "Missing file"}
    assert not uploads_dir.exists()


def test_upload_failure_is_generic_500(client, monkeypatch):
    def boom(*a, **kw):
        raise PermissionError("/secret/path is read-only")
    monkeypatch.setattr(upload_route, "save_upload", boom)

    r = client.post("/api/photobooth/upload",
                    data={"file": (io.BytesIO(b"abc"), "a.png", "image/png")},
                    content_type="multipart/form-data")
    assert r.status_code == 500
    assert r.get_json() == {"error": "Upload failed"}
    assert b"Traceback" not in r.data


def test_upload_too_large(app, uploads_dir):
    app.config["MAX_CONTENT_LENGTH"] = 1024
    r = app.test_client().post("/api/photobooth/upload",
                               data={"file": (io.BytesIO(os.urandom(4096)), "a.png", "image/png")},
                               content_type="multipart/form-data")
    assert r.status_code == 413
    assert r.get_json() == {"error": "File too large"}
    assert not uploads_dir.exists()


def test_serving_unknown_or_nested_names_is_404(client):
    assert client.get("/uploads/nope.png").status_code == 404
    assert client.get("/uploads/../config.py").status_code == 404
