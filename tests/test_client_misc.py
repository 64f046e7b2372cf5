import pytest

from client.__main__ import parse_args
from client.images import SelectedImage
from client.presets import PRESETS, preset_text
from client.results import UPLOAD_FALLBACK, Err, UploadOk, decode_upload_response


class Resp:
    def __init__(self, status_code, payload=None, raw=False):
        self.status_code = status_code
        self.payload = payload
        self.raw = raw
        self.headers = {}
        self.content = b""

    def json(self):
        if self.raw:
            raise ValueError("no json")
        return self.payload


@pytest.mark.parametrize("resp,expected", [
    (Resp(200, {"url": "/uploads/a.png"}), UploadOk("/uploads/a.png")),
    (Resp(200, {"nope": 1}), Err(UPLOAD_FALLBACK)),
    (Resp(200, raw=True), Err(UPLOAD_FALLBACK)),
    (Resp(400, {"error": "Missing file"}), Err("Missing file")),
    (Resp(500, {"error": 42}), Err(UPLOAD_FALLBACK)),
    (Resp(502, raw=True), Err(UPLOAD_FALLBACK)),
])
def test_decode_upload_response(resp, expected):
    assert decode_upload_response(resp) == expected


@pytest.mark.parametrize("size,label", [
    (512, "512 B"),
    (10 * 1024, "10.0 KB"),
    (3 * 1024 * 1024 + 1024 * 512, "3.50 MB"),
])
def test_size_label(size, label):
    assert SelectedImage(b"x" * size, "image/png", "a.png").size_label == label


def test_from_path_guesses_type(tmp_path):
    p = tmp_path / "shot.jpg"
    p.write_bytes(b"\xff\xd8\xff")
    img = SelectedImage.from_path(p)
    assert (img.name, img.mime_type, img.data) == ("shot.jpg", "image/jpeg", b"\xff\xd8\xff")


def test_presets():
    assert [p.label for p in PRESETS] == ["Gov / Civil Service", "Corporate", "Student ID"]
    assert preset_text(1).startswith("Corporate headshot.")
    with pytest.raises(IndexError):
        preset_text(3)


def test_cli_args():
    args = parse_args(["--file", "me.png", "--instruction", "noir", "--save-only"])
    assert args.file == "me.png" and args.instruction == "noir" and args.save_only
    with pytest.raises(SystemExit):
        parse_args(["--file", "a.png", "--camera"])
