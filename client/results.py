from dataclasses import dataclass
from typing import Union

UPLOAD_FALLBACK = "Upload failed"
EDIT_FALLBACK = "Edit failed (check your /api/photobooth/edit backend)"

@dataclass(frozen=True)
class UploadOk:
    url: str

@dataclass(frozen=True)
class EditOk:
    data: bytes
    content_type: str

@dataclass(frozen=True)
class Err:
    message: str

UploadResult = Union[UploadOk, Err]
EditResult = Union[EditOk, Err]

def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        return None

def _error_message(resp, fallback: str) -> str:
    data = _safe_json(resp)
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return fallback

def decode_upload_response(resp) -> UploadResult:
    if not 200 <= resp.status_code < 300:
        return Err(_error_message(resp, UPLOAD_FALLBACK))
    data = _safe_json(resp)
    if isinstance(data, dict) and isinstance(data.get("url"), str):
        return UploadOk(data["url"])
    return Err(UPLOAD_FALLBACK)

def decode_edit_response(resp) -> EditResult:
    if not 200 <= resp.status_code < 300:
        return Err(_error_message(resp, EDIT_FALLBACK))
    content_type = resp.headers.get("Content-Type") or "image/png"
    return EditOk(data=resp.content, content_type=content_type)
