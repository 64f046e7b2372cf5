from io import BytesIO
from PIL import Image, UnidentifiedImageError
from typing import Optional, Tuple
import base64, time, uuid

# pip install google-genai pillow python-dotenv
from google import genai
from google.genai import types

from errors import NoImageReturned
from log import log

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_INPUT_MIME = "image/jpeg"
DEFAULT_OUTPUT_MIME = "image/png"

# ---------- helpers ----------
_FORMAT_TO_MIME = {
    "PNG":  "image/png",
    "JPEG": "image/jpeg",
    "JPG":  "image/jpeg",
    "WEBP": "image/webp",
    "GIF":  "image/gif",
    "BMP":  "image/bmp",
    "TIFF": "image/tiff",
    "TIF":  "image/tiff",
}

def make_client(api_key: str, timeout_seconds: Optional[float] = None) -> genai.Client:
    if timeout_seconds:
        # HttpOptions.timeout is in milliseconds
        http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        return genai.Client(api_key=api_key, http_options=http_options)
    return genai.Client(api_key=api_key)

def infer_input_mime(image_bytes: bytes, declared: Optional[str]) -> str:
    if declared and declared != "application/octet-stream":
        return declared
    try:
        with Image.open(BytesIO(image_bytes)) as im:
            fmt = (im.format or "").upper()
    except (UnidentifiedImageError, OSError):
        fmt = ""
    return _FORMAT_TO_MIME.get(fmt, DEFAULT_INPUT_MIME)

def build_contents(image_bytes: bytes, mime_type: str, instruction: str) -> list:
    # one user turn: image first, then the instruction text
    return [
        types.Content(
            role="user",
            parts=[
                types.Part(inline_data=types.Blob(mime_type=mime_type, data=image_bytes)),
                types.Part(text=instruction),
            ],
        )
    ]

def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        return base64.b64decode(data)
    return bytes(data)

def extract_first_image(resp) -> Tuple[Optional[bytes], Optional[str]]:
    """First candidate only; returns the first part carrying inline image data."""
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return None, None
    parts = getattr(getattr(candidates[0], "content", None), "parts", None) or []
    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            mt = getattr(inline, "mime_type", None) or DEFAULT_OUTPUT_MIME
            return _as_bytes(inline.data), mt
    return None, None

# ---------- main (single image, bytes API) ----------
def edit_image_bytes(
    image_bytes: bytes,
    instruction: str,
    *,
    api_key: str,
    mime_type: Optional[str] = None,
    model_name: str = DEFAULT_MODEL,
    timeout_seconds: Optional[float] = None,
    client: Optional[genai.Client] = None,
) -> Tuple[bytes, str]:
    """
    Send one image plus an instruction to the model and return (bytes, mime_type)
    of the first image it hands back. Single call, no retries.
    Raises NoImageReturned when the response carries no inline image.
    """
    run_id = uuid.uuid4().hex[:8]
    _client = client or make_client(api_key, timeout_seconds)
    mime = infer_input_mime(image_bytes, mime_type)

    log(f"[edit {run_id}] INPUT: {len(image_bytes) / 1024.0:.1f} KB ({mime}), instruction={len(instruction)} chars")

    call_t0 = time.perf_counter()
    log(f"[edit {run_id}] CALL → model={model_name}")
    resp = _client.models.generate_content(
        model=model_name,
        contents=build_contents(image_bytes, mime, instruction),
    )
    log(f"[edit {run_id}] RECV ← {time.perf_counter() - call_t0:.2f}s")

    img_bytes, out_mime = extract_first_image(resp)
    if not img_bytes:
        log(f"[edit {run_id}] NO IMAGE in response")
        raise NoImageReturned("No image returned from model")

    log(f"[edit {run_id}] OK: {len(img_bytes) / 1024.0:.1f} KB ({out_mime})")
    return img_bytes, out_mime
