from flask import Blueprint, Response, current_app, request
import traceback

from errors import PhotoboothError, MissingInput, MissingConfiguration, InternalError, error_response
from log import log
from services.model import edit_image_bytes

edit_bp = Blueprint("edit", __name__)

@edit_bp.post("/api/photobooth/edit")
def edit():
    """
    Single-image edit through the provider.
      - file        (file, required)
      - instruction (string, required)

    Returns the raw edited image bytes (Content-Type from the model, no-store).
    Errors: { error } with 400 / 500 / 502.
    """
    file = request.files.get("file")
    instruction = request.form.get("instruction") or ""
    try:
        if not file:
            raise MissingInput("Missing file")
        if not instruction.strip():
            raise MissingInput("Missing instruction")
        api_key = current_app.config.get("GEMINI_API_KEY")
        if not api_key:
            raise MissingConfiguration("Missing GEMINI_API_KEY")

        img_bytes, mime_type = edit_image_bytes(
            file.read(),
            instruction,
            api_key=api_key,
            mime_type=file.mimetype or None,
            model_name=current_app.config["GEMINI_MODEL"],
            timeout_seconds=current_app.config.get("GEMINI_TIMEOUT_SECONDS"),
        )
    except PhotoboothError as e:
        if e.status >= 500:
            log(f"[edit] ERROR {e.status}: {e.message}")
        return error_response(e)
    except Exception as e:
        log(f"[edit] ERROR: {e}\n{traceback.format_exc()}")
        return error_response(InternalError(str(e) or "Server error"))

    return Response(
        img_bytes,
        status=200,
        content_type=mime_type,
        headers={"Cache-Control": "no-store"},
    )
