from flask import Blueprint, current_app, jsonify, request
import traceback

from errors import MissingInput, InternalError, error_response
from log import log
from services.storage import save_upload

upload_bp = Blueprint("upload", __name__)

@upload_bp.post("/api/photobooth/upload")
def upload():
    """
    Persist one uploaded file under the public uploads directory.
      multipart: file (required)
    -> { url }
    """
    file = request.files.get("file")
    if not file:
        return error_response(MissingInput("Missing file"))
    try:
        stored = save_upload(
            file.read(),
            file.filename,
            current_app.config["UPLOADS_DIR"],
            current_app.config["UPLOADS_URL_PREFIX"],
        )
    except Exception as e:
        log(f"[upload] ERROR: {e}\n{traceback.format_exc()}")
        return error_response(InternalError("Upload failed"))
    log(f"[upload {stored.name}] SAVED → {stored.path}")
    return jsonify({"url": stored.url}), 200
