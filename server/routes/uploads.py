from flask import Blueprint, current_app, jsonify, send_from_directory
from werkzeug.exceptions import NotFound
import os

uploads_bp = Blueprint("uploads", __name__)

@uploads_bp.get("/uploads/<path:name>")
def serve_upload(name: str):
    # flat directory: no sub-paths, no '..'
    if os.path.basename(os.path.normpath(name)) != name:
        return jsonify({"error": "not found"}), 404
    try:
        return send_from_directory(current_app.config["UPLOADS_DIR"], name)
    except NotFound:
        return jsonify({"error": "not found"}), 404
