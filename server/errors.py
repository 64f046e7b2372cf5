from flask import jsonify

class PhotoboothError(Exception):
    """Handler failure that maps onto a JSON `{"error": ...}` response."""
    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class MissingInput(PhotoboothError):
    status = 400

class MissingConfiguration(PhotoboothError):
    status = 500

class NoImageReturned(PhotoboothError):
    status = 502

class InternalError(PhotoboothError):
    status = 500

def error_response(err: PhotoboothError):
    return jsonify({"error": err.message}), err.status
