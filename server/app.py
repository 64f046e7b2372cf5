from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config
from routes.edit import edit_bp
from routes.upload import upload_bp
from routes.uploads import uploads_bp

def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    CORS(app, origins=app.config["CORS_ORIGINS"])

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return jsonify({"error": "File too large"}), 413

    # routes
    app.register_blueprint(upload_bp)
    app.register_blueprint(edit_bp)
    app.register_blueprint(uploads_bp)
    return app

app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
