import os
from dotenv import load_dotenv

load_dotenv()  # reads .env in the cwd or project root

BASE = os.path.abspath(os.path.dirname(__file__))

def _csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]

class Config:
    # provider
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-image")
    GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "120"))  # 0 = no timeout

    # storage
    UPLOADS_DIR = os.getenv("PHOTOBOOTH_UPLOADS_DIR", os.path.join(BASE, "storage", "uploads"))
    UPLOADS_URL_PREFIX = "/uploads"

    # request limits
    MAX_CONTENT_LENGTH = int(float(os.getenv("PHOTOBOOTH_MAX_UPLOAD_MB", "20")) * 1024 * 1024)

    CORS_ORIGINS = _csv(os.getenv("PHOTOBOOTH_CORS_ORIGINS", "*"))
