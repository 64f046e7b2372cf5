"""Photobooth client: picks or captures a photo and drives the upload / edit endpoints."""

from client.controller import PhotoboothController
from client.images import SelectedImage
from client.presets import PRESETS
from client.results import UploadOk, EditOk, Err

__all__ = ["PhotoboothController", "SelectedImage", "PRESETS", "UploadOk", "EditOk", "Err"]
