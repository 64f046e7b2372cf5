import threading, time
from typing import Callable, Optional

import cv2

from client.images import SelectedImage

class CameraError(Exception):
    pass

class Camera:
    """
    Exclusive handle on a capture device. At most one open capture at a time;
    release() is idempotent and a released capture is never reused.
    """

    def __init__(self, device: int = 0, width: int = 1280, height: int = 960,
                 capture_factory: Optional[Callable] = None):
        self.device = device
        self.width = width
        self.height = height
        self._factory = capture_factory or cv2.VideoCapture
        self._cap = None
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._cap is not None

    def acquire(self) -> None:
        with self._lock:
            if self._cap is not None:
                return
            cap = self._factory(self.device)
            if cap is None or not cap.isOpened():
                if cap is not None:
                    cap.release()
                raise CameraError("Unable to access camera. Check permissions.")
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            self._cap = cap

    def release(self) -> None:
        with self._lock:
            cap, self._cap = self._cap, None
        if cap is not None:
            cap.release()

    def capture_frame(self) -> SelectedImage:
        """Grab the current frame, mirror it like the live preview, encode as PNG."""
        with self._lock:
            if self._cap is None:
                raise CameraError("Enable the camera first.")
            ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CameraError("Failed to read camera frame.")

        frame = cv2.flip(frame, 1)
        ok, buffer = cv2.imencode(".png", frame)
        if not ok:
            raise CameraError("Unable to capture photo.")
        return SelectedImage(
            data=buffer.tobytes(),
            mime_type="image/png",
            name=f"photobooth-{int(time.time() * 1000)}.png",
        )

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, *exc):
        self.release()
