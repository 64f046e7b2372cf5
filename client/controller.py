from pathlib import Path
from typing import Callable, Optional, Union
import mimetypes, os, tempfile, threading

import requests

from client.camera import Camera, CameraError
from client.countdown import Countdown
from client.images import SelectedImage
from client.presets import preset_text
from client.results import (
    EDIT_FALLBACK, UPLOAD_FALLBACK, EditOk, Err, UploadOk,
    decode_edit_response, decode_upload_response,
)

UPLOAD_PATH = "/api/photobooth/upload"
EDIT_PATH = "/api/photobooth/edit"

# ---------- small thread-safe logger ----------
_print_lock = threading.Lock()
def log(msg: str) -> None:
    with _print_lock:
        print(msg, flush=True)

# session states
IDLE = "idle"
READY = "ready"
PENDING = "pending"
READY_WITH_RESULT = "ready_with_result"
READY_WITH_ERROR = "ready_with_error"

BUSY_MESSAGE = "Wait for the current request to finish."


class PhotoboothController:
    """
    Client-side session: one selected image, one instruction, at most one
    request in flight. Results and errors are replaced, never merged.
    """

    def __init__(self, base_url: str, session=None, camera: Optional[Camera] = None,
                 timeout: float = 180.0, countdown_interval: float = 1.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.camera = camera or Camera()
        self.timeout = timeout
        self.countdown_interval = countdown_interval

        self.selected: Optional[SelectedImage] = None
        self.instruction: str = preset_text(0)
        self.result: Optional[Union[UploadOk, EditOk]] = None
        self.error: Optional[str] = None
        self.camera_error: Optional[str] = None
        self.loading: Optional[str] = None  # "upload" | "edit" | None

        self._busy = threading.Lock()
        # guards selection/result/loading across the request and countdown threads
        self._state_lock = threading.RLock()
        self._countdown: Optional[Countdown] = None
        self._preview_path: Optional[str] = None

    # ---------- state ----------
    @property
    def state(self) -> str:
        if self.loading:
            return PENDING
        if self.selected is None:
            return IDLE
        if self.error:
            return READY_WITH_ERROR
        if self.result is not None:
            return READY_WITH_RESULT
        return READY

    @property
    def busy(self) -> bool:
        return self.loading is not None

    def use_preset(self, index: int) -> None:
        self.instruction = preset_text(index)

    def select_image(self, image: SelectedImage) -> bool:
        """Replace the selection. Refused while a request is pending."""
        with self._state_lock:
            if self.busy:
                log(f"[client] BUSY: {self.loading} in flight, keeping {self.selected.name}")
                return False
            self.selected = image
            self._set_result(None)
            self.error = None
            return True

    # ---------- camera ----------
    def enable_camera(self) -> bool:
        try:
            self.camera.acquire()
        except CameraError as e:
            self.camera_error = str(e)
            return False
        self.camera_error = None
        return True

    def disable_camera(self) -> None:
        self.cancel_countdown()
        self.camera.release()

    def toggle_camera(self) -> bool:
        if self.camera.active:
            self.disable_camera()
            return False
        return self.enable_camera()

    def capture_frame(self) -> Optional[SelectedImage]:
        with self._state_lock:
            if self.busy:
                self.camera_error = BUSY_MESSAGE
                return None
            try:
                image = self.camera.capture_frame()
            except CameraError as e:
                self.camera_error = str(e)
                return None
            self.camera_error = None
            self.select_image(image)
            return image

    def run_countdown(self, seconds: int = 5, on_tick: Optional[Callable[[int], None]] = None) -> Optional[Countdown]:
        """
        Start a capture countdown. While one is running, further calls return
        the running handle and start nothing new.
        """
        if not self.camera.active:
            self.camera_error = "Enable the camera first."
            return None
        if self.busy:
            self.camera_error = BUSY_MESSAGE
            return None
        current = self._countdown
        if current is not None and current.active:
            return current

        def _fire():
            self._countdown = None
            self.capture_frame()

        self._countdown = Countdown(seconds, _fire, on_tick=on_tick, interval=self.countdown_interval)
        return self._countdown.start()

    def cancel_countdown(self) -> None:
        countdown, self._countdown = self._countdown, None
        if countdown is not None:
            countdown.cancel()

    @property
    def counting_down(self) -> bool:
        return self._countdown is not None and self._countdown.active

    # ---------- outbound calls ----------
    def _begin(self, kind: str) -> bool:
        with self._state_lock:
            if self.selected is None:
                return False
            if not self._busy.acquire(blocking=False):
                log(f"[client] BUSY: {self.loading} in flight, ignoring {kind}")
                return False
            self.loading = kind
            self.error = None
            return True

    def _finish(self, result) -> None:
        with self._state_lock:
            try:
                if isinstance(result, Err):
                    self.error = result.message
                    log(f"[client] {self.loading} ERROR: {result.message}")
                else:
                    self._set_result(result)
            finally:
                self.loading = None
                self._busy.release()

    def _file_part(self):
        img = self.selected
        return {"file": (img.name, img.data, img.mime_type)}

    def save_locally(self) -> Optional[Union[UploadOk, Err]]:
        if not self._begin("upload"):
            return None
        result: Union[UploadOk, Err] = Err(UPLOAD_FALLBACK)
        try:
            resp = self.session.post(self.base_url + UPLOAD_PATH, files=self._file_part(), timeout=self.timeout)
            result = decode_upload_response(resp)
        except requests.RequestException as e:
            log(f"[client] upload request failed: {e}")
        finally:
            self._finish(result)
        return result

    def edit_with_provider(self) -> Optional[Union[EditOk, Err]]:
        if not self._begin("edit"):
            return None
        result: Union[EditOk, Err] = Err(EDIT_FALLBACK)
        try:
            resp = self.session.post(
                self.base_url + EDIT_PATH,
                files=self._file_part(),
                data={"instruction": self.instruction},
                timeout=self.timeout,
            )
            result = decode_edit_response(resp)
        except requests.RequestException as e:
            log(f"[client] edit request failed: {e}")
        finally:
            self._finish(result)
        return result

    # ---------- results ----------
    def _set_result(self, result) -> None:
        old_preview, self._preview_path = self._preview_path, None
        self.result = result
        if isinstance(result, EditOk):
            suffix = mimetypes.guess_extension(result.content_type.split(";")[0].strip()) or ".png"
            fd, path = tempfile.mkstemp(prefix="photobooth-preview-", suffix=suffix)
            with os.fdopen(fd, "wb") as f:
                f.write(result.data)
            self._preview_path = path
        if old_preview:
            try:
                os.unlink(old_preview)
            except FileNotFoundError:
                pass

    @property
    def result_url(self) -> Optional[str]:
        if isinstance(self.result, UploadOk):
            return self.base_url + self.result.url
        return None

    def preview_path(self) -> Optional[str]:
        return self._preview_path

    def download(self, dest: Union[str, Path]) -> Path:
        """Write the current result to dest."""
        dest = Path(dest)
        if isinstance(self.result, EditOk):
            dest.write_bytes(self.result.data)
        elif isinstance(self.result, UploadOk):
            resp = self.session.get(self.result_url, timeout=self.timeout)
            resp.raise_for_status()
            dest.write_bytes(resp.content)
        else:
            raise RuntimeError("No result to download.")
        return dest

    def close(self) -> None:
        self.cancel_countdown()
        self.camera.release()
        with self._state_lock:
            self._set_result(None)
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
