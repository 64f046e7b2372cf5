import os, tempfile, time, uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_EXT = "png"

@dataclass(frozen=True)
class StoredUpload:
    name: str
    url: str
    path: str

def _ext_for(filename: Optional[str]) -> str:
    # text after the last dot of the base name, so ".jpg" counts as jpg
    name = Path(filename or "").name
    ext = name.rsplit(".", 1)[1].lower() if "." in name else ""
    # alnum only, names stay inside the flat directory
    if not ext or not ext.isalnum():
        return DEFAULT_EXT
    return ext

def make_upload_name(filename: Optional[str]) -> str:
    """<wall-clock millis>-<uuid4>.<ext>"""
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}.{_ext_for(filename)}"

def write_atomic(path: str, data: bytes) -> None:
    """
    Write bytes next to `path` under a temporary name, then rename onto `path`.
    Readers either see no file or the complete file, never a partial one.
    """
    directory = os.path.dirname(path) or "."
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".part", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise

def save_upload(data: bytes, filename: Optional[str], uploads_dir: str, url_prefix: str = "/uploads") -> StoredUpload:
    os.makedirs(uploads_dir, exist_ok=True)
    name = make_upload_name(filename)
    path = os.path.join(uploads_dir, name)
    write_atomic(path, data)
    return StoredUpload(name=name, url=f"{url_prefix.rstrip('/')}/{name}", path=path)
