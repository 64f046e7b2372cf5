from dataclasses import dataclass
from pathlib import Path
from typing import Union
import mimetypes

@dataclass(frozen=True)
class SelectedImage:
    """The photo currently picked for a session. Replaced wholesale, never mutated."""
    data: bytes
    mime_type: str
    name: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SelectedImage":
        path = Path(path)
        mime, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), mime_type=mime or "application/octet-stream", name=path.name)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def size_label(self) -> str:
        n = self.size
        if n < 1024:
            return f"{n} B"
        if n < 1024 * 1024:
            return f"{n / 1024:.1f} KB"
        return f"{n / 1024 / 1024:.2f} MB"
