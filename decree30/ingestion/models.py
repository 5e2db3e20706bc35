import mimetypes
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class SourceFile:
    """A file selected by the user, read lazily through ``read``."""

    name: str
    mime_type: str
    size_bytes: int
    read: Callable[[], bytes]

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, '' when there is none."""
        return Path(self.name).suffix.lower().lstrip(".")

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size_bytes=path.stat().st_size,
            read=path.read_bytes,
        )


@dataclass(frozen=True)
class UploadedFilePayload:
    """Transport envelope handed from ingestion to the correction step."""

    name: str
    mime_type: str
    size_bytes: int
    base64_content: str
