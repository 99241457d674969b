"""Data models for uploaded documents."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PDF_MEDIA_TYPE = "application/pdf"
IMAGE_MEDIA_TYPES = ("image/jpeg", "image/png")
SUPPORTED_MEDIA_TYPES = IMAGE_MEDIA_TYPES + (PDF_MEDIA_TYPE,)

_EXTENSION_MEDIA_TYPES = {
    ".pdf": PDF_MEDIA_TYPE,
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


@dataclass
class RawDocument:
    """Uploaded file content, alive for one request only."""
    content: bytes
    media_type: str
    filename: Optional[str] = None

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> "RawDocument":
        """Read a local file, inferring the media type from its extension."""
        path = Path(path)
        media_type = _EXTENSION_MEDIA_TYPES.get(path.suffix.lower(), "application/octet-stream")
        return cls(content=path.read_bytes(), media_type=media_type, filename=path.name)
