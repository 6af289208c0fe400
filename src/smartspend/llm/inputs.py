"""Statement inputs accepted by the analyzer."""
import base64
import binascii
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from ..utils.exceptions import InputError


@dataclass(frozen=True)
class TextStatement:
    """Statement text pasted by the user."""
    text: str

    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class ImageStatement:
    """Statement image as base64 data plus its MIME type."""
    data: str
    mime_type: str

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "ImageStatement":
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)

    def is_empty(self) -> bool:
        return not self.data

    def decode(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InputError(f"Image data is not valid base64: {e}")

    def validate(self, allowed_mime_types: Iterable[str], max_bytes: int) -> bytes:
        """Return the decoded image, rejecting unsupported types and oversized files."""
        allowed = list(allowed_mime_types)
        if self.mime_type not in allowed:
            raise InputError(
                f"Unsupported file type '{self.mime_type}'. Please upload one of: {', '.join(allowed)}."
            )

        raw = self.decode()
        if len(raw) > max_bytes:
            raise InputError(
                f"File is too large ({len(raw) / (1024 * 1024):.1f} MB). "
                f"The limit is {max_bytes // (1024 * 1024)} MB."
            )
        return raw


StatementInput = Union[TextStatement, ImageStatement]

TEXT_SUFFIXES = {".txt", ".csv", ".tsv"}


def is_missing(statement: Optional[StatementInput]) -> bool:
    """True when there is nothing to analyze."""
    return statement is None or statement.is_empty()


def load_statement(path: Path) -> StatementInput:
    """
    Build a statement input from a file on disk.

    Args:
        path: Text (.txt/.csv/.tsv) or image file

    Returns:
        TextStatement or ImageStatement
    """
    if not path.is_file():
        raise InputError(f"File not found: {path}")

    mime_type, _ = mimetypes.guess_type(path.name)

    if path.suffix.lower() in TEXT_SUFFIXES or (mime_type or "").startswith("text/"):
        return TextStatement(path.read_text(encoding="utf-8", errors="replace"))

    if mime_type and mime_type.startswith("image/"):
        return ImageStatement.from_bytes(path.read_bytes(), mime_type)

    raise InputError(f"Cannot analyze '{path.name}': expected a text file or an image")
