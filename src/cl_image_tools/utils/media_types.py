from enum import StrEnum
from io import BytesIO
from pathlib import PurePosixPath

import magic

from ..common.errors import UnsupportedImageTypeError
from ..editor.formats import ImageFormat


class MediaType(StrEnum):
    IMAGE = "image"
    FILE = "file"

    @classmethod
    def from_mime(cls, file_type: str) -> "MediaType":
        if file_type.startswith("image"):
            return MediaType.IMAGE
        return MediaType.FILE


def sniff_mime(bytes_io: BytesIO) -> str:
    """Detect the MIME type of a buffer with libmagic."""
    _ = bytes_io.seek(0)
    mime = magic.Magic(mime=True)
    file_type = mime.from_buffer(bytes_io.getvalue())
    return file_type or "application/octet-stream"


def get_extension_from_mime(mime_type: str) -> str:
    """File extension (without dot) for a supported image MIME type.

    Raises:
        UnsupportedImageTypeError: If the MIME type is not JPEG, PNG or GIF
    """
    return ImageFormat.from_mime(mime_type).extension


def with_image_extension(relative_path: str, mime_type: str) -> str:
    """Return ``relative_path`` with a suffix matching the sniffed image type.

    A suffix that already names the same format (``.jpeg``, ``.PNG``) is kept.

    Raises:
        UnsupportedImageTypeError: If the MIME type is not JPEG, PNG or GIF
    """
    extension = get_extension_from_mime(mime_type)
    path = PurePosixPath(relative_path)
    try:
        if ImageFormat.from_mime(path.suffix) == ImageFormat.from_mime(mime_type):
            return relative_path
    except UnsupportedImageTypeError:
        pass
    return str(path.with_suffix(f".{extension}"))
