from enum import StrEnum
from typing import Final

from ..common.errors import UnsupportedImageTypeError


class ImageFormat(StrEnum):
    """Raster formats the editor reads and writes. Values are Pillow format names."""

    JPEG = "JPEG"
    PNG = "PNG"
    GIF = "GIF"

    @property
    def mime_type(self) -> str:
        return _FORMAT_MIME[self]

    @property
    def extension(self) -> str:
        return _FORMAT_EXTENSION[self]

    @classmethod
    def from_pillow(cls, pil_format: str | None) -> "ImageFormat":
        """Map a Pillow format name, e.g. ``Image.format``, to a supported format.

        Raises:
            UnsupportedImageTypeError: If Pillow's format is not JPEG, PNG or GIF
        """
        name = (pil_format or "").upper()
        if name in _PILLOW_ALIASES:
            return _PILLOW_ALIASES[name]
        try:
            return cls(name)
        except ValueError as exc:
            raise UnsupportedImageTypeError(pil_format or "unknown format") from exc

    @classmethod
    def from_mime(cls, mime_type: str) -> "ImageFormat":
        mt = mime_type.lower()
        if "gif" in mt:
            return ImageFormat.GIF
        elif "jpg" in mt or "jpeg" in mt:
            return ImageFormat.JPEG
        elif "png" in mt:
            return ImageFormat.PNG
        raise UnsupportedImageTypeError(mime_type)


_FORMAT_MIME: Final[dict[ImageFormat, str]] = {
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.PNG: "image/png",
    ImageFormat.GIF: "image/gif",
}

_FORMAT_EXTENSION: Final[dict[ImageFormat, str]] = {
    ImageFormat.JPEG: "jpg",
    ImageFormat.PNG: "png",
    ImageFormat.GIF: "gif",
}

# MPO is a JPEG followed by extra frames, as written by most phone cameras
_PILLOW_ALIASES: Final[dict[str, ImageFormat]] = {
    "MPO": ImageFormat.JPEG,
}
