"""Pillow-backed image editor.

The editor owns exactly one current image. Every mutating operation builds a
new Pillow image from the current one and closes the previous buffer, so a
released image is never reachable through the editor.

Example:
    with ImageEditor("photo.jpg") as editor:
        editor.resize_to(300, 200).grayscale().save_as("thumb.jpg", quality=85)
"""

import os
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Final, Self

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..common.config import get_settings
from ..common.errors import InvalidArgumentError, UnsupportedImageTypeError
from ..utils.profiling import timed
from .dimensions import (
    NoChange,
    ResizePlan,
    Scaled,
    ScaledWithCrop,
    Size,
    centered_crop_origin,
    plan_fit_exact,
    plan_fit_within,
)
from .formats import ImageFormat

BRIGHTNESS_RANGE: Final[tuple[int, int]] = (-255, 255)
COLORIZE_ALPHA_RANGE: Final[tuple[int, int]] = (0, 127)

_ALPHA_MODES: Final[frozenset[str]] = frozenset({"RGBA", "LA", "PA", "RGBa", "La"})


def _clamp(value: int, low: int = 0, high: int = 255) -> int:
    return max(low, min(high, value))


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or (
        image.mode == "P" and "transparency" in image.info
    )


def _truecolor(image: Image.Image) -> Image.Image:
    """Return ``image`` itself if it is RGB/RGBA, otherwise a converted copy."""
    if image.mode in ("RGB", "RGBA"):
        return image
    return image.convert("RGBA" if _has_alpha(image) else "RGB")


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise InvalidArgumentError(f"{name} must be within [{low}, {high}], got {value}")


class ImageEditor:
    """Edit a single JPEG, PNG or GIF image."""

    def __init__(self, filepath: str | Path):
        """Open an image file.

        Args:
            filepath: Path to an existing JPEG, PNG or GIF image

        Raises:
            FileNotFoundError: If the file does not exist
            PermissionError: If the file is not readable
            UnsupportedImageTypeError: If the file is not a supported image
        """
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"File does not exist: {path}")
        if not os.access(path, os.R_OK):
            raise PermissionError(f"File is not readable: {path}")

        try:
            with Image.open(path) as src:
                pil_format = src.format
                src.load()
                image = src.copy()
        except UnidentifiedImageError as exc:
            raise UnsupportedImageTypeError(str(path)) from exc

        try:
            self._format: ImageFormat = ImageFormat.from_pillow(pil_format)
        except UnsupportedImageTypeError as exc:
            image.close()
            raise UnsupportedImageTypeError(f"{path} ({pil_format})") from exc

        self._filepath: Path | None = path
        self._image: Image.Image | None = image
        logger.debug(f"Opened {path} as {self._format} {image.width}x{image.height}")

    @classmethod
    def from_image(cls, image: Image.Image, format: ImageFormat = ImageFormat.PNG) -> Self:
        """Wrap a copy of an in-memory Pillow image. The editor has no file path."""
        editor = cls.__new__(cls)
        editor._format = format
        editor._filepath = None
        editor._image = image.copy()
        return editor

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    @property
    def closed(self) -> bool:
        return self._image is None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _current(self) -> Image.Image:
        if self._image is None:
            raise ValueError("Image editor is closed")
        return self._image

    def _replace(self, image: Image.Image) -> None:
        previous = self._current()
        if image is not previous:
            previous.close()
        self._image = image

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def image(self) -> Image.Image:
        return self._current()

    @property
    def size(self) -> Size:
        return Size(*self._current().size)

    @property
    def width(self) -> int:
        return self._current().width

    @property
    def height(self) -> int:
        return self._current().height

    @property
    def format(self) -> ImageFormat:
        return self._format

    @property
    def mime_type(self) -> str:
        return self._format.mime_type

    @property
    def filepath(self) -> Path | None:
        return self._filepath

    # ------------------------------------------------------------------
    # Resizing
    # ------------------------------------------------------------------

    def resize_to_within(self, max_width: int, max_height: int) -> Self:
        """Shrink the image to fit inside ``max_width`` x ``max_height``."""
        return self.apply_plan(plan_fit_within(self.size, max_width, max_height))

    def resize_to(self, width: int | None, height: int | None) -> Self:
        """Resize to exact dimensions keeping the aspect ratio; overhang is cropped.

        ``None`` for one side derives it from the other.
        """
        return self.apply_plan(plan_fit_exact(self.size, width, height))

    @timed
    def apply_plan(self, plan: ResizePlan) -> Self:
        match plan:
            case NoChange():
                pass
            case Scaled(target=target):
                _ = self.scale_to(target)
            case ScaledWithCrop(target=target, canvas_before_crop=canvas):
                _ = self.scale_to(canvas)
                x, y = plan.crop_origin
                _ = self.crop(x, y, target.width, target.height)
        return self

    def scale_to(self, size: Size) -> Self:
        """Resample the whole image into ``size``."""
        image = _truecolor(self._current())
        resized = image.resize(size.as_tuple(), get_settings().resample_filter)
        if image is not self._image:
            image.close()
        self._replace(resized)
        return self

    # ------------------------------------------------------------------
    # Cropping
    # ------------------------------------------------------------------

    def crop(self, x: int, y: int, width: int, height: int) -> Self:
        """Keep the ``width`` x ``height`` window whose top-left corner is (x, y).

        Raises:
            InvalidArgumentError: If the window is empty or leaves the image
        """
        current = self._current()
        if (
            x < 0
            or y < 0
            or width < 1
            or height < 1
            or x + width > current.width
            or y + height > current.height
        ):
            raise InvalidArgumentError("crop out of bounds")

        self._replace(current.crop((x, y, x + width, y + height)))
        return self

    def crop_from_center(self, width: int, height: int) -> Self:
        if width < 1 or height < 1 or width > self.width or height > self.height:
            raise InvalidArgumentError("crop out of bounds")
        x, y = centered_crop_origin(self.size, Size(width, height))
        return self.crop(x, y, width, height)

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def rotate_clockwise(self) -> Self:
        return self._transpose(Image.Transpose.ROTATE_270)

    def rotate_counter_clockwise(self) -> Self:
        return self._transpose(Image.Transpose.ROTATE_90)

    def rotate_180(self) -> Self:
        return self._transpose(Image.Transpose.ROTATE_180)

    def _transpose(self, method: Image.Transpose) -> Self:
        self._replace(self._current().transpose(method))
        return self

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def grayscale(self) -> Self:
        """Convert to grayscale; alpha is kept and the mode stays RGB or RGBA."""
        current = self._current()
        luminance = current.convert("L")
        if _has_alpha(current):
            alpha = current.convert("RGBA").getchannel("A")
            result = Image.merge("RGBA", (luminance, luminance, luminance, alpha))
            alpha.close()
        else:
            result = Image.merge("RGB", (luminance, luminance, luminance))
        self._replace(result)
        return self

    greyscale = grayscale

    def brightness(self, value: int) -> Self:
        """Add ``value`` (-255..255) to every colour channel."""
        _check_range("brightness", value, BRIGHTNESS_RANGE)
        return self._offset_channels(value, value, value, alpha_drop=0)

    def colorize(self, red: int, green: int, blue: int, alpha: int = 0) -> Self:
        """Add per-channel offsets (-255..255) and optionally fade the image.

        ``alpha`` follows the 0 (opaque) .. 127 (transparent) scale and lowers
        the alpha channel proportionally.
        """
        _check_range("red", red, BRIGHTNESS_RANGE)
        _check_range("green", green, BRIGHTNESS_RANGE)
        _check_range("blue", blue, BRIGHTNESS_RANGE)
        _check_range("alpha", alpha, COLORIZE_ALPHA_RANGE)
        alpha_drop = (alpha * 255 + 63) // 127
        return self._offset_channels(red, green, blue, alpha_drop=alpha_drop)

    def _offset_channels(self, red: int, green: int, blue: int, alpha_drop: int) -> Self:
        current = self._current()
        image = _truecolor(current)
        if alpha_drop and image.mode != "RGBA":
            converted = image.convert("RGBA")
            if image is not current:
                image.close()
            image = converted

        lut: list[int] = []
        for offset in (red, green, blue):
            lut.extend(_clamp(i + offset) for i in range(256))
        if image.mode == "RGBA":
            lut.extend(_clamp(i - alpha_drop) for i in range(256))

        result = image.point(lut)
        if image is not current:
            image.close()
        self._replace(result)
        return self

    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------

    @timed
    def paste_image(
        self,
        other: "ImageEditor | str | Path",
        dst_x: int = 0,
        dst_y: int = 0,
        dst_w: int | None = None,
        dst_h: int | None = None,
        src_x: int = 0,
        src_y: int = 0,
        src_w: int | None = None,
        src_h: int | None = None,
    ) -> Self:
        """Alpha-composite a window of ``other`` onto this image.

        The source window defaults to the whole of ``other`` and the destination
        size defaults to the source window size; the window is resampled when
        the two differ. Parts falling outside this image are clipped.

        Raises:
            InvalidArgumentError: If the source window leaves ``other`` or the
                destination origin is negative
        """
        if isinstance(other, ImageEditor):
            return self._paste(other, dst_x, dst_y, dst_w, dst_h, src_x, src_y, src_w, src_h)

        with ImageEditor(other) as opened:
            return self._paste(opened, dst_x, dst_y, dst_w, dst_h, src_x, src_y, src_w, src_h)

    def _paste(
        self,
        other: "ImageEditor",
        dst_x: int,
        dst_y: int,
        dst_w: int | None,
        dst_h: int | None,
        src_x: int,
        src_y: int,
        src_w: int | None,
        src_h: int | None,
    ) -> Self:
        source = other.image
        src_w = src_w or source.width - src_x
        src_h = src_h or source.height - src_y
        dst_w = dst_w or src_w
        dst_h = dst_h or src_h

        if (
            src_x < 0
            or src_y < 0
            or src_w < 1
            or src_h < 1
            or src_x + src_w > source.width
            or src_y + src_h > source.height
        ):
            raise InvalidArgumentError("paste source out of bounds")
        if dst_x < 0 or dst_y < 0 or dst_w < 1 or dst_h < 1:
            raise InvalidArgumentError("paste destination out of bounds")

        window = source.crop((src_x, src_y, src_x + src_w, src_y + src_h)).convert("RGBA")
        if (dst_w, dst_h) != (src_w, src_h):
            resized = window.resize((dst_w, dst_h), get_settings().resample_filter)
            window.close()
            window = resized

        current = self._current()
        keep_alpha = _has_alpha(current)
        base = current.convert("RGBA")
        base.alpha_composite(window, dest=(dst_x, dst_y))
        window.close()

        if not keep_alpha:
            flattened = base.convert("RGB")
            base.close()
            base = flattened

        self._replace(base)
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def duplicate(self) -> Self:
        """Forget the file path so ``save()`` cannot overwrite the original."""
        self._filepath = None
        return self

    def save(self, quality: int | None = None) -> Self:
        if self._filepath is None:
            raise InvalidArgumentError("Use save_as() to save an unnamed image")
        return self.save_as(self._filepath, quality)

    @timed
    def save_as(self, filepath: str | Path, quality: int | None = None) -> Self:
        """Write the image in its format to ``filepath`` and adopt that path.

        Args:
            filepath: Destination path; the parent directory must exist
            quality: JPEG quality 0-100, defaults to the configured quality

        Raises:
            FileNotFoundError: If the destination directory does not exist
            InvalidArgumentError: If quality is outside 0-100
        """
        path = Path(filepath)
        if not path.parent.exists():
            raise FileNotFoundError(f"Output directory does not exist: {path.parent}")

        with path.open("wb") as f:
            self.output(f, quality)

        self._filepath = path
        logger.debug(f"Saved {self._format} {self.width}x{self.height} to {path}")
        return self

    def output(self, stream: BinaryIO, quality: int | None = None) -> None:
        """Encode the current image into a binary stream; send it as ``mime_type``."""
        current = self._current()
        save_kwargs: dict[str, object] = {}

        if self._format == ImageFormat.JPEG:
            if quality is None:
                quality = get_settings().jpeg_quality
            _check_range("quality", quality, (0, 100))
            save_kwargs["quality"] = quality
            image = current if current.mode in ("RGB", "L") else current.convert("RGB")
        else:
            image = current

        try:
            image.save(stream, format=self._format.value, **save_kwargs)
        finally:
            if image is not current:
                image.close()

    def to_bytes(self, quality: int | None = None) -> bytes:
        buffer = BytesIO()
        self.output(buffer, quality)
        return buffer.getvalue()
