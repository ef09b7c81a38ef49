"""Errors raised by the image planning and editing layers."""


class InvalidArgumentError(ValueError):
    """Raised when a caller supplies dimensions or parameters that cannot be honoured.

    Detected synchronously, before any image data is touched.
    """


class UnsupportedImageTypeError(InvalidArgumentError):
    """Raised when a file is not a raster image format the editor can open."""

    def __init__(self, detail: str):
        self.detail: str = detail
        super().__init__(f"Wrong file type: {detail}")
