"""Process-wide editor settings.

Settings are read from the environment the first time they are needed:

    CL_IMAGE_TOOLS_JPEG_QUALITY   default JPEG quality (1-100, default 80)
    CL_IMAGE_TOOLS_RESAMPLE       lanczos | bicubic | bilinear | nearest
    CL_IMAGE_TOOLS_STORAGE_DIR    base directory for job files
"""

import os
from pathlib import Path
from typing import ClassVar, Final, Literal

from loguru import logger
from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX: Final[str] = "CL_IMAGE_TOOLS_"

ResampleName = Literal["lanczos", "bicubic", "bilinear", "nearest"]

_RESAMPLE_FILTERS: Final[dict[str, Image.Resampling]] = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


class EditorSettings(BaseModel):
    jpeg_quality: int = Field(
        default=80,
        ge=1,
        le=100,
        description="Quality used when saving JPEG images without an explicit quality",
    )
    resample: ResampleName = Field(
        default="lanczos",
        description="Resampling filter used when scaling",
    )
    storage_dir: Path = Field(
        default_factory=lambda: Path.home() / ".cache" / "cl_image_tools" / "jobs",
        description="Base directory for job-scoped file storage",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def resample_filter(self) -> Image.Resampling:
        return _RESAMPLE_FILTERS[self.resample]

    @classmethod
    def from_env(cls) -> "EditorSettings":
        """Build settings from ``CL_IMAGE_TOOLS_*`` environment variables.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        values: dict[str, object] = {}
        for field_name in cls.model_fields:
            raw = os.environ.get(ENV_PREFIX + field_name.upper())
            if raw:
                values[field_name] = raw
        return cls.model_validate(values)


_settings: EditorSettings | None = None


def get_settings() -> EditorSettings:
    """Get the global settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = EditorSettings.from_env()
        logger.debug(f"Loaded editor settings: {_settings}")
    return _settings


def configure(settings: EditorSettings | None) -> None:
    """Replace the global settings. ``None`` forces a reload from the environment."""
    global _settings
    _settings = settings
