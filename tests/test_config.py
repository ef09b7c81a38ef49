"""Tests for process-wide editor settings."""

from pathlib import Path

import pytest
from PIL import Image
from pydantic import ValidationError

from cl_image_tools.common import config
from cl_image_tools.common.config import EditorSettings, configure, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("JPEG_QUALITY", "RESAMPLE", "STORAGE_DIR"):
        monkeypatch.delenv(f"CL_IMAGE_TOOLS_{name}", raising=False)

    settings = EditorSettings.from_env()

    assert settings.jpeg_quality == 80
    assert settings.resample == "lanczos"
    assert settings.resample_filter == Image.Resampling.LANCZOS
    assert settings.storage_dir == Path.home() / ".cache" / "cl_image_tools" / "jobs"


def test_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("CL_IMAGE_TOOLS_JPEG_QUALITY", "55")
    monkeypatch.setenv("CL_IMAGE_TOOLS_RESAMPLE", "bilinear")
    monkeypatch.setenv("CL_IMAGE_TOOLS_STORAGE_DIR", str(tmp_path))

    settings = EditorSettings.from_env()

    assert settings.jpeg_quality == 55
    assert settings.resample_filter == Image.Resampling.BILINEAR
    assert settings.storage_dir == tmp_path


def test_empty_env_value_uses_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CL_IMAGE_TOOLS_JPEG_QUALITY", "")
    assert EditorSettings.from_env().jpeg_quality == 80


@pytest.mark.parametrize(
    "name,value",
    [("JPEG_QUALITY", "0"), ("JPEG_QUALITY", "101"), ("JPEG_QUALITY", "high"), ("RESAMPLE", "box")],
)
def test_invalid_env_value(monkeypatch: pytest.MonkeyPatch, name: str, value: str):
    monkeypatch.setenv(f"CL_IMAGE_TOOLS_{name}", value)
    with pytest.raises(ValidationError):
        _ = EditorSettings.from_env()


def test_settings_are_frozen():
    settings = EditorSettings()
    with pytest.raises(ValidationError):
        settings.jpeg_quality = 10  # type: ignore[misc]


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        _ = EditorSettings(quality=10)  # type: ignore[call-arg]


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CL_IMAGE_TOOLS_JPEG_QUALITY", "42")

    first = get_settings()
    monkeypatch.setenv("CL_IMAGE_TOOLS_JPEG_QUALITY", "43")

    assert get_settings() is first
    assert first.jpeg_quality == 42


def test_configure_replaces_and_resets(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CL_IMAGE_TOOLS_JPEG_QUALITY", "42")
    custom = EditorSettings(jpeg_quality=7)

    configure(custom)
    assert get_settings() is custom

    configure(None)
    assert config.get_settings().jpeg_quality == 42
