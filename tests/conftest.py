"""Shared pytest fixtures for Headshots Studio tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from headshots.core.config import HeadshotsConfig
from headshots.core.generation import GeneratedArtifact
from headshots.core.normalizer import PreviewReference, ProcessedImage
from headshots.core.service import GenerationService, ImageData, ModifyResult, UploadResult
from headshots.core.styles import get_style
from headshots.core.validation import UploadCandidate
from headshots.ui.models import WizardState


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> HeadshotsConfig:
    """Create a test configuration with temporary directories."""
    return HeadshotsConfig(
        _env_file=None,
        downloads_dir=str(temp_dir / "downloads"),
        previews_dir=str(temp_dir / "previews"),
        service_base_url="https://service.test/api",
        service_api_key="test-key",
        download_delay_seconds=0.0,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color=(200, 120, 80)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_candidate(png_bytes: bytes) -> UploadCandidate:
    """An acceptable PNG upload."""
    return UploadCandidate(
        data=png_bytes, media_type="image/png", filename="me.png", size=len(png_bytes)
    )


@pytest.fixture
def processed_image(temp_dir: Path, png_bytes: bytes) -> ProcessedImage:
    """A normalized image with a real preview file."""
    preview_path = temp_dir / "preview.png"
    preview_path.write_bytes(png_bytes)
    return ProcessedImage(
        data=png_bytes,
        filename="me.png",
        media_type="image/png",
        preview=PreviewReference(preview_path),
    )


@pytest.fixture
def professional_style():
    return get_style("professional")


@pytest.fixture
def artifacts() -> list[GeneratedArtifact]:
    """A batch of three generated headshots."""
    return [
        GeneratedArtifact(
            id=f"1700000000000-{i}",
            url=f"https://cdn.test/{i}.png",
            prompt="a prompt",
            style="Professional",
        )
        for i in range(3)
    ]


class FakeGenerationService(GenerationService):
    """In-memory generation service recording every call."""

    def __init__(self, urls=None, upload_ok=True, modify_ok=True, raise_on_modify=None):
        self.urls = urls if urls is not None else [f"https://cdn.test/out-{i}.png" for i in range(4)]
        self.upload_ok = upload_ok
        self.modify_ok = modify_ok
        self.raise_on_modify = raise_on_modify
        self.uploads: list[tuple[bytes, str, str]] = []
        self.modify_calls: list[dict] = []

    def upload_file(self, data, path, media_type):
        self.uploads.append((data, path, media_type))
        if not self.upload_ok:
            return UploadResult(success=False)
        return UploadResult(success=True, url=f"https://storage.test/{path}")

    def modify_image(self, images, prompt, n, size, response_format="url"):
        self.modify_calls.append(
            {"images": images, "prompt": prompt, "n": n, "size": size, "format": response_format}
        )
        if self.raise_on_modify is not None:
            raise self.raise_on_modify
        if not self.modify_ok:
            return ModifyResult(success=False)
        return ModifyResult(success=True, data=[ImageData(url=url) for url in self.urls])


@pytest.fixture
def fake_service() -> FakeGenerationService:
    return FakeGenerationService()


@pytest.fixture
def wizard_state() -> WizardState:
    """Fresh wizard state."""
    return WizardState()


@pytest.fixture
def make_service():
    """Factory for FakeGenerationService with custom behaviour."""
    return FakeGenerationService
