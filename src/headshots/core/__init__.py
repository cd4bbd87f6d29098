"""Core pipeline for Headshots Studio.

This module provides the upload-and-generation pipeline behind the wizard:

- **validation**: Size/type policy for uploads
- **normalizer**: HEIC/HEIF to PNG conversion and preview files
- **prompt**: Prompt composition and GenerationRequest construction
- **service**: Generation service contract and its HTTP client
- **generation**: Upload + generate, mapping results to artifacts
- **downloads**: Sequential, throttled batch downloads
- **config**: Configuration using Pydantic Settings

Usage Example
-------------
    from headshots.core import (
        BatchDownloader, HttpGenerationService, UploadCandidate,
        build_generation_request, config, fetch_bytes, generate_headshots,
        get_style, normalize_upload, validate_upload,
    )

    candidate = UploadCandidate.from_path("me.heic")
    validate_upload(candidate)
    with normalize_upload(candidate) as image:
        request = build_generation_request(get_style("casual"), image, "", 4)
        artifacts = generate_headshots(request, HttpGenerationService.from_config(config))

    BatchDownloader(fetch_bytes, config.downloads_dir).download_batch(artifacts)
"""

from headshots.core.config import HeadshotsConfig, config
from headshots.core.downloads import BatchDownloader, DownloadReport, download_filename
from headshots.core.errors import (
    ConversionError,
    DownloadError,
    GenerationError,
    HeadshotsError,
    ValidationError,
)
from headshots.core.generation import GeneratedArtifact, generate_headshots, materialize_results
from headshots.core.normalizer import PreviewReference, ProcessedImage, normalize_upload
from headshots.core.prompt import (
    GenerationRequest,
    build_generation_request,
    clamp_quantity,
    step_quantity,
)
from headshots.core.service import GenerationService, HttpGenerationService, fetch_bytes
from headshots.core.styles import HEADSHOT_STYLES, StyleTemplate, get_style
from headshots.core.validation import UploadCandidate, validate_upload

__all__ = [
    "BatchDownloader",
    "ConversionError",
    "DownloadError",
    "DownloadReport",
    "GeneratedArtifact",
    "GenerationError",
    "GenerationRequest",
    "GenerationService",
    "HEADSHOT_STYLES",
    "HeadshotsConfig",
    "HeadshotsError",
    "HttpGenerationService",
    "PreviewReference",
    "ProcessedImage",
    "StyleTemplate",
    "UploadCandidate",
    "ValidationError",
    "build_generation_request",
    "clamp_quantity",
    "config",
    "download_filename",
    "fetch_bytes",
    "generate_headshots",
    "get_style",
    "materialize_results",
    "normalize_upload",
    "step_quantity",
    "validate_upload",
]
