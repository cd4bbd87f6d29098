"""Client interface for the hosted image generation service.

The generation service is an external collaborator with a narrow contract:

- ``upload_file(data, path, media_type)`` stores the source photo and returns
  a public URL.
- ``modify_image(images, prompt, n, size, response_format)`` runs an
  image-to-image generation and returns one URL per produced image.

Both calls report failure with ``success=False`` rather than raising, so
callers handle "the service said no" and "the network broke" the same way.

Service Implementations
-----------------------
- GenerationService: abstract base class defining the contract
- HttpGenerationService: JSON/multipart client built on httpx

Usage Example
-------------
    >>> from headshots.core.service import HttpGenerationService
    >>> service = HttpGenerationService.from_config(config)
    >>> uploaded = service.upload_file(data, "uploads/123-me.png", "image/png")
    >>> result = service.modify_image(
    ...     images=[uploaded.url],
    ...     prompt="professional corporate headshot, professional headshot photography",
    ...     n=4,
    ...     size="1024x1024",
    ... )
"""

import logging
from abc import ABC, abstractmethod

import httpx
from pydantic import BaseModel, Field

from .config import HeadshotsConfig

logger = logging.getLogger(__name__)


class UploadResult(BaseModel):
    """Response of ``upload_file``."""

    success: bool = False
    url: str | None = None


class ImageData(BaseModel):
    """A single generated image as returned by the service."""

    url: str | None = None


class ModifyResult(BaseModel):
    """Response of ``modify_image``."""

    success: bool = False
    data: list[ImageData] = Field(default_factory=list)


class GenerationService(ABC):
    """Abstract base class for generation service clients."""

    @abstractmethod
    def upload_file(self, data: bytes, path: str, media_type: str) -> UploadResult:
        """Upload a file and return its public URL.

        Args:
            data: File contents
            path: Destination path in the service's storage
            media_type: MIME type of the file

        Returns:
            UploadResult; ``success`` is False on any failure
        """

    @abstractmethod
    def modify_image(
        self,
        images: list[str],
        prompt: str,
        n: int,
        size: str,
        response_format: str = "url",
    ) -> ModifyResult:
        """Generate ``n`` variations of the given images guided by ``prompt``.

        Returns:
            ModifyResult; ``success`` is False on any failure
        """

    def close(self) -> None:
        """Release any held connections."""


class HttpGenerationService(GenerationService):
    """Generation service client speaking JSON over HTTP.

    Endpoints (relative to ``base_url``):
        POST /storage/upload     multipart form: file, path, project_id
        POST /ai/modify-image    JSON: images, prompt, n, size, response_format

    Both endpoints respond with the JSON shape of UploadResult / ModifyResult.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        project_id: str = "",
        timeout_seconds: float = 120.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.project_id = project_id
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)

    @classmethod
    def from_config(cls, config: HeadshotsConfig) -> "HttpGenerationService":
        return cls(
            base_url=config.service_base_url,
            api_key=config.service_api_key,
            project_id=config.service_project_id,
            timeout_seconds=config.request_timeout_seconds,
        )

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def upload_file(self, data: bytes, path: str, media_type: str) -> UploadResult:
        url = f"{self.base_url}/storage/upload"
        filename = path.rsplit("/", 1)[-1]
        try:
            r = self._client.post(
                url,
                headers=self._headers(),
                data={"path": path, "project_id": self.project_id},
                files={"file": (filename, data, media_type or "application/octet-stream")},
            )
            if r.status_code >= 400:
                logger.error(f"Upload failed with HTTP {r.status_code}: {r.text[:200]}")
                return UploadResult(success=False)
            return UploadResult.model_validate(r.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Upload request failed: {e}")
            return UploadResult(success=False)

    def modify_image(
        self,
        images: list[str],
        prompt: str,
        n: int,
        size: str,
        response_format: str = "url",
    ) -> ModifyResult:
        url = f"{self.base_url}/ai/modify-image"
        payload = {
            "project_id": self.project_id,
            "images": images,
            "prompt": prompt,
            "n": n,
            "size": size,
            "response_format": response_format,
        }
        try:
            r = self._client.post(url, json=payload, headers=self._headers())
            if r.status_code >= 400:
                logger.error(f"Generation failed with HTTP {r.status_code}: {r.text[:200]}")
                return ModifyResult(success=False)
            return ModifyResult.model_validate(r.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Generation request failed: {e}")
            return ModifyResult(success=False)

    def close(self) -> None:
        self._client.close()


def fetch_bytes(url: str, timeout: float = 120.0) -> bytes:
    """Download a URL and return the response body.

    Raises:
        httpx.HTTPError: On transport errors or a non-2xx status
    """
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        r = client.get(url)
        r.raise_for_status()
        return r.content
