"""Running a generation attempt and materializing its results.

A generation attempt is two sequential calls to the service: upload the
normalized photo, then ask for ``count`` variations of it. The outcome is
all-or-nothing: either every returned image becomes a GeneratedArtifact, or
a GenerationError is raised and the batch is empty. There is no retry; the
user re-triggers the step.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .errors import GenerationError
from .prompt import GenerationRequest
from .service import GenerationService, ImageData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedArtifact:
    """One generated headshot plus its provenance.

    Attributes:
        id: "{batch_timestamp}-{index}", unique within its batch
        url: Remote URL of the image
        prompt: Prompt the batch was generated with
        style: Display name of the style
    """

    id: str
    url: str
    prompt: str
    style: str


def materialize_results(
    results: Iterable[ImageData],
    style_name: str,
    prompt: str,
    batch_timestamp: int,
) -> list[GeneratedArtifact]:
    """Map raw service results to artifacts with stable per-batch ids.

    Ids are unique within the batch but not across batches, so regenerating
    the same input never collides with an earlier batch.

    Args:
        results: Images returned by the service, in order
        style_name: Display name of the style used
        prompt: Prompt used for the batch
        batch_timestamp: Epoch milliseconds identifying the batch

    Returns:
        One artifact per result (empty if there were none)
    """
    return [
        GeneratedArtifact(
            id=f"{batch_timestamp}-{index}",
            url=item.url or "",
            prompt=prompt,
            style=style_name,
        )
        for index, item in enumerate(results)
    ]


def _epoch_ms(clock: Callable[[], float]) -> int:
    return int(clock() * 1000)


def generate_headshots(
    request: GenerationRequest,
    service: GenerationService,
    clock: Callable[[], float] = time.time,
) -> list[GeneratedArtifact]:
    """Upload the source photo and generate a batch of headshots.

    Args:
        request: Built by build_generation_request()
        service: Generation service client
        clock: Time source in epoch seconds (injectable for tests)

    Returns:
        Non-empty list of artifacts, possibly shorter than request.count if
        the service returned fewer images

    Raises:
        GenerationError: If the upload or the generation fails, raises, or
            returns no images
    """
    image = request.source_image
    upload_path = f"uploads/{_epoch_ms(clock)}-{image.filename}"

    try:
        logger.info(f"Uploading source photo to {upload_path}")
        uploaded = service.upload_file(image.data, upload_path, image.media_type)
        if not uploaded.success or not uploaded.url:
            raise GenerationError("Failed to upload image")

        logger.info(f"Requesting {request.count} headshots ({request.style_name})")
        result = service.modify_image(
            images=[uploaded.url],
            prompt=request.prompt,
            n=request.count,
            size=request.output_size,
            response_format=request.response_format,
        )
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"Error generating images: {e}", exc_info=True)
        raise GenerationError("Failed to generate headshots. Please try again.") from e

    if not result.success or not result.data:
        logger.warning("Generation service returned no images")
        raise GenerationError("Failed to generate headshots. Please try again.")

    artifacts = materialize_results(
        result.data,
        style_name=request.style_name,
        prompt=request.prompt,
        batch_timestamp=_epoch_ms(clock),
    )
    if len(artifacts) < request.count:
        logger.info(f"Service returned {len(artifacts)} of {request.count} requested images")
    return artifacts
