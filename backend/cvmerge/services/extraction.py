"""
Boundary with the external CV extraction service.

The extraction itself (document understanding, OCR, prompting) happens
elsewhere; this module only turns its raw answer into ExtractedProfileData.
"""
import json
import logging
from typing import Protocol, Union

from pydantic import ValidationError

from ..schemas import ExtractedProfileData
from .errors import UpstreamExtractionError

logger = logging.getLogger(__name__)


class CVExtractor(Protocol):
    """Anything that can turn a CV document into extraction JSON."""

    async def extract(self, document: bytes, mime_type: str) -> Union[str, dict]:
        ...


def strip_json_fence(text: str) -> str:
    """Remove a markdown code fence around a JSON answer."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_extracted_profile(raw: Union[str, bytes, dict]) -> ExtractedProfileData:
    """Validate an extraction answer, raising UpstreamExtractionError if unusable."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UpstreamExtractionError("Extraction response is not valid UTF-8") from exc

    if isinstance(raw, str):
        cleaned = strip_json_fence(raw)
        try:
            raw = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse extraction response: %s", cleaned[:500])
            raise UpstreamExtractionError("Invalid extraction response format") from exc

    if not isinstance(raw, dict):
        raise UpstreamExtractionError(
            f"Extraction response must be a JSON object, got {type(raw).__name__}"
        )

    try:
        return ExtractedProfileData.model_validate(raw)
    except ValidationError as exc:
        logger.error("Extraction response failed validation: %s", exc)
        raise UpstreamExtractionError(f"Extraction response failed validation: {exc}") from exc


async def extract_profile(extractor: CVExtractor, document: bytes, mime_type: str) -> ExtractedProfileData:
    """Run the extractor on a document and validate what comes back."""
    raw = await extractor.extract(document, mime_type)
    return parse_extracted_profile(raw)
