"""OCR.space API interactions for reading receipt photos."""

import base64
import logging
import mimetypes
from pathlib import Path

import requests

from intime.domain.receipt import ExtractionResult, build_result

logger = logging.getLogger(__name__)

API_URL = "https://api.ocr.space/parse/image"

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")


class OcrError(Exception):
    """Raised when a receipt image cannot be turned into text."""


def encode_image(image_path: Path) -> str:
    """Read an image file into a base64 data URI.

    Args:
        image_path: Path to the image.

    Returns:
        Data URI (e.g., "data:image/jpeg;base64,...").

    Raises:
        OcrError: If the file type is not a supported image or can't be read.
    """
    if image_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise OcrError(f"Unsupported image type '{image_path.suffix}'. Use one of: {', '.join(SUPPORTED_EXTENSIONS)}")

    mime_type = mimetypes.guess_type(image_path.name)[0] or "image/jpeg"
    try:
        data = image_path.read_bytes()
    except OSError as e:
        raise OcrError(f"Could not read image {image_path}: {e}") from e

    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def extract_text(image_path: Path, api_key: str, timeout: int = 30) -> str:
    """Send a receipt image to OCR.space and return the recognized text.

    Args:
        image_path: Path to the receipt image.
        api_key: OCR.space API key.
        timeout: Request timeout in seconds.

    Returns:
        Text of the first parsed result.

    Raises:
        OcrError: If the request fails or the service could not process the image.
    """
    form = {
        "base64Image": encode_image(image_path),
        "language": "por",
        "isOverlayRequired": "false",
        "detectOrientation": "false",
        "isTable": "true",
    }
    headers = {"apikey": api_key}

    logger.debug("Sending %s to OCR service", image_path)
    try:
        response = requests.post(API_URL, data=form, headers=headers, timeout=timeout)
        response.raise_for_status()
        result = response.json()
    except requests.RequestException as e:
        raise OcrError(f"OCR request failed: {e}") from e
    except ValueError as e:
        raise OcrError("OCR service returned an invalid response") from e

    parsed_results = result.get("ParsedResults") or []
    if result.get("IsErroredOnProcessing") or not parsed_results:
        message = result.get("ErrorMessage") or "OCR processing failed"
        if isinstance(message, list):
            message = "; ".join(message)
        raise OcrError(message)

    text = parsed_results[0].get("ParsedText", "")
    logger.debug("OCR returned %d characters", len(text))
    return text


def scan_receipt(image_path: Path, api_key: str, timeout: int = 30) -> ExtractionResult:
    """OCR a receipt image and look for its total.

    Args:
        image_path: Path to the receipt image.
        api_key: OCR.space API key.
        timeout: Request timeout in seconds.

    Returns:
        ExtractionResult for the recognized text.

    Raises:
        OcrError: If the image could not be read by the OCR service.
    """
    text = extract_text(image_path, api_key, timeout)
    result = build_result(text)
    if not result.success:
        logger.info("No total found in OCR text from %s", image_path)
    return result
