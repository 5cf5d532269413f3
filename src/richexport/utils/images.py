#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/images.py
"""Image source helpers.

Only ``data:`` URIs are ever decoded. Remote and relative image URLs are
passed through as text; nothing is fetched during an export.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[^;,]+)(?P<params>(?:;[^;,]*)*);base64,(?P<data>.*)$", re.DOTALL)

_MIME_TO_EXT = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/x-ms-bmp": "bmp",
    "image/tiff": "tiff",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}

# Formats python-docx can place inline
EMBEDDABLE_FORMATS = frozenset({"png", "jpg", "gif", "bmp", "tiff"})


def is_data_uri(uri: str) -> bool:
    """Check if a string is a data URI.

    Examples
    --------
        >>> is_data_uri("data:image/png;base64,...")
        True
        >>> is_data_uri("https://example.com/image.png")
        False

    """
    if not uri or not isinstance(uri, str):
        return False
    return uri.strip().lower().startswith("data:")


def decode_base64_image(data_uri: str) -> tuple[bytes | None, str | None]:
    """Decode a base64-encoded image data URI.

    Parameters
    ----------
    data_uri : str
        Data URI string in format: data:image/{format};base64,{data}

    Returns
    -------
    tuple[bytes or None, str or None]
        Tuple of (image_data, image_format) or (None, None) if decoding fails.
        image_format is the file extension without dot (e.g., "png", "jpg")

    """
    if not is_data_uri(data_uri):
        return None, None

    match = _DATA_URI_RE.match(data_uri.strip())
    if not match:
        logger.debug("Invalid data URI format for URI starting with %r", data_uri[:50])
        return None, None

    mime_type = match.group("mime").strip().lower()
    image_format = _MIME_TO_EXT.get(mime_type)
    if image_format is None:
        logger.debug("Unsupported image MIME type: %s", mime_type)
        return None, None

    payload = re.sub(r"\s+", "", match.group("data"))
    try:
        return base64.b64decode(payload, validate=True), image_format
    except (ValueError, binascii.Error) as e:
        logger.debug("Invalid base64 encoding in data URI (%s: %s)", type(e).__name__, e)
        return None, None
