"""
Text Extractor

Decodes a file payload into plain text according to its declared media type.

Rules:
- image/* never reaches the decoder (no OCR here), a fixed placeholder is returned
- text/*, JSON and XML are decoded with the configured encoding
- PDF gets a fixed placeholder (rich document parsing happens upstream)
- anything else is decoded like text; failure means "unavailable", never an exception
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..common.config import ExtractorConfig
from ..common.schemas import Payload

logger = logging.getLogger("docchat.analyzer.extractor")


IMAGE_PLACEHOLDER = (
    "This is an image file. I can provide basic image analysis but cannot read "
    "text content from images without OCR processing."
)

PDF_PLACEHOLDER = (
    "PDF content analysis requires additional processing. I can see this is a PDF document."
)


class ExtractionStatus(str, Enum):
    """How the text of an ExtractionResult was obtained"""
    TEXT = "text"  # decoded document content
    IMAGE_PLACEHOLDER = "image_placeholder"
    PDF_PLACEHOLDER = "pdf_placeholder"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ExtractionResult:
    """Result of text extraction"""
    status: ExtractionStatus
    text: Optional[str] = None
    reason: Optional[str] = None  # why extraction was unavailable

    @property
    def is_available(self) -> bool:
        return self.status != ExtractionStatus.UNAVAILABLE and bool(self.text)


class TextExtractor:
    """
    Turns a Payload into plain text.

    Media type routing (first match wins):
    1. image/*              -> image placeholder
    2. text/*, *json*, *xml* -> decode
    3. *pdf*                -> pdf placeholder
    4. anything else        -> decode, unavailable on error
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self._config = config or ExtractorConfig()

    def extract(self, payload: Payload) -> ExtractionResult:
        mime_type = (payload.mime_type or "").lower().strip()

        if mime_type.startswith("image/"):
            return ExtractionResult(status=ExtractionStatus.IMAGE_PLACEHOLDER, text=IMAGE_PLACEHOLDER)

        if self.is_text_type(mime_type):
            return self._decode(payload)

        if "pdf" in mime_type:
            return ExtractionResult(status=ExtractionStatus.PDF_PLACEHOLDER, text=PDF_PLACEHOLDER)

        return self._decode(payload)

    @staticmethod
    def is_text_type(mime_type: str) -> bool:
        return mime_type.startswith("text/") or "json" in mime_type or "xml" in mime_type

    def _decode(self, payload: Payload) -> ExtractionResult:
        """Decode payload bytes to text, reporting failures as UNAVAILABLE"""
        raw = self._payload_bytes(payload)
        if raw is None:
            return self._unavailable("payload is not valid base64")

        if len(raw) > self._config.max_payload_bytes:
            return self._unavailable(
                f"payload is {len(raw)} bytes, limit is {self._config.max_payload_bytes}"
            )

        try:
            text = raw.decode(self._config.text_encoding)
        except (UnicodeDecodeError, LookupError) as e:
            return self._unavailable(f"cannot decode as {self._config.text_encoding}: {e}")

        if not text.strip():
            return self._unavailable("payload contains no text")

        return ExtractionResult(status=ExtractionStatus.TEXT, text=text)

    @staticmethod
    def _payload_bytes(payload: Payload) -> Optional[bytes]:
        """Raw bytes of the payload; None if the base64 is malformed"""
        if isinstance(payload.data, bytes):
            return payload.data

        data = payload.data
        # data:<mime>;base64,<body>
        if "," in data:
            data = data.split(",", 1)[1]

        try:
            return base64.b64decode("".join(data.split()), validate=True)
        except (binascii.Error, ValueError):
            return None

    @staticmethod
    def _unavailable(reason: str) -> ExtractionResult:
        logger.warning("Text extraction unavailable: %s", reason)
        return ExtractionResult(status=ExtractionStatus.UNAVAILABLE, reason=reason)
