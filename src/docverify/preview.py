"""
Page preview rendering for uploaded PDFs.
"""

import logging
from io import BytesIO
from typing import List

from pdf2image import convert_from_bytes
from PIL import Image

logger = logging.getLogger(__name__)


class PreviewRenderer:
    """Renders every page of a PDF to PNG in memory."""

    def __init__(self, dpi: int = 100, image_format: str = "PNG"):
        self.dpi = dpi
        self.image_format = image_format

    @staticmethod
    def image_to_bytes(image: Image.Image, format: str = "PNG") -> bytes:
        buffer = BytesIO()
        image.save(buffer, format=format)
        return buffer.getvalue()

    def render_preview_images(self, document_bytes: bytes) -> List[bytes]:
        """
        Convert PDF bytes to one image per page.

        Args:
            document_bytes: PDF file as bytes

        Returns:
            Encoded images in page order, or an empty list if conversion fails
        """
        try:
            images = convert_from_bytes(document_bytes, dpi=self.dpi)
        except Exception as e:
            logger.error("Error converting PDF to images: %s", e)
            return []

        logger.info("Converted PDF to %d image(s)", len(images))
        return [self.image_to_bytes(image, self.image_format) for image in images]
