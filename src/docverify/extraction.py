"""
LLM extraction of structured fields from a PDF document.
"""

import base64
import json
import logging
import re
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from .exceptions import ExtractionEmptyResponse, ExtractionParseError, ExtractionServiceError
from .models import DocumentTypeDefinition, ExtractedRecord

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
PDF_MIME_TYPE = "application/pdf"


def create_openai_client(api_key: str, timeout: Optional[float] = None) -> OpenAI:
    """Build the OpenAI client handed to ExtractionClient"""
    if not api_key:
        raise ValueError("OpenAI API key not set. Set OPENAI_API_KEY or pass api_key.")
    if timeout is None:
        return OpenAI(api_key=api_key)
    return OpenAI(api_key=api_key, timeout=timeout)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code block wrapped around a JSON reply"""
    text = text.strip()
    text = re.sub(r'^```json\n?', '', text)
    text = re.sub(r'^```\n?', '', text)
    text = re.sub(r'\n?```$', '', text)
    return text.strip()


class ExtractionClient:
    """Sends a document and its extraction instruction to the model"""

    def __init__(self, client: OpenAI, model: str = DEFAULT_MODEL, temperature: float = 0.1):
        """
        Args:
            client: OpenAI client (or any object exposing chat.completions.create)
            model: Model used for extraction
            temperature: Sampling temperature
        """
        self.client = client
        self.model = model
        self.temperature = temperature

    def build_messages(self, document_bytes: bytes, definition: DocumentTypeDefinition) -> List[Dict[str, Any]]:
        encoded = base64.b64encode(document_bytes).decode("ascii")
        return [
            {
                "role": "user",
                "content": [
                    {
                        "type": "file",
                        "file": {
                            "filename": f"{definition.doc_type.value}.pdf",
                            "file_data": f"data:{PDF_MIME_TYPE};base64,{encoded}",
                        },
                    },
                    {"type": "text", "text": definition.instruction},
                ],
            }
        ]

    def build_response_format(self, definition: DocumentTypeDefinition) -> Dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {
                "name": f"{definition.doc_type.value}_document_extraction",
                "schema": definition.response_schema(),
                "strict": False,
            },
        }

    def _request(self, document_bytes: bytes, definition: DocumentTypeDefinition) -> Optional[str]:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(document_bytes, definition),
                response_format=self.build_response_format(definition),
                temperature=self.temperature,
            )
        except OpenAIError as e:
            logger.error("Extraction request failed: %s", e)
            raise ExtractionServiceError(f"Extraction service error: {e}") from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)

    def extract(self, document_bytes: bytes, definition: DocumentTypeDefinition) -> ExtractedRecord:
        """
        Extract the definition's fields and per-page summaries from a PDF.

        A single attempt is made; retrying is left to the caller.

        Args:
            document_bytes: Raw PDF content
            definition: Definition of the document type being verified

        Returns:
            ExtractedRecord with every schema key present

        Raises:
            ExtractionEmptyResponse: If the model returns no text
            ExtractionParseError: If the reply is not a JSON object
            ExtractionServiceError: If the service call itself fails
        """
        logger.info(
            "Extracting %s document with %s (%d bytes)",
            definition.doc_type.value, self.model, len(document_bytes),
        )

        text = self._request(document_bytes, definition)
        if not text or not text.strip():
            raise ExtractionEmptyResponse("No valid response text received from the extraction model")

        try:
            payload = json.loads(strip_code_fences(text))
        except json.JSONDecodeError as e:
            logger.error("Failed to parse extraction response as JSON: %s", e)
            raise ExtractionParseError("Invalid JSON response from the extraction model") from e

        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ExtractionParseError(
                f"Expected a JSON object from the extraction model, got {type(payload).__name__}"
            )

        return ExtractedRecord.from_payload(payload, definition)
