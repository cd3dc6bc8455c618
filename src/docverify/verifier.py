"""
Document verifier: resolves the document type, extracts fields with the LLM
and compares them with the user's claim.
"""

import logging
from typing import Mapping, Optional, Union

from .comparison import ComparisonEngine
from .exceptions import ExtractionError, VerificationFailedError
from .extraction import ExtractionClient, create_openai_client
from .models import DocumentType, VerificationResult
from .registry import DocumentTypeRegistry, get_registry
from .settings import Settings

logger = logging.getLogger(__name__)


class DocumentVerifier:
    """Runs the verification pipeline for one document at a time"""

    def __init__(
        self,
        extraction_client: ExtractionClient,
        registry: Optional[DocumentTypeRegistry] = None,
        engine: Optional[ComparisonEngine] = None,
    ):
        """
        Initialize the verifier.

        Args:
            extraction_client: Client used to query the extraction model
            registry: Document type registry (default: packaged prompts)
            engine: Comparison engine (default: standard narrator)
        """
        self.extraction_client = extraction_client
        self.registry = registry or get_registry()
        self.engine = engine or ComparisonEngine()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentVerifier":
        """Build a verifier backed by the OpenAI API"""
        client = create_openai_client(settings.require_api_key(), timeout=settings.REQUEST_TIMEOUT)
        registry = DocumentTypeRegistry(settings.PROMPTS_FILE) if settings.PROMPTS_FILE else None
        return cls(
            ExtractionClient(client, model=settings.MODEL, temperature=settings.TEMPERATURE),
            registry=registry,
        )

    def verify(
        self,
        document_bytes: bytes,
        doc_type: Union[DocumentType, str],
        claim: Mapping[str, str],
    ) -> VerificationResult:
        """
        Verify a claim against a document.

        Args:
            document_bytes: Raw PDF content
            doc_type: Document type identifier
            claim: Field key to claimed value

        Returns:
            VerificationResult (a Fake verdict is a normal result, not an error)

        Raises:
            UnsupportedDocumentType: If doc_type is unknown (before any model call)
            VerificationFailedError: If extraction fails
        """
        definition = self.registry.resolve(doc_type)

        try:
            extracted = self.extraction_client.extract(document_bytes, definition)
        except ExtractionError as e:
            raise VerificationFailedError(f"Failed to extract details: {e}") from e

        result = self.engine.compare(definition, claim, extracted)
        if result.mismatched_fields:
            logger.info(
                "Verified %s document: %s (mismatched: %s)",
                definition.doc_type.value, result.status.value, ", ".join(result.mismatched_fields),
            )
        else:
            logger.info("Verified %s document: %s", definition.doc_type.value, result.status.value)
        return result
