"""
Document Verifier Package

Checks a user's claimed facts about a sale, gift, rental or power of
authority document against the document itself, using LLM extraction
followed by deterministic code-based comparison.
"""

from .comparison import ComparisonEngine
from .exceptions import (
    DocumentVerificationError,
    UnsupportedDocumentType,
    ExtractionError,
    ExtractionEmptyResponse,
    ExtractionParseError,
    ExtractionServiceError,
    VerificationFailedError,
    PreviewRenderingError,
)
from .extraction import ExtractionClient
from .models import (
    NOT_FOUND,
    DocumentType,
    DocumentTypeDefinition,
    ExtractedRecord,
    FieldComparison,
    FieldSpec,
    MatchRule,
    MatchStatus,
    VerdictStatus,
    VerificationResult,
)
from .narrator import AnalysisNarrator
from .normalizer import is_name_match, normalize_generic
from .registry import DocumentTypeRegistry, resolve
from .verifier import DocumentVerifier

__version__ = "1.0.0"
__all__ = [
    "DocumentVerificationError",
    "UnsupportedDocumentType",
    "ExtractionError",
    "ExtractionEmptyResponse",
    "ExtractionParseError",
    "ExtractionServiceError",
    "VerificationFailedError",
    "PreviewRenderingError",
    "NOT_FOUND",
    "DocumentType",
    "DocumentTypeDefinition",
    "ExtractedRecord",
    "FieldComparison",
    "FieldSpec",
    "MatchRule",
    "MatchStatus",
    "VerdictStatus",
    "VerificationResult",
    "normalize_generic",
    "is_name_match",
    "DocumentTypeRegistry",
    "resolve",
    "ExtractionClient",
    "ComparisonEngine",
    "AnalysisNarrator",
    "DocumentVerifier",
]
