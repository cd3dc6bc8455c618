"""
Comparison of claimed values against extracted document values.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from .models import (
    NOT_FOUND,
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

logger = logging.getLogger(__name__)


def exact_match(user_value: str, document_value: str) -> bool:
    return normalize_generic(user_value) == normalize_generic(document_value)


MATCHERS: Dict[MatchRule, Callable[[str, str], bool]] = {
    MatchRule.EXACT: exact_match,
    MatchRule.NAME: is_name_match,
}


class ComparisonEngine:
    """Reconciles a user's claim with what the model found in the document"""

    def __init__(self, narrator: Optional[AnalysisNarrator] = None):
        self.narrator = narrator or AnalysisNarrator()

    def compare_field(self, spec: FieldSpec, claim: Mapping[str, str], extracted: ExtractedRecord) -> FieldComparison:
        user_value = claim.get(spec.key) or ""
        document_value = extracted.values.get(spec.key) or NOT_FOUND
        if not isinstance(user_value, str):
            user_value = str(user_value)
        if not isinstance(document_value, str):
            document_value = str(document_value)

        matched = MATCHERS[spec.rule](user_value, document_value)
        return FieldComparison(
            label=spec.label,
            user_value=user_value,
            document_value=document_value,
            status=MatchStatus.MATCH if matched else MatchStatus.MISMATCH,
        )

    def compare(
        self,
        definition: DocumentTypeDefinition,
        claim: Mapping[str, str],
        extracted: ExtractedRecord,
    ) -> VerificationResult:
        """
        Compare every field of the definition, in order.

        A single mismatch makes the whole document Fake; there is no
        partial scoring.

        Args:
            definition: Definition of the document type being verified
            claim: Field key to claimed value (missing keys count as empty)
            extracted: Values extracted from the document

        Returns:
            VerificationResult with one comparison per field and the narrative
        """
        details: List[FieldComparison] = [
            self.compare_field(spec, claim, extracted) for spec in definition.fields
        ]
        status = VerdictStatus.ORIGINAL if all(d.is_match for d in details) else VerdictStatus.FAKE

        logger.debug(
            "Compared %d %s fields: %s",
            len(details), definition.doc_type.value, status.value,
        )

        return VerificationResult(
            doc_type=definition.doc_type,
            status=status,
            details=tuple(details),
            page_summaries=extracted.page_summaries,
            address_components=extracted.address_components,
            analysis=self.narrator.narrate(definition.doc_type, details),
        )
