"""
Data models for document verification.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

NOT_FOUND = "Not Found"

ADDRESS_FIELD = "addressComponents"
PAGE_SUMMARIES_FIELD = "pageSummaries"


class DocumentType(str, Enum):
    SALE = "sale"
    GIFT = "gift"
    RENTAL = "rental"
    AUTHORITY = "authority"


class MatchRule(str, Enum):
    """How a claimed value is compared with the extracted one"""
    EXACT = "exact"
    NAME = "name"


class MatchStatus(str, Enum):
    MATCH = "Match"
    MISMATCH = "Mismatch"


class VerdictStatus(str, Enum):
    ORIGINAL = "Original"
    FAKE = "Fake"


@dataclass(frozen=True)
class FieldSpec:
    """A compared field: its key in the extraction schema and its display label"""
    key: str
    label: str
    rule: MatchRule = MatchRule.EXACT


@dataclass(frozen=True)
class DocumentTypeDefinition:
    """
    Everything needed to verify one kind of document.

    The field list fixes the order of the comparison table. The schema
    properties describe what the model is asked to return; they can hold
    more keys than the field list (e.g. address components).
    """
    doc_type: DocumentType
    fields: Tuple[FieldSpec, ...]
    instruction: str
    schema_properties: Mapping[str, Dict[str, Any]]
    required: Tuple[str, ...]

    def __post_init__(self):
        missing_required = [key for key in self.required if key not in self.schema_properties]
        if missing_required:
            raise ValueError(
                f"Required keys missing from the {self.doc_type.value} schema: {missing_required}"
            )
        missing_fields = [spec.key for spec in self.fields if spec.key not in self.schema_properties]
        if missing_fields:
            raise ValueError(
                f"Field keys missing from the {self.doc_type.value} schema: {missing_fields}"
            )
        object.__setattr__(self, "schema_properties", MappingProxyType(dict(self.schema_properties)))

    @property
    def keys(self) -> List[str]:
        return [spec.key for spec in self.fields]

    def response_schema(self) -> Dict[str, Any]:
        """
        JSON schema the model reply must follow.

        Returns:
            The definition's properties plus a required ``pageSummaries``
            array of strings
        """
        properties = dict(self.schema_properties)
        properties[PAGE_SUMMARIES_FIELD] = {
            "type": "array",
            "items": {
                "type": "string",
                "description": "A brief summary of the content on a single page.",
            },
            "description": (
                "An array of strings, where each string is a summary of the "
                "corresponding page in the document."
            ),
        }
        return {
            "type": "object",
            "properties": properties,
            "required": [*self.required, PAGE_SUMMARIES_FIELD],
        }


@dataclass(frozen=True)
class ExtractedRecord:
    """Structured values the model extracted from one document"""
    values: Mapping[str, Any]
    page_summaries: Tuple[str, ...] = ()
    address_components: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], definition: DocumentTypeDefinition) -> "ExtractedRecord":
        """
        Build a record from a parsed model reply.

        The reply is untrusted: every schema key ends up present, with
        missing, null or empty scalars replaced by ``NOT_FOUND`` and
        missing objects replaced by an empty mapping. Objects are
        stored read-only.

        Args:
            payload: Parsed JSON object returned by the model
            definition: Definition the extraction was requested for

        Returns:
            ExtractedRecord with total field coverage
        """
        values: Dict[str, Any] = {}
        for key, schema in definition.schema_properties.items():
            raw = payload.get(key)
            if schema.get("type") == "object":
                values[key] = MappingProxyType(dict(raw) if isinstance(raw, Mapping) else {})
            elif raw is None or raw == "" or isinstance(raw, (dict, list)):
                values[key] = NOT_FOUND
            else:
                values[key] = raw if isinstance(raw, str) else str(raw)

        summaries = payload.get(PAGE_SUMMARIES_FIELD) or []
        if not isinstance(summaries, list):
            summaries = []
        page_summaries = tuple(str(item) for item in summaries if item is not None)

        address = values.get(ADDRESS_FIELD) if ADDRESS_FIELD in definition.schema_properties else None

        return cls(
            values=MappingProxyType(values),
            page_summaries=page_summaries,
            address_components=address,
        )


@dataclass(frozen=True)
class FieldComparison:
    """One row of the comparison table"""
    label: str
    user_value: str
    document_value: str
    status: MatchStatus

    @property
    def is_match(self) -> bool:
        return self.status is MatchStatus.MATCH

    def to_dict(self) -> Dict[str, str]:
        return {
            "field": self.label,
            "userData": self.user_value,
            "dataFromDocument": self.document_value,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class VerificationResult:
    """Verdict, comparison table and narrative for one verification request"""
    doc_type: DocumentType
    status: VerdictStatus
    details: Tuple[FieldComparison, ...]
    page_summaries: Tuple[str, ...] = ()
    address_components: Optional[Mapping[str, Any]] = None
    analysis: str = ""

    @property
    def mismatched_fields(self) -> List[str]:
        return [detail.label for detail in self.details if not detail.is_match]

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "status": self.status.value,
            "details": [detail.to_dict() for detail in self.details],
            "pageSummaries": list(self.page_summaries),
            "analysis": self.analysis,
            "docType": self.doc_type.value,
        }
        if self.address_components is not None:
            result["addressComponents"] = dict(self.address_components)
        return result
