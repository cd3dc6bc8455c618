"""
Registry of supported document types.

Each type is described by an immutable DocumentTypeDefinition: the fields
compared with the user's claim, the JSON schema the model must fill and the
extraction instruction. Instructions live in ``config/prompts.yaml``; field
lists and schemas are defined below.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .exceptions import UnsupportedDocumentType
from .models import (
    ADDRESS_FIELD,
    DocumentType,
    DocumentTypeDefinition,
    FieldSpec,
    MatchRule,
)

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS_FILE = Path(__file__).parent / "config" / "prompts.yaml"

# Wire values accepted in addition to the enum values
ALIASES = {
    "sales": DocumentType.SALE,
}

_STRING = {"type": "string"}

ADDRESS_SCHEMA = {
    "type": "object",
    "properties": {
        "street": _STRING,
        "city": _STRING,
        "state": _STRING,
        "country": _STRING,
        "zip": _STRING,
    },
}

FIELDS: Dict[DocumentType, Tuple[FieldSpec, ...]] = {
    DocumentType.SALE: (
        FieldSpec("cost", "Cost"),
        FieldSpec("saleDate", "Sale Date"),
        FieldSpec("ownerName", "Owner Name"),
        FieldSpec("salespersonName", "Salesperson Name"),
        FieldSpec("location", "Location"),
    ),
    DocumentType.GIFT: (
        FieldSpec("giftDate", "Gift Date"),
        FieldSpec("giverName", "Giver Name", MatchRule.NAME),
        FieldSpec("receiverName", "Receiver Name", MatchRule.NAME),
        FieldSpec("location", "Enter Location where gift is received"),
        FieldSpec("giftType", "Gift Type"),
    ),
    DocumentType.RENTAL: (
        FieldSpec("rentAmount", "Rent Amount"),
        FieldSpec("startDate", "Start Date"),
        FieldSpec("endDate", "End Date"),
        FieldSpec("tenantName", "Tenant Name"),
        FieldSpec("landlordName", "Landlord Name"),
        FieldSpec("propertyLocation", "Property Location"),
    ),
    DocumentType.AUTHORITY: (
        FieldSpec("grantorName", "Grantor Name"),
        FieldSpec("granteeName", "Grantee Name"),
        FieldSpec("authorityType", "Authority Type"),
        FieldSpec("validity", "Validity"),
        FieldSpec("location", "Location"),
    ),
}

# Extra schema properties that are extracted but not compared
EXTRA_PROPERTIES: Dict[DocumentType, Dict[str, Dict[str, Any]]] = {
    DocumentType.GIFT: {ADDRESS_FIELD: ADDRESS_SCHEMA},
}


class DocumentTypeRegistry:
    """Lookup table from document type identifier to its definition"""

    def __init__(self, prompts_file: Optional[Union[str, Path]] = None):
        """
        Load instructions and build every definition once.

        Args:
            prompts_file: Path to prompts YAML file (default: packaged config/prompts.yaml)
        """
        self.prompts = self._load_prompts(prompts_file or DEFAULT_PROMPTS_FILE)
        self._definitions: Dict[DocumentType, DocumentTypeDefinition] = {
            doc_type: self._build_definition(doc_type) for doc_type in DocumentType
        }

    def _load_prompts(self, prompts_file: Union[str, Path]) -> Dict[str, Dict[str, str]]:
        """Load prompts from YAML file"""
        try:
            with open(prompts_file, "r", encoding="utf-8") as f:
                prompts_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Prompts file '{prompts_file}' not found!")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing prompts YAML file: {e}")
        return prompts_data.get("prompts", {})

    def _get_prompt(self, doc_type: DocumentType, prompt_type: str = "instruction") -> str:
        category = self.prompts.get(doc_type.value)
        if not category or prompt_type not in category:
            raise ValueError(f"Prompt '{prompt_type}' not found for document type '{doc_type.value}'")
        return " ".join(str(category[prompt_type]).split())

    def _build_definition(self, doc_type: DocumentType) -> DocumentTypeDefinition:
        fields = FIELDS[doc_type]
        extra = EXTRA_PROPERTIES.get(doc_type, {})

        properties: Dict[str, Dict[str, Any]] = {spec.key: dict(_STRING) for spec in fields}
        properties.update(extra)

        return DocumentTypeDefinition(
            doc_type=doc_type,
            fields=fields,
            instruction=self._get_prompt(doc_type),
            schema_properties=properties,
            required=tuple(spec.key for spec in fields) + tuple(extra),
        )

    def supported_types(self) -> Tuple[DocumentType, ...]:
        return tuple(self._definitions)

    def resolve(self, doc_type: Union[DocumentType, str, None]) -> DocumentTypeDefinition:
        """
        Get the definition for a document type.

        Args:
            doc_type: DocumentType or its string value (case-insensitive)

        Returns:
            The matching DocumentTypeDefinition

        Raises:
            UnsupportedDocumentType: If the identifier is not registered
        """
        if isinstance(doc_type, DocumentType):
            return self._definitions[doc_type]

        key = str(doc_type or "").strip().lower()
        if key in ALIASES:
            return self._definitions[ALIASES[key]]
        try:
            return self._definitions[DocumentType(key)]
        except ValueError:
            logger.warning("Rejected unsupported document type %r", doc_type)
            raise UnsupportedDocumentType(doc_type) from None


_default_registry: Optional[DocumentTypeRegistry] = None


def get_registry() -> DocumentTypeRegistry:
    """Get or create the registry built from the packaged prompts"""
    global _default_registry
    if _default_registry is None:
        _default_registry = DocumentTypeRegistry()
    return _default_registry


def resolve(doc_type: Union[DocumentType, str, None]) -> DocumentTypeDefinition:
    return get_registry().resolve(doc_type)
