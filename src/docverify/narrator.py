"""
Narrative summaries of comparison results.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple, Union

from .models import DocumentType, FieldComparison

logger = logging.getLogger(__name__)

PLACEHOLDER = "[not found]"
NOT_IMPLEMENTED = "Analysis for this document type has not been implemented."

_TABLE_NOTE = (
    "The following table breaks down the comparison between the "
    "user-provided data and the document's contents."
)

# Template text and the field label feeding each placeholder
TEMPLATES: Dict[DocumentType, Tuple[str, Dict[str, str]]] = {
    DocumentType.SALE: (
        "This appears to be a sales document for a transaction costing {cost} on {date}, "
        "involving owner {owner} and salesperson {salesperson} at location {location}. ",
        {
            "cost": "Cost",
            "date": "Sale Date",
            "owner": "Owner Name",
            "salesperson": "Salesperson Name",
            "location": "Location",
        },
    ),
    DocumentType.GIFT: (
        "This appears to be a gift giving document for a {gift_type}, given on {date} "
        "from {giver} to {receiver} at location {location}. ",
        {
            "gift_type": "Gift Type",
            "date": "Gift Date",
            "giver": "Giver Name",
            "receiver": "Receiver Name",
            "location": "Enter Location where gift is received",
        },
    ),
    DocumentType.RENTAL: (
        "This appears to be a rental agreement between the landlord, {landlord}, and the "
        "tenant, {tenant}. The agreement, starting on {start}, is for the property located "
        "at {location}. The specified monthly rent is ₹{rent}. ",
        {
            "landlord": "Landlord Name",
            "tenant": "Tenant Name",
            "start": "Start Date",
            "location": "Property Location",
            "rent": "Rent Amount",
        },
    ),
    DocumentType.AUTHORITY: (
        "This appears to be a power of authority document granting {authority_type} from "
        "{grantor} to {grantee}, valid until {validity}, at location {location}. ",
        {
            "authority_type": "Authority Type",
            "grantor": "Grantor Name",
            "grantee": "Grantee Name",
            "validity": "Validity",
            "location": "Location",
        },
    ),
}


class AnalysisNarrator:
    """Renders one summary sentence per verification"""

    def __init__(self, templates: Optional[Dict[DocumentType, Tuple[str, Dict[str, str]]]] = None):
        self.templates = templates if templates is not None else TEMPLATES

    @staticmethod
    def lookup(comparisons: Iterable[FieldComparison], label: str) -> str:
        for comparison in comparisons:
            if comparison.label == label:
                return comparison.document_value or PLACEHOLDER
        return PLACEHOLDER

    def narrate(self, doc_type: Union[DocumentType, str], comparisons: Iterable[FieldComparison]) -> str:
        """
        Summarize what the document appears to be.

        Labels missing from the comparison list render as a placeholder
        instead of raising, so the summary never blocks the verdict.

        Args:
            doc_type: Document type being verified
            comparisons: Comparison rows produced for the document

        Returns:
            Summary text
        """
        try:
            doc_type = DocumentType(doc_type)
        except ValueError:
            return NOT_IMPLEMENTED
        if doc_type not in self.templates:
            return NOT_IMPLEMENTED

        template, labels = self.templates[doc_type]
        comparisons = list(comparisons)
        values = {name: self.lookup(comparisons, label) for name, label in labels.items()}
        missing = [labels[name] for name, value in values.items() if value == PLACEHOLDER]
        if missing:
            logger.debug("Narration for %s is missing %s", doc_type.value, missing)
        return template.format(**values) + _TABLE_NOTE
