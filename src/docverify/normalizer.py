"""
String normalization used when comparing claimed and extracted values.
"""

import re
from typing import Any, List, Optional

HONORIFICS = frozenset({"mr", "mrs", "ms", "dr", "prof", "miss"})

_SEPARATORS = re.compile(r"[\s,\-.]+")
_NAME_PUNCTUATION = re.compile(r"[.,]")


def normalize_generic(value: Optional[Any]) -> str:
    """
    Normalize a value for exact comparison.

    Whitespace, commas, hyphens and periods are removed entirely, so
    " A-B, c.d " and "abcd" compare equal.

    Args:
        value: Raw value (None is treated as empty)

    Returns:
        Lower-cased string without separators
    """
    if value is None:
        return ""
    return _SEPARATORS.sub("", str(value).strip().lower())


def _name_words(name: str) -> List[str]:
    cleaned = _NAME_PUNCTUATION.sub("", name.strip().lower())
    return [word for word in cleaned.split() if word not in HONORIFICS]


def is_name_match(user_name: Optional[str], doc_name: Optional[str]) -> bool:
    """
    Check that every word of the claimed name appears in the document name.

    Honorifics are ignored and word order does not matter. The document
    name may carry extra words such as a middle name, the claim may not.

    Args:
        user_name: Name as claimed by the user
        doc_name: Name as extracted from the document

    Returns:
        True if the claimed words are a subset of the document words
    """
    if not user_name or not doc_name:
        return False
    doc_words = set(_name_words(doc_name))
    return all(word in doc_words for word in _name_words(user_name))
