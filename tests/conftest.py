import json
from types import SimpleNamespace

import pytest

from docverify import DocumentTypeRegistry, DocumentVerifier, ExtractionClient


RENTAL_CLAIM = {
    "rentAmount": "10000",
    "startDate": "2024-01-01",
    "endDate": "2024-12-31",
    "tenantName": "Asha Rao",
    "landlordName": "Vikram Singh",
    "propertyLocation": "12 MG Road",
}

GIFT_REPLY = {
    "giftDate": "2023-05-14",
    "giverName": "Ramesh Kumar",
    "receiverName": "Sita Devi Kumar",
    "location": "Sub-Registrar Office, Bengaluru",
    "giftType": "Immovable property",
    "addressComponents": {
        "street": "4th Cross",
        "city": "Bengaluru",
        "state": "Karnataka",
        "country": "India",
        "zip": "560001",
    },
    "pageSummaries": ["Deed of gift between the parties.", "Schedule of the apartment."],
}


class FakeCompletions:
    """Stands in for client.chat.completions, recording every call"""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.content
        if isinstance(content, dict):
            content = json.dumps(content)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error))

    @property
    def calls(self):
        return self.chat.completions.calls


@pytest.fixture(scope="session")
def registry():
    return DocumentTypeRegistry()


@pytest.fixture
def make_verifier(registry):
    def _make(content=None, error=None):
        client = FakeOpenAI(content=content, error=error)
        verifier = DocumentVerifier(ExtractionClient(client), registry=registry)
        return verifier, client

    return _make
