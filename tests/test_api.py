import base64
import sys

import openai
import pytest
from fastapi.testclient import TestClient

from api import main
from docverify.settings import Settings

from conftest import RENTAL_CLAIM


class FakeRenderer:
    def __init__(self, images=(b"page-1-png", b"page-2-png")):
        self.images = list(images)
        self.calls = 0

    def render_preview_images(self, document_bytes):
        self.calls += 1
        return self.images


@pytest.fixture
def api(make_verifier):
    state = {}

    def configure(content=None, error=None, images=(b"page-1-png", b"page-2-png")):
        verifier, client = make_verifier(content=content, error=error)
        renderer = FakeRenderer(images)
        main.app.dependency_overrides[main.get_verifier] = lambda: verifier
        main.app.dependency_overrides[main.get_renderer] = lambda: renderer
        state.update(client=client, renderer=renderer)
        return TestClient(main.app), state

    yield configure
    main.app.dependency_overrides.clear()


def upload(doc_type, claim):
    return {
        "files": {"document": ("agreement.pdf", b"%PDF-1.4 test", "application/pdf")},
        "data": {"docType": doc_type, **claim},
    }


def test_verify_document_returns_verdict_and_previews(api):
    client, state = api(content={**RENTAL_CLAIM, "pageSummaries": ["Lease terms."]})

    response = client.post("/api/verify-document", **upload("rental", RENTAL_CLAIM))

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Original"
    assert body["docType"] == "rental"
    assert len(body["details"]) == 6
    assert body["pageSummaries"] == ["Lease terms."]
    assert "tenant, Asha Rao" in body["analysis"]
    assert body["verificationId"]
    assert base64.b64decode(body["images"][0]) == b"page-1-png"
    assert "addressComponents" not in body


def test_claim_fields_come_from_form(api):
    client, state = api(content=RENTAL_CLAIM)

    response = client.post("/api/verify-document", **upload("rental", {**RENTAL_CLAIM, "rentAmount": "9000"}))

    body = response.json()
    assert body["status"] == "Fake"
    rent = body["details"][0]
    assert rent == {
        "field": "Rent Amount",
        "userData": "9000",
        "dataFromDocument": "10000",
        "status": "Mismatch",
    }


def test_missing_document_is_rejected(api):
    client, state = api(content={})

    response = client.post("/api/verify-document", data={"docType": "rental"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "No document uploaded."
    assert state["client"].calls == []


def test_unsupported_type_is_rejected_before_extraction(api):
    client, state = api(content={})

    response = client.post("/api/verify-document", **upload("visa", {}))

    assert response.status_code == 400
    assert "visa" in response.json()["detail"]["details"]
    assert state["client"].calls == []
    assert state["renderer"].calls == 0


def test_empty_preview_fails_request(api):
    client, state = api(content=RENTAL_CLAIM, images=())

    response = client.post("/api/verify-document", **upload("rental", RENTAL_CLAIM))

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "Failed to verify document."
    assert state["client"].calls == []


def test_extraction_failure_returns_server_error(api):
    client, state = api(error=openai.OpenAIError("rate limited"))

    response = client.post("/api/verify-document", **upload("sale", {"cost": "100"}))

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "Failed to verify document."
    assert "rate limited" in detail["details"]


def test_health(api):
    client, _ = api()

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unsupported_type_still_closes_upload(api, monkeypatch):
    closed_by = []
    original_close = main.UploadFile.close

    async def close_spy(self):
        closed_by.append(sys._getframe(1).f_code.co_name)
        await original_close(self)

    monkeypatch.setattr(main.UploadFile, "close", close_spy)
    client, _ = api(content={})

    response = client.post("/api/verify-document", **upload("visa", {}))

    assert response.status_code == 400
    assert "verify_document" in closed_by


def test_missing_api_key_returns_server_error(monkeypatch):
    monkeypatch.setattr(main, "verifier", None)
    monkeypatch.setattr(main, "settings", Settings(OPENAI_API_KEY=None))
    main.app.dependency_overrides[main.get_renderer] = lambda: FakeRenderer()
    try:
        response = TestClient(main.app).post("/api/verify-document", **upload("rental", RENTAL_CLAIM))
    finally:
        main.app.dependency_overrides.clear()

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "Verifier is not configured."
    assert "OPENAI_API_KEY" in detail["details"]
    assert main.verifier is None


def test_sales_alias_is_echoed_in_canonical_form(api):
    sale = {
        "cost": "2500000",
        "saleDate": "2022-08-01",
        "ownerName": "Meera Iyer",
        "salespersonName": "Arjun Das",
        "location": "Chennai",
    }
    client, state = api(content=sale)

    response = client.post("/api/verify-document", **upload("sales", sale))

    assert response.status_code == 200
    body = response.json()
    assert body["docType"] == "sale"
    assert body["status"] == "Original"
    assert len(state["client"].calls) == 1
