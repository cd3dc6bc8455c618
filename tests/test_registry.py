import pytest

from docverify import DocumentType, DocumentTypeDefinition, FieldSpec, MatchRule, UnsupportedDocumentType
from docverify.registry import DocumentTypeRegistry, resolve


def test_every_document_type_is_registered(registry):
    assert set(registry.supported_types()) == set(DocumentType)


@pytest.mark.parametrize("doc_type", list(DocumentType))
def test_definition_invariants(registry, doc_type):
    definition = registry.resolve(doc_type)
    assert definition.doc_type is doc_type
    assert definition.instruction
    for key in definition.required:
        assert key in definition.schema_properties
    for spec in definition.fields:
        assert spec.key in definition.schema_properties


def test_resolve_accepts_strings_and_legacy_alias(registry):
    assert registry.resolve("rental").doc_type is DocumentType.RENTAL
    assert registry.resolve(" Gift ").doc_type is DocumentType.GIFT
    assert registry.resolve("sales").doc_type is DocumentType.SALE


@pytest.mark.parametrize("doc_type", ["visa", "", None, "rentals"])
def test_resolve_rejects_unknown_types(registry, doc_type):
    with pytest.raises(UnsupportedDocumentType):
        registry.resolve(doc_type)


def test_module_level_resolve_uses_packaged_prompts():
    assert resolve("authority").keys == ["grantorName", "granteeName", "authorityType", "validity", "location"]


def test_gift_fields_use_name_rule_for_people(registry):
    gift = registry.resolve(DocumentType.GIFT)
    rules = {spec.key: spec.rule for spec in gift.fields}
    assert rules["giverName"] is MatchRule.NAME
    assert rules["receiverName"] is MatchRule.NAME
    assert rules["giftDate"] is MatchRule.EXACT
    assert "addressComponents" in gift.required
    assert gift.schema_properties["addressComponents"]["type"] == "object"


def test_only_gift_names_use_name_rule(registry):
    for doc_type in (DocumentType.SALE, DocumentType.RENTAL, DocumentType.AUTHORITY):
        assert all(spec.rule is MatchRule.EXACT for spec in registry.resolve(doc_type).fields)


def test_gift_instruction_carries_extraction_rules(registry):
    instruction = registry.resolve("gift").instruction
    assert "'apartment' or 'car parking'" in instruction
    assert "Immovable property" in instruction
    assert "Location of where the gift deed is received/ registered - " in instruction


def test_response_schema_appends_page_summaries(registry):
    schema = registry.resolve("sale").response_schema()
    assert schema["type"] == "object"
    assert schema["properties"]["pageSummaries"]["type"] == "array"
    assert schema["properties"]["pageSummaries"]["items"]["type"] == "string"
    assert schema["required"][-1] == "pageSummaries"
    assert "pageSummaries" not in registry.resolve("sale").schema_properties


def test_definition_rejects_field_missing_from_schema():
    with pytest.raises(ValueError):
        DocumentTypeDefinition(
            doc_type=DocumentType.SALE,
            fields=(FieldSpec("cost", "Cost"), FieldSpec("owner", "Owner")),
            instruction="extract",
            schema_properties={"cost": {"type": "string"}},
            required=("cost",),
        )


def test_definition_rejects_required_key_missing_from_schema():
    with pytest.raises(ValueError):
        DocumentTypeDefinition(
            doc_type=DocumentType.SALE,
            fields=(FieldSpec("cost", "Cost"),),
            instruction="extract",
            schema_properties={"cost": {"type": "string"}},
            required=("cost", "saleDate"),
        )


def test_prompts_file_override(tmp_path):
    prompts = tmp_path / "prompts.yaml"
    prompts.write_text(
        "prompts:\n"
        + "".join(f"  {t.value}:\n    instruction: Custom {t.value} prompt.\n" for t in DocumentType),
        encoding="utf-8",
    )
    registry = DocumentTypeRegistry(prompts)
    assert registry.resolve("rental").instruction == "Custom rental prompt."


def test_missing_prompt_is_reported(tmp_path):
    prompts = tmp_path / "prompts.yaml"
    prompts.write_text("prompts:\n  sale:\n    instruction: Only sales.\n", encoding="utf-8")
    with pytest.raises(ValueError, match="gift"):
        DocumentTypeRegistry(prompts)


def test_missing_prompts_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DocumentTypeRegistry(tmp_path / "absent.yaml")
