import pytest

from formsmith.builder import SchemaBuilder
from formsmith.errors import SchemaError
from formsmith.field_types import FieldFormat, FieldType
from formsmith.fields import DateField, DropdownField, TextField
from formsmith.schema import dumps_schema, parse_schema, serialize


def build_sample() -> SchemaBuilder:
    builder = SchemaBuilder()
    builder.add_field(FieldType.TEXT, field_id="name", label="Name")
    builder.update_field("name", required=True)
    builder.add_field(FieldType.TEXTAREA, field_id="email", label="Email")
    builder.update_field("email", format="email")
    builder.add_field(FieldType.DATE, field_id="when", label="Date")
    builder.add_field(FieldType.DROPDOWN, field_id="color", label="Color")
    builder.add_option("color", "Red")
    builder.add_option("color", "Blue")
    builder.add_field(FieldType.DROPDOWN, field_id="empty", label="Empty")
    return builder


def test_serialize_emits_only_applicable_attributes():
    document = serialize(build_sample().state, "Survey")

    assert document == {
        "title": "Survey",
        "fields": [
            {"id": "name", "label": "Name", "type": "text", "required": True},
            {"id": "email", "label": "Email", "type": "textarea", "required": False, "format": "email"},
            {"id": "when", "label": "Date", "type": "date", "required": False},
            {"id": "color", "label": "Color", "type": "dropdown", "required": False, "options": ["Red", "Blue"]},
            {"id": "empty", "label": "Empty", "type": "dropdown", "required": False, "options": []},
        ],
    }


def test_serialize_canonical_bytes():
    builder = SchemaBuilder()
    builder.add_field(FieldType.TEXT, field_id="f1", label="Name")
    builder.update_field("f1", required=True)

    assert dumps_schema(builder.serialize("T")) == (
        b'{"title":"T","fields":[{"id":"f1","label":"Name","type":"text","required":true}]}'
    )


def test_serialize_is_deterministic():
    builder = build_sample()

    first = dumps_schema(builder.serialize("Survey"))
    second = dumps_schema(builder.serialize("Survey"))

    assert first == second


def test_serialize_skips_option_drafts():
    builder = build_sample()
    builder.set_option_draft("color", "Green")

    document = builder.serialize("Survey")

    assert document["fields"][3]["options"] == ["Red", "Blue"]
    assert "Green" not in dumps_schema(document).decode()


def test_round_trip_keeps_every_attribute():
    builder = build_sample()

    schema = parse_schema(dumps_schema(builder.serialize("Survey")))

    assert schema.title == "Survey"
    assert schema.fields == builder.fields
    assert schema.to_document() == builder.serialize("Survey")


def test_parse_schema_builds_tagged_fields(scenario_document):
    schema = parse_schema(scenario_document)

    assert schema.fields == (
        TextField(id="f1", label="Name", required=True),
        DropdownField(id="f2", label="Color", options=("Red", "Blue")),
    )


def test_parse_schema_drops_inapplicable_attributes():
    schema = parse_schema(
        {
            "_id": "abc",
            "title": "T",
            "fields": [
                {"id": "d", "label": "When", "type": "date", "format": "email", "options": ["x"]},
                {"id": "t", "label": "Age", "type": "text", "format": "number", "options": ["x"]},
            ],
        }
    )

    assert schema.fields == (
        DateField(id="d", label="When"),
        TextField(id="t", label="Age", format=FieldFormat.NUMBER),
    )


@pytest.mark.parametrize(
    "document",
    [
        {"fields": []},
        {"title": "T", "fields": [{"id": "a", "label": "A", "type": "checkbox"}]},
        {"title": "T", "fields": [{"id": "a", "label": "A", "type": "text", "format": "phone"}]},
        {"title": "T", "fields": [{"id": "", "label": "A", "type": "text"}]},
        {"title": "T", "fields": [{"id": "a", "label": "  ", "type": "text"}]},
        {"title": "T", "fields": [{"id": "a", "label": "A", "type": "dropdown", "options": [1]}]},
        {
            "title": "T",
            "fields": [
                {"id": "a", "label": "A", "type": "text"},
                {"id": "a", "label": "B", "type": "date"},
            ],
        },
        "not json",
        ["title"],
    ],
)
def test_parse_schema_rejects_malformed_documents(document):
    with pytest.raises(SchemaError) as excinfo:
        parse_schema(document)

    assert excinfo.value.errors


def test_parse_schema_reports_duplicate_ids():
    with pytest.raises(SchemaError) as excinfo:
        parse_schema(
            {
                "title": "T",
                "fields": [
                    {"id": "a", "label": "A", "type": "text"},
                    {"id": "a", "label": "B", "type": "date"},
                ],
            }
        )

    assert excinfo.value.errors == ["fields/1/id: duplicate id 'a'"]
