from formsmith.builder import SchemaBuilder
from formsmith.responses import collect
from formsmith.schema import parse_schema, serialize
from formsmith.validation import validate

__all__ = ["SchemaBuilder", "collect", "parse_schema", "serialize", "validate"]
