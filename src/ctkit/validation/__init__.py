"""Definition-time and value-time validation engines."""

from ctkit.validation.definition import DefinitionValidator, validate_definition
from ctkit.validation.lookups import InMemoryLookups, Lookups
from ctkit.validation.schema import SchemaCompiler, SchemaDocument
from ctkit.validation.values import FieldRuleset, ValueValidator

__all__ = [
    "DefinitionValidator",
    "FieldRuleset",
    "InMemoryLookups",
    "Lookups",
    "SchemaCompiler",
    "SchemaDocument",
    "ValueValidator",
    "validate_definition",
]
