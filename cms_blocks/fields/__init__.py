"""Registre des types de champs + lecture des définitions."""
from .registry import (
    BUILTIN_FIELD_TYPES,
    FieldTypeRegistry,
    field_constructor,
    build_field_registry,
    default_field_registry,
)
from .resolve import (
    is_localized,
    is_computed,
    is_object_field,
    is_array_field,
    is_blocks_field,
    is_relation_field,
    is_upload_field,
    resolve_nested_fields,
    coerce_field_set,
    has_localized_fields,
)

__all__ = [
    "BUILTIN_FIELD_TYPES", "FieldTypeRegistry", "field_constructor",
    "build_field_registry", "default_field_registry",
    "is_localized", "is_computed", "is_object_field", "is_array_field",
    "is_blocks_field", "is_relation_field", "is_upload_field",
    "coerce_field_set", "resolve_nested_fields", "has_localized_fields",
]
