"""
Registre des types de champs — nom de type → constructeur de FieldDefinition.

Les callbacks de champs imbriqués reçoivent ce registre :
    object_field = registry.create("object", fields=lambda r: {
        "name": r["text"](),
        "bio":  r["textarea"](localized=True),
    })
"""
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional

from ..core.schemas import FieldDefinition, FieldOptions

FieldConstructor = Callable[..., FieldDefinition]

BUILTIN_FIELD_TYPES = (
    "text", "textarea", "richText", "number", "email", "boolean", "select",
    "date", "datetime", "time", "json",
    "object", "array", "blocks",
    "relation", "upload", "uploadMany", "assetPreview",
)


def field_constructor(type_name: str) -> FieldConstructor:
    """Constructeur générique : make(**options) → FieldDefinition(type_name, options)."""

    def make(**options: Any) -> FieldDefinition:
        return FieldDefinition(type_name=type_name, options=FieldOptions(**options))

    make.__name__ = f"{type_name}_field"
    return make


class FieldTypeRegistry(Mapping[str, FieldConstructor]):
    """Mapping immuable nom de type → constructeur. register() renvoie un nouveau registre."""

    def __init__(self, constructors: Optional[Dict[str, FieldConstructor]] = None):
        self._constructors: Dict[str, FieldConstructor] = dict(constructors or {})

    def __getitem__(self, type_name: str) -> FieldConstructor:
        try:
            return self._constructors[type_name]
        except KeyError:
            raise KeyError(f"Type de champ inconnu : {type_name!r}. Registry : {list(self._constructors)}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._constructors)

    def __len__(self) -> int:
        return len(self._constructors)

    def register(self, type_name: str, constructor: Optional[FieldConstructor] = None) -> "FieldTypeRegistry":
        updated = dict(self._constructors)
        updated[type_name] = constructor or field_constructor(type_name)
        return FieldTypeRegistry(updated)

    def create(self, type_name: str, **options: Any) -> FieldDefinition:
        return self[type_name](**options)

    def names(self) -> list:
        return list(self._constructors)


def build_field_registry(type_names: Iterable[str]) -> FieldTypeRegistry:
    return FieldTypeRegistry({name: field_constructor(name) for name in type_names})


def default_field_registry() -> FieldTypeRegistry:
    """Registre des types intégrés."""
    return build_field_registry(BUILTIN_FIELD_TYPES)
