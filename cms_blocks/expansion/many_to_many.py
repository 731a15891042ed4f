"""
Détection des relations multi-valuées (chargement explicite de la table de jointure).

Métadonnées du schéma serveur en priorité :
    schema["fields"][name]["metadata"] == {"type": "relation", "relationType": "manyToMany"}
sinon heuristique locale : typeName == "relation" et options.type == "multiple".
"""
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

from ..core.schemas import FieldDefinition
from ..fields.resolve import is_relation_field

MULTI_VALUED_RELATION_TYPES = frozenset({"hasmany", "manytomany", "multiple", "morphmany"})


def normalize_relation_type(relation_type: Any) -> str:
    """hasMany, has_many, has-many → hasmany."""
    if not isinstance(relation_type, str):
        return ""
    return relation_type.replace("-", "").replace("_", "").lower()


def is_multi_valued(relation_type: Any) -> bool:
    return normalize_relation_type(relation_type) in MULTI_VALUED_RELATION_TYPES


def _schema_fields(schema: Any) -> Mapping[str, Any]:
    if schema is None:
        return {}
    if isinstance(schema, BaseModel):
        schema = schema.model_dump(by_alias=True)
    if not isinstance(schema, Mapping):
        return {}
    fields = schema.get("fields")
    return fields if isinstance(fields, Mapping) else {}


def _schema_metadata(entry: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(entry, Mapping):
        return None
    metadata = entry.get("metadata")
    return metadata if isinstance(metadata, Mapping) else None


def detect_many_to_many_relations(fields: Mapping[str, FieldDefinition],
                                  schema: Optional[Any] = None) -> Dict[str, bool]:
    """nom de champ → True pour chaque relation multi-valuée."""
    schema_fields = _schema_fields(schema)
    result: Dict[str, bool] = {}

    names = list(fields) + [name for name in schema_fields if name not in fields]
    for name in names:
        metadata = _schema_metadata(schema_fields.get(name))
        if metadata is not None:
            if metadata.get("type") == "relation" and is_multi_valued(metadata.get("relationType")):
                result[name] = True
            continue

        field_def = fields.get(name)
        if is_relation_field(field_def) and field_def.options.type == "multiple":
            result[name] = True

    return result


def has_many_to_many_relations(plan: Optional[Mapping[str, Any]]) -> bool:
    return bool(plan)


def relation_objects_to_ids(record: Mapping[str, Any], plan: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Relations chargées [{id, ...}, ...] → [id, ...] pour l'édition en formulaire.
    Renvoie une copie ; l'enregistrement d'origine n'est pas modifié.
    """
    result = dict(record)
    for name in plan:
        value = result.get(name)
        if (isinstance(value, list) and value
                and isinstance(value[0], Mapping) and value[0].get("id")):
            result[name] = [item.get("id") if isinstance(item, Mapping) else item for item in value]
    return result
