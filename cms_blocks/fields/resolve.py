"""
Lecture des définitions de champs : champs imbriqués, prédicats de type, détection localisée.
"""
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from .. import config
from ..core.schemas import FieldDefinition, FieldSet
from ..errors import check_depth

log = logging.getLogger(__name__)

OBJECT = "object"
ARRAY = "array"
BLOCKS = "blocks"
RELATION = "relation"
UPLOAD = "upload"
UPLOAD_MANY = "uploadMany"


# ── Prédicats ────────────────────────────────────────────────────────────────

def is_localized(field_def: Optional[FieldDefinition]) -> bool:
    return field_def is not None and field_def.options.localized is True


def is_computed(field_def: Optional[FieldDefinition]) -> bool:
    """Champ calculé = UI uniquement, jamais envoyé au store."""
    return field_def is not None and callable(field_def.options.compute)


def is_object_field(field_def: Optional[FieldDefinition]) -> bool:
    return field_def is not None and field_def.type_name == OBJECT


def is_array_field(field_def: Optional[FieldDefinition]) -> bool:
    return field_def is not None and field_def.type_name == ARRAY


def is_blocks_field(field_def: Optional[FieldDefinition]) -> bool:
    return field_def is not None and field_def.type_name == BLOCKS


def is_relation_field(field_def: Optional[FieldDefinition]) -> bool:
    return field_def is not None and field_def.type_name == RELATION


def is_upload_field(field_def: Optional[FieldDefinition]) -> bool:
    """upload simple ou multiple (uploadMany)."""
    return field_def is not None and field_def.type_name in (UPLOAD, UPLOAD_MANY)


# ── Champs imbriqués ─────────────────────────────────────────────────────────

def coerce_field_set(raw: Any) -> Optional[FieldSet]:
    """Mapping brut → FieldSet ; les entrées dict sont validées, les invalides ignorées."""
    if not isinstance(raw, Mapping):
        return None
    out: FieldSet = {}
    for name, fd in raw.items():
        if isinstance(fd, FieldDefinition):
            out[name] = fd
        else:
            try:
                out[name] = FieldDefinition.model_validate(fd)
            except ValidationError as e:
                log.debug("champ imbriqué %r ignoré : %s", name, e)
    return out


def _resolve_source(source: Any, registry: Optional[Mapping]) -> Optional[FieldSet]:
    if source is None:
        return None
    if callable(source):
        if registry is None:
            return None
        try:
            return coerce_field_set(source(registry))
        except Exception as e:
            log.debug("callback de champs imbriqués non résolu : %s", e)
            return None
    return coerce_field_set(source)


def resolve_nested_fields(field_def: Optional[FieldDefinition], registry: Optional[Mapping] = None) -> Optional[FieldSet]:
    """
    Champs imbriqués d'un object (options.fields) ou d'un array d'objets (options.item).
    Un callback est appelé avec le registre ; registre absent ou exception → None.
    """
    if field_def is None:
        return None
    opts = field_def.options
    if opts.fields is not None:
        return _resolve_source(opts.fields, registry)
    if opts.item is not None:
        return _resolve_source(opts.item, registry)
    return None


def has_localized_fields(nested: Optional[Mapping[str, FieldDefinition]], registry: Optional[Mapping] = None,
                         _depth: int = 0) -> bool:
    """
    Vrai si un champ du set est localized, ou si l'un de ses sets imbriqués
    en contient un. Évalué à chaque appel (pas de cache).
    """
    if not nested:
        return False
    check_depth(_depth, config.max_depth(), "champs imbriqués")
    for fd in nested.values():
        if is_localized(fd):
            return True
        deeper = resolve_nested_fields(fd, registry)
        if deeper and has_localized_fields(deeper, registry, _depth + 1):
            return True
    return False
