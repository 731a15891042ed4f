"""SQLite — init + session + CRUD helpers"""
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from . import config
from .admin import CollectionConfig
from .localization.merge import merge_nested_localized, split_localized_fields
from .models import Base, ContentRecordDB, ContentRecordI18nDB

log = logging.getLogger(__name__)

_ENGINE: Optional[Engine] = None
_SESSION_FACTORY: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Engine SQLite créé au premier appel (chemin lu dans CMS_DB_PATH)."""
    global _ENGINE, _SESSION_FACTORY
    if _ENGINE is None:
        path = Path(config.db_path())
        path.parent.mkdir(parents=True, exist_ok=True)
        _ENGINE = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})
        _SESSION_FACTORY = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)
    return _ENGINE


def init_db(engine: Optional[Engine] = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())


def get_db():
    get_engine()
    db = _SESSION_FACTORY()
    try:
        yield db
    finally:
        db.close()


def jl(s: Optional[str], default: Any = None) -> Any:
    if not s:
        return {} if default is None else default
    try:
        return json.loads(s)
    except (TypeError, ValueError):
        return {} if default is None else default


def jd(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False)


# ── CRUD ─────────────────────────────────────────────────────────────────────

def db_save_record(db: Session, collection: CollectionConfig, data: Dict[str, Any], locale: str,
                   record_id: Optional[str] = None) -> Optional[ContentRecordDB]:
    """
    Enregistre un payload déjà wrappé dans une locale.
    Structure partagée entre locales ; seule la ligne de `locale` est écrite.
    None si `record_id` appartient à une autre collection.
    """
    split = split_localized_fields(data, collection.localized_field_names())

    rec = db.get(ContentRecordDB, record_id) if record_id else None
    if rec is not None and rec.collection != collection.name:
        log.warning("enregistrement %s hors de la collection %s", record_id, collection.name)
        return None
    if rec is None:
        rec = ContentRecordDB(record_id=record_id or str(uuid.uuid4()), collection=collection.name, data="{}")
        db.add(rec)

    structure = jl(rec.data)
    structure.update(split.non_localized)
    rec.data = jd(structure)

    row = (db.query(ContentRecordI18nDB)
           .filter_by(record_id=rec.record_id, locale=locale)
           .first())
    if row is None:
        row = ContentRecordI18nDB(record_id=rec.record_id, locale=locale, fields="{}")
        db.add(row)

    flat = jl(row.fields)
    flat.update(split.localized)
    row.fields = jd(flat)

    nested = jl(row.nested)
    for key in split.non_localized:
        nested.pop(key, None)
    nested.update(split.nested_localized or {})
    row.nested = jd(nested) if nested else None

    db.commit()
    db.refresh(rec)
    log.info("enregistrement %s/%s sauvegardé (%s)", collection.name, rec.record_id, locale)
    return rec


def db_get_record(db: Session, record_id: str, locale: str,
                  fallback_locale: Optional[str] = None,
                  collection: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Structure + valeurs localisées résolues par la chaîne (locale, fallback), limitée à `collection` si fournie."""
    rec = db.get(ContentRecordDB, record_id)
    if rec is None or (collection is not None and rec.collection != collection):
        return None

    rows = {r.locale: r for r in rec.translations}
    current = rows.get(locale)
    fallback = rows.get(fallback_locale) if fallback_locale and fallback_locale != locale else None

    result = jl(rec.data)
    for row in (fallback, current):
        if row is None:
            continue
        for key, value in jl(row.fields).items():
            if value is not None:
                result[key] = value

    result = merge_nested_localized(
        result,
        jl(current.nested) if current else None,
        jl(fallback.nested) if fallback else None,
    )
    result["id"] = rec.record_id
    return result


def db_delete_record(db: Session, record_id: str) -> bool:
    rec = db.get(ContentRecordDB, record_id)
    if rec is None:
        return False
    db.delete(rec)
    db.commit()
    return True
