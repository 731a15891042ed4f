"""
Router FastAPI — surface HTTP du moteur de blocs.

GET  /api/collections                              → noms des collections
POST /api/collections/{c}/wrap                     → payload wrappé ($i18n)
POST /api/collections/{c}/unwrap                   → payload sans wrappers
GET  /api/collections/{c}/expansion                → plan "with" de la vue liste
GET  /api/collections/{c}/many-to-many             → relations multi-valuées
POST /api/collections/{c}/records?locale=          → wrap + découpage + sauvegarde
GET  /api/collections/{c}/records/{id}?locale=     → lecture résolue (locale → fallback)
POST /api/blocks/render                            → HTML d'un contenu blocks
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ... import config
from ...admin import AdminConfig, CollectionConfig
from ...core.schemas import BlockContent
from ...database import db_get_record, db_save_record, get_db
from ...errors import MaxDepthExceeded
from ...expansion.many_to_many import detect_many_to_many_relations
from ...expansion.planner import plan_collection_expansion
from ...localization.unwrap import unwrap_localized_nested_values
from ...localization.wrap import wrap_localized_nested_values
from ...renderer.html import render_content_html

log = logging.getLogger(__name__)
router = APIRouter(tags=["Blocks"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _admin(request: Request) -> AdminConfig:
    return request.app.state.admin


def _collection(request: Request, name: str) -> CollectionConfig:
    collection = _admin(request).get_collection(name)
    if collection is None:
        raise HTTPException(404, f"Collection inconnue : {name}")
    return collection


def _wrap(request: Request, collection: CollectionConfig, data: Dict[str, Any]) -> Dict[str, Any]:
    admin = _admin(request)
    try:
        return wrap_localized_nested_values(data, collection.fields, admin.blocks, admin.field_types)
    except MaxDepthExceeded as e:
        raise HTTPException(422, str(e))


# ── Collections ────────────────────────────────────────────────────────────────

@router.get("/api/collections")
def list_collections(request: Request) -> dict:
    return {"collections": list(_admin(request).collections)}


@router.post("/api/collections/{collection}/wrap")
def wrap_payload(collection: str, payload: Dict[str, Any], request: Request) -> Dict[str, Any]:
    return _wrap(request, _collection(request, collection), payload)


@router.post("/api/collections/{collection}/unwrap")
def unwrap_payload(collection: str, payload: Dict[str, Any], request: Request) -> Dict[str, Any]:
    coll = _collection(request, collection)
    admin = _admin(request)
    try:
        return unwrap_localized_nested_values(payload, coll.fields, admin.blocks, admin.field_types)
    except MaxDepthExceeded as e:
        raise HTTPException(422, str(e))


@router.get("/api/collections/{collection}/expansion")
def expansion_plan(collection: str, request: Request) -> dict:
    return {"with": plan_collection_expansion(_collection(request, collection))}


@router.get("/api/collections/{collection}/many-to-many")
def many_to_many(collection: str, request: Request) -> dict:
    coll = _collection(request, collection)
    return {"with": detect_many_to_many_relations(coll.fields)}


# ── Enregistrements ────────────────────────────────────────────────────────────

@router.post("/api/collections/{collection}/records")
def create_record(collection: str, payload: Dict[str, Any], request: Request,
                  locale: Optional[str] = Query(None),
                  db: Session = Depends(get_db)) -> dict:
    coll = _collection(request, collection)
    locale = locale or config.default_locale()
    wrapped = _wrap(request, coll, payload)
    rec = db_save_record(db, coll, wrapped, locale)
    return {"id": rec.record_id, "locale": locale}


@router.put("/api/collections/{collection}/records/{record_id}")
def update_record(collection: str, record_id: str, payload: Dict[str, Any], request: Request,
                  locale: Optional[str] = Query(None),
                  db: Session = Depends(get_db)) -> dict:
    coll = _collection(request, collection)
    locale = locale or config.default_locale()
    if db_get_record(db, record_id, locale, collection=coll.name) is None:
        raise HTTPException(404, "Enregistrement introuvable")
    rec = db_save_record(db, coll, _wrap(request, coll, payload), locale, record_id=record_id)
    if rec is None:
        raise HTTPException(404, "Enregistrement introuvable")
    return {"id": rec.record_id, "locale": locale}


@router.get("/api/collections/{collection}/records/{record_id}")
def get_record(collection: str, record_id: str, request: Request,
               locale: Optional[str] = Query(None),
               fallback: Optional[str] = Query(None),
               db: Session = Depends(get_db)) -> Dict[str, Any]:
    coll = _collection(request, collection)
    locale = locale or config.default_locale()
    record = db_get_record(db, record_id, locale, fallback or config.fallback_locale(), collection=coll.name)
    if record is None:
        raise HTTPException(404, "Enregistrement introuvable")
    return record


# ── Rendu ──────────────────────────────────────────────────────────────────────

@router.post("/api/blocks/render", response_class=HTMLResponse)
def render_blocks(payload: Dict[str, Any],
                  selected: Optional[str] = Query(None),
                  interactive: bool = Query(False)) -> HTMLResponse:
    """Reçoit un contenu blocks JSON ({_tree, _values, _data}), retourne le HTML."""
    try:
        content = BlockContent.model_validate(payload)
        html = render_content_html(
            content,
            selected_block_id=selected,
            on_block_click=(lambda block_id: None) if interactive else None,
        )
    except (ValidationError, MaxDepthExceeded) as e:
        raise HTTPException(422, str(e))
    return HTMLResponse(content=html)
