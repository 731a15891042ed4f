"""Tests registre des types de champs + résolution des champs imbriqués."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest

from cms_blocks.errors import MaxDepthExceeded
from cms_blocks.fields.registry import BUILTIN_FIELD_TYPES, FieldTypeRegistry, default_field_registry
from cms_blocks.fields.resolve import (
    has_localized_fields, is_computed, is_localized, is_upload_field, resolve_nested_fields,
)


@pytest.fixture
def r():
    return default_field_registry()


# ── Registre ─────────────────────────────────────────────────────────────────

def test_builtin_types_registered(r):
    assert set(BUILTIN_FIELD_TYPES) <= set(r)
    assert len(r) == len(BUILTIN_FIELD_TYPES)


def test_constructor_builds_definition(r):
    fd = r["text"](localized=True)
    assert fd.type_name == "text"
    assert is_localized(fd)


def test_unknown_type_raises_key_error(r):
    with pytest.raises(KeyError):
        r["inexistant"]


def test_register_returns_new_registry(r):
    extended = r.register("color")
    assert "color" in extended
    assert "color" not in r
    assert extended.create("color").type_name == "color"


def test_empty_registry():
    assert len(FieldTypeRegistry()) == 0


# ── Prédicats ────────────────────────────────────────────────────────────────

def test_computed_field(r):
    assert is_computed(r["number"](compute=lambda values: 1))
    assert not is_computed(r["number"]())
    assert not is_computed(None)


def test_upload_predicates(r):
    assert is_upload_field(r["upload"]())
    assert is_upload_field(r["uploadMany"]())
    assert not is_upload_field(r["relation"]())


# ── resolve_nested_fields ────────────────────────────────────────────────────

def test_resolve_static_fields(r):
    fd = r["object"](fields={"bio": r["text"](localized=True)})
    nested = resolve_nested_fields(fd)
    assert list(nested) == ["bio"]


def test_resolve_callback_receives_registry(r):
    seen = []

    def build(reg):
        seen.append(reg)
        return {"bio": reg["text"](localized=True)}

    nested = resolve_nested_fields(r["object"](fields=build), r)
    assert seen == [r]
    assert nested["bio"].options.localized is True


def test_resolve_callback_without_registry(r):
    fd = r["object"](fields=lambda reg: {"bio": reg["text"](localized=True)})
    assert resolve_nested_fields(fd) is None


def test_resolve_callback_error_returns_none(r, caplog):
    fd = r["array"](item=lambda reg: {"x": reg["inconnu"]()})
    with caplog.at_level(logging.DEBUG, logger="cms_blocks.fields.resolve"):
        assert resolve_nested_fields(fd, r) is None
    assert "non résolu" in caplog.text


def test_resolve_array_item(r):
    fd = r["array"](item={"label": r["text"](localized=True)})
    assert "label" in resolve_nested_fields(fd, r)


def test_resolve_raw_dict_entries(r):
    fd = r["object"](fields=lambda reg: {"bio": {"typeName": "text", "options": {"localized": True}}})
    nested = resolve_nested_fields(fd, r)
    assert nested["bio"].type_name == "text"


def test_resolve_scalar_field(r):
    assert resolve_nested_fields(r["text"](), r) is None


# ── has_localized_fields ─────────────────────────────────────────────────────

def test_has_localized_direct(r):
    assert has_localized_fields({"a": r["text"](localized=True)}, r)


def test_has_localized_deep(r):
    nested = {"seo": r["object"](fields={"meta": r["object"](fields={"title": r["text"](localized=True)})})}
    assert has_localized_fields(nested, r)


def test_has_localized_none(r):
    assert not has_localized_fields({"a": r["number"](), "b": r["text"]()}, r)
    assert not has_localized_fields(None, r)
    assert not has_localized_fields({}, r)


def test_has_localized_self_referencing_callback_hits_ceiling(r, monkeypatch):
    monkeypatch.setenv("CMS_MAX_DEPTH", "5")

    def tree(reg):
        return {"child": reg["object"](fields=tree)}

    with pytest.raises(MaxDepthExceeded):
        has_localized_fields(tree(r), r)
