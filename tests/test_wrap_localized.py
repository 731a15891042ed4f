"""
Tests wrap $i18n — object, array d'objets, blocks, champs calculés,
passthrough par identité, valeurs orphelines, plafond de profondeur.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import copy

import pytest

from cms_blocks.core.schemas import BlockContent, BlockDefinition
from cms_blocks.errors import MaxDepthExceeded
from cms_blocks.fields.registry import default_field_registry
from cms_blocks.localization.unwrap import unwrap_localized_nested_values
from cms_blocks.localization.wrap import wrap_localized_nested_values


r = default_field_registry()

BLOCKS = {
    "hero": BlockDefinition(name="hero", fields={
        "title": r["text"](localized=True),
        "subtitle": r["text"](localized=True),
        "alignment": r["select"](),
    }),
    "columns": BlockDefinition(name="columns", allow_children=True, fields={
        "column_count": r["number"](),
    }),
    "text": BlockDefinition(name="text", fields={
        "body": r["richText"](localized=True),
        "reading_time": r["number"](compute=lambda values: 1),
    }),
}

FIELDS = {
    "title": r["text"](localized=True),
    "author": r["object"](fields={"name": r["text"](), "bio": r["text"](localized=True)}),
    "links": r["array"](item={"label": r["text"](localized=True), "href": r["text"]()}),
    "scores": r["array"](item={"a": r["number"]()}),
    "meta": r["object"](fields={"views": r["number"]()}),
    "content": r["blocks"](),
    "word_count": r["number"](compute=lambda values: 0),
}


def wrap(data, fields=FIELDS, blocks=BLOCKS, registry=r):
    return wrap_localized_nested_values(data, fields, blocks, registry)


# ── Scénarios de bout en bout ────────────────────────────────────────────────

def test_hero_block_values_wrapped():
    content = {"_tree": [{"id": "h1", "type": "hero", "children": []}],
               "_values": {"h1": {"title": "Hello", "subtitle": "World"}}}
    out = wrap({"content": content})
    assert out["content"]["_values"]["h1"] == {"title": {"$i18n": "Hello"}, "subtitle": {"$i18n": "World"}}
    assert out["content"]["_tree"] is content["_tree"]


def test_object_mixed_localization():
    out = wrap({"author": {"name": "Ada", "bio": "Scientist"}})
    assert out == {"author": {"name": "Ada", "bio": {"$i18n": "Scientist"}}}


def test_array_without_localized_items_is_identical():
    scores = [{"a": 1}, {"a": 2}]
    out = wrap({"scores": scores})
    assert out["scores"] is scores


def test_array_items_wrapped():
    out = wrap({"links": [{"label": "Accueil", "href": "/"}, "brut"]})
    assert out["links"] == [{"label": {"$i18n": "Accueil"}, "href": "/"}, "brut"]


# ── Règles du niveau racine ──────────────────────────────────────────────────

def test_flat_localized_field_not_wrapped():
    assert wrap({"title": "Bonjour"}) == {"title": "Bonjour"}


def test_computed_field_dropped():
    out = wrap({"title": "x", "word_count": 12})
    assert "word_count" not in out


def test_unknown_field_passes_through():
    assert wrap({"extra": {"bio": "x"}}) == {"extra": {"bio": "x"}}


def test_null_and_already_wrapped():
    already = {"$i18n": {"name": "Ada"}}
    out = wrap({"author": None, "meta": already})
    assert out["author"] is None
    assert out["meta"] is already


def test_object_without_localized_fields_same_object():
    meta = {"views": 3}
    assert wrap({"meta": meta})["meta"] is meta


def test_nested_already_wrapped_not_double_wrapped():
    out = wrap({"author": {"name": "Ada", "bio": {"$i18n": "Scientist"}}})
    assert out["author"]["bio"] == {"$i18n": "Scientist"}


def test_nested_null_kept():
    out = wrap({"author": {"name": "Ada", "bio": None}})
    assert out["author"]["bio"] is None


def test_object_with_two_keys_including_i18n_is_data():
    out = wrap({"author": {"name": "Ada", "bio": {"$i18n": "x", "other": 1}}})
    assert out["author"]["bio"] == {"$i18n": {"$i18n": "x", "other": 1}}


def test_input_never_mutated():
    data = {
        "author": {"name": "Ada", "bio": "Scientist"},
        "links": [{"label": "Accueil", "href": "/"}],
        "content": {"_tree": [{"id": "h1", "type": "hero"}], "_values": {"h1": {"title": "Hi"}}},
        "word_count": 3,
    }
    snapshot = copy.deepcopy(data)
    wrap(data)
    assert data == snapshot


# ── Champs blocks ────────────────────────────────────────────────────────────

def _content():
    return {
        "_tree": [{"id": "c1", "type": "columns", "children": [{"id": "t1", "type": "text"}]}],
        "_values": {"c1": {"column_count": 2}, "t1": {"body": "Salut", "reading_time": 4}},
        "_data": {"t1": {"cached": True}},
    }


def test_nested_block_values_wrapped_and_computed_dropped():
    out = wrap({"content": _content()})["content"]
    assert out["_values"]["t1"] == {"body": {"$i18n": "Salut"}}
    assert out["_data"] == {"t1": {"cached": True}}


def test_block_without_localized_fields_same_object():
    content = _content()
    out = wrap({"content": content})["content"]
    assert out["_values"]["c1"] is content["_values"]["c1"]


def test_blocks_without_localized_changes_same_content():
    content = {"_tree": [{"id": "c1", "type": "columns"}], "_values": {"c1": {"column_count": 3}}}
    assert wrap({"content": content})["content"] is content


def test_orphaned_block_values_kept():
    content = _content()
    content["_values"]["ghost"] = {"body": "perdu"}
    out = wrap({"content": content})["content"]
    assert out["_values"]["ghost"] == {"body": "perdu"}


def test_unknown_block_type_values_kept():
    content = {"_tree": [{"id": "x", "type": "carousel"}], "_values": {"x": {"body": "y"}}}
    assert wrap({"content": content})["content"] is content


def test_dict_shaped_block_registry():
    blocks = {"hero": {"fields": {
        "title": {"typeName": "text", "options": {"localized": True}},
        "alignment": {"typeName": "select"},
    }}}
    content = {"_tree": [{"id": "h1", "type": "hero"}], "_values": {"h1": {"title": "Hi", "alignment": "left"}}}
    out = wrap({"content": content}, blocks=blocks)["content"]
    assert out["_values"]["h1"] == {"title": {"$i18n": "Hi"}, "alignment": "left"}


def test_dict_shaped_block_without_fields():
    content = {"_tree": [{"id": "h1", "type": "hero"}], "_values": {"h1": {"title": "Hi"}}}
    assert wrap({"content": content}, blocks={"hero": {"label": "Hero"}})["content"] is content


def test_blocks_without_registry_pass_through():
    content = _content()
    out = wrap_localized_nested_values({"content": content}, FIELDS)
    assert out["content"] is content


def test_block_content_model():
    content = BlockContent.model_validate(_content())
    out = wrap({"content": content})["content"]
    assert isinstance(out, BlockContent)
    assert out.values["t1"] == {"body": {"$i18n": "Salut"}}
    assert content.values["t1"]["body"] == "Salut"


def test_blocks_field_inside_block():
    blocks = dict(BLOCKS)
    blocks["section"] = BlockDefinition(name="section", fields={"inner": r["blocks"]()})
    inner = {"_tree": [{"id": "h9", "type": "hero"}], "_values": {"h9": {"title": "Deep"}}}
    content = {"_tree": [{"id": "s1", "type": "section"}], "_values": {"s1": {"inner": inner}}}
    # "section" n'a pas de champ localisé direct : ses valeurs passent telles quelles
    out = wrap({"content": content}, blocks=blocks)["content"]
    assert out is content


# ── Callbacks ────────────────────────────────────────────────────────────────

def test_callback_fields_resolved_with_registry():
    fields = {"seo": r["object"](fields=lambda reg: {"title": reg["text"](localized=True)})}
    out = wrap({"seo": {"title": "Accueil"}}, fields=fields)
    assert out["seo"] == {"title": {"$i18n": "Accueil"}}


def test_callback_without_registry_is_opaque():
    fields = {"seo": r["object"](fields=lambda reg: {"title": reg["text"](localized=True)})}
    seo = {"title": "Accueil"}
    out = wrap_localized_nested_values({"seo": seo}, fields)
    assert out["seo"] is seo


def test_callback_error_is_opaque():
    fields = {"seo": r["object"](fields=lambda reg: {"title": reg["nope"]()})}
    seo = {"title": "Accueil"}
    assert wrap({"seo": seo}, fields=fields)["seo"] is seo


# ── Idempotence / inverse ────────────────────────────────────────────────────

def test_wrap_is_idempotent():
    data = {"author": {"name": "Ada", "bio": "Scientist"},
            "links": [{"label": "Accueil", "href": "/"}],
            "content": _content()}
    once = wrap(data)
    assert wrap(once) == once


def test_unwrap_restores_input_minus_computed():
    data = {"title": "T", "author": {"name": "Ada", "bio": "Scientist"},
            "links": [{"label": "Accueil", "href": "/"}], "word_count": 5}
    restored = unwrap_localized_nested_values(wrap(data), FIELDS, BLOCKS, r)
    expected = dict(data)
    del expected["word_count"]
    assert restored == expected


# ── Plafond de profondeur ────────────────────────────────────────────────────

def test_depth_ceiling(monkeypatch):
    monkeypatch.setenv("CMS_MAX_DEPTH", "2")
    fields = {"a": r["object"](fields={"b": r["object"](fields={"c": r["object"](fields={
        "d": r["text"](localized=True)})})})}
    with pytest.raises(MaxDepthExceeded):
        wrap({"a": {"b": {"c": {"d": "x"}}}}, fields=fields)


def test_depth_within_ceiling(monkeypatch):
    monkeypatch.setenv("CMS_MAX_DEPTH", "10")
    fields = {"a": r["object"](fields={"b": r["object"](fields={"d": r["text"](localized=True)})})}
    assert wrap({"a": {"b": {"d": "x"}}}, fields=fields) == {"a": {"b": {"d": {"$i18n": "x"}}}}
