"""
Configuration de démonstration — collection "pages" + blocs hero / columns / text / image.
Utilisée par l'app FastAPI par défaut (api/main.py).
"""
from .admin import AdminConfig, CollectionConfig
from .core.schemas import BlockDefinition, ListViewConfig
from .fields.registry import FieldTypeRegistry, default_field_registry


def demo_blocks(r: FieldTypeRegistry) -> list:
    return [
        BlockDefinition(name="hero", label="Hero", fields={
            "title":     r["text"](localized=True),
            "subtitle":  r["textarea"](localized=True),
            "badge":     r["text"](localized=True),
            "cta_label": r["text"](localized=True),
            "cta_href":  r["text"](),
            "alignment": r["select"](options=["left", "center", "right"]),
            "bg_src":    r["text"](),
        }),
        BlockDefinition(name="columns", label="Colonnes", allow_children=True,
                        allowed_children=["text", "image"], max_children=4, fields={
            "column_count": r["number"](),
        }),
        BlockDefinition(name="text", label="Texte", fields={
            "body": r["richText"](localized=True),
        }),
        BlockDefinition(name="image", label="Image", fields={
            "image":   r["upload"](relationName="assets"),
            "alt":     r["text"](localized=True),
            "caption": r["text"](localized=True),
        }),
    ]


def demo_pages(r: FieldTypeRegistry) -> CollectionConfig:
    return CollectionConfig(
        name="pages",
        fields={
            "title":   r["text"](localized=True),
            "slug":    r["text"](),
            "seo":     r["object"](fields=lambda reg: {
                "meta_title":       reg["text"](localized=True),
                "meta_description": reg["textarea"](localized=True),
                "no_index":         reg["boolean"](),
            }),
            "links":   r["array"](item=lambda reg: {
                "label": reg["text"](localized=True),
                "href":  reg["text"](),
            }),
            "content": r["blocks"](),
            "cover":   r["upload"](),
            "author":  r["relation"](relationName="author", type="single",
                                     listCell={"display": "avatarChip", "avatarField": "avatar.url"}),
            "tags":    r["relation"](relationName="tags", type="multiple"),
            "word_count": r["number"](compute=lambda values: len(str(values.get("content") or "").split())),
        },
        list=ListViewConfig(columns=["title", "author", "cover", "tags"]),
        relations=["author", "tags", "cover"],
    )


def build_demo_admin() -> AdminConfig:
    r = default_field_registry()
    admin = AdminConfig(field_types=r)
    for block in demo_blocks(r):
        admin.add_block(block)
    admin.add_collection(demo_pages(r))
    return admin
