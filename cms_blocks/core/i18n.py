"""
i18n — marqueur de traduction {"$i18n": valeur}.

Wrapper   : {"$i18n": "Bonjour"}  → valeur propre à une locale (payload envoyé au store)
Marqueur  : {"$i18n": True}       → emplacement d'une valeur localisée (structure stockée)

Un objet n'est un wrapper que s'il a EXACTEMENT une clé, "$i18n".
Un objet {"$i18n": ..., "autre": ...} reste une donnée ordinaire.
"""
from typing import Any, Mapping

I18N_KEY = "$i18n"
I18N_MARKER = {I18N_KEY: True}


def is_i18n_wrapped(value: Any) -> bool:
    return isinstance(value, Mapping) and len(value) == 1 and I18N_KEY in value


def wrap_i18n(value: Any) -> dict:
    return {I18N_KEY: value}


def unwrap_i18n(value: Any) -> Any:
    """Retire une seule couche de wrapper ; sans effet sur une valeur déjà nue."""
    if is_i18n_wrapped(value):
        return value[I18N_KEY]
    return value


def is_i18n_marker(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get(I18N_KEY) is True


def strip_i18n_wrappers(value: Any) -> Any:
    """
    Variante structurelle (sans registre) : remplace chaque wrapper rencontré
    par sa valeur, une couche par wrapper. La valeur extraite n'est pas re-parcourue.
    Renvoie l'objet d'origine quand rien n'a changé.
    """
    if is_i18n_wrapped(value):
        return value[I18N_KEY]
    if isinstance(value, Mapping):
        out = {}
        changed = False
        for key, child in value.items():
            stripped = strip_i18n_wrappers(child)
            changed = changed or stripped is not child
            out[key] = stripped
        return out if changed else value
    if isinstance(value, list):
        items = [strip_i18n_wrappers(v) for v in value]
        if any(new is not old for new, old in zip(items, value)):
            return items
        return value
    return value
