"""
Configuration — lue dans l'environnement à chaque appel (os.getenv).

CMS_ENV              development | production  (diagnostics renderer)
CMS_MAX_DEPTH        plafond de récursion des parcours (arbre + champs)
CMS_DEFAULT_LOCALE   locale par défaut des requêtes
CMS_FALLBACK_LOCALE  deuxième maillon de la chaîne de locales en lecture
CMS_DB_PATH          fichier SQLite du store de référence
"""
import os
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent / "data"

DEFAULT_MAX_DEPTH = 64


def environment() -> str:
    return os.getenv("CMS_ENV", "development").strip().lower()


def is_production() -> bool:
    return environment() == "production"


def max_depth() -> int:
    raw = os.getenv("CMS_MAX_DEPTH", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_DEPTH
    return value if value > 0 else DEFAULT_MAX_DEPTH


def default_locale() -> str:
    return os.getenv("CMS_DEFAULT_LOCALE", "fr")


def fallback_locale() -> str:
    return os.getenv("CMS_FALLBACK_LOCALE", "en")


def db_path() -> str:
    return os.getenv("CMS_DB_PATH", str(DATA_DIR / "cms_blocks.db"))
