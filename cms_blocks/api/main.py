"""
CMS BLOCKS — FastAPI app
Démarrer : uvicorn cms_blocks.api.main:app --reload --port 8002
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..admin import AdminConfig
from ..demo import build_demo_admin
from .routes.blocks import router as blocks_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)


def create_app(admin: Optional[AdminConfig] = None, init_storage: bool = True) -> FastAPI:
    """App FastAPI sur une configuration admin (démo par défaut)."""
    app = FastAPI(title="CMS Blocks — contenu localisé", version="0.3.0", docs_url="/docs")
    app.state.admin = admin if admin is not None else build_demo_admin()
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(blocks_router)

    if init_storage:
        @app.on_event("startup")
        def startup():
            from ..database import init_db
            init_db()
            log.info("DB initialisée (SQLite)")

    return app


app = create_app()
