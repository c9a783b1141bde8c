"""
VisuaRealm workspace - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in app/features/ has its own router, service and schemas.
  Adding a new feature = adding a new folder, no existing code changes needed.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings

# ── Feature Routers ──────────────────────────────────────
from app.features.auth.router import router as auth_router
from app.features.chat.router import router as chat_router
from app.features.image.router import router as image_router
from app.features.notepad.router import router as notepad_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")
    print(f"🤖 LLM Provider: {settings.LLM_PROVIDER} ({settings.LLM_MODEL})")
    print(f"📓 Notepad store: {settings.NOTEPAD_STORE}, completion: {settings.NOTEPAD_COMPLETION}")
    yield
    print("👋 Shutting down...")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Creative workspace backend: chat, image generation, notepad with AI dock",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Register Feature Routers ─────────────────────────
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(chat_router, prefix="/api", tags=["Chat"])
    app.include_router(image_router, prefix="/api", tags=["Image"])
    app.include_router(notepad_router, prefix="/api/notepad", tags=["Notepad"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
