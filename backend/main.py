"""
Edit Preview Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, diff
from services.config_manager import ConfigManager

logger = logging.getLogger("edit_preview")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    logger.info("Starting Edit Preview Backend...")
    config_manager = ConfigManager.get_instance()
    workspace_root = config_manager.get_config().get("workspace", {}).get("root", ".")
    logger.info("ConfigManager initialized, workspace root: %s", workspace_root)

    yield
    logger.info("Shutting down Edit Preview Backend...")


app = FastAPI(
    title="Edit Preview Backend",
    description="Unified diff previews of editor workspace edits",
    version="1.0.0",
    lifespan=lifespan,
)

# Editor extensions call the backend from a local origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "edit-preview-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
