from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI

from hexclaim.api.routes import router
from hexclaim.config import load_config
from hexclaim.session import init_session

app = FastAPI(title="hexclaim", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_project_root = Path(__file__).resolve().parent.parent


@app.on_event("startup")
async def _startup() -> None:
    config = load_config(env_file=_project_root / ".env")
    logger.info("Starting %dx%d board, block capacity %d", config.columns, config.rows, config.block_capacity)
    await init_session(config=config)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "hexclaim", "version": "0.1.0"}
