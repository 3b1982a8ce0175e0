from fastapi import FastAPI
import logging

from lifeboard.api.deps import get_settings
from lifeboard.api.routes import router
from lifeboard.store_singleton import init_store

app = FastAPI(title="lifeboard", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    settings = get_settings()
    store = init_store(settings=settings)
    logger.info("Board store ready (%s backend, %d boards cached)", settings.backend, len(store))


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "lifeboard", "version": "0.1.0"}
