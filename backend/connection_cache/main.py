from fastapi import FastAPI

from connection_cache.core.logging import configure_logging
from connection_cache.routers.health import router as health_router


configure_logging()

app = FastAPI(title="Connection Cache API", version="0.1.0")

app.include_router(health_router)
