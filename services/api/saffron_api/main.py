# Saffron API Main Entry Point
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .db import SessionLocal, init_db
from .ratelimit import limiter
from .services.accounts import ensure_bootstrap_admin
from .settings import settings
from .routers.ready import router as ready_router
from .routers.recipes import router as recipes_router
from .routers.catalog import router as catalog_router
from .routers.contact import router as contact_router
from .routers.admin import router as admin_router
from .routers.events import router as events_router
from .routers.dev import router as dev_router
from .routers.spa import router as spa_router

# Configure structured logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("saffron")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()()
    try:
        ensure_bootstrap_admin(db)
    finally:
        db.close()
    logger.info(f"Serving client bundle from {settings.client_dist_dir}")
    yield


app = FastAPI(title="Saffron API", version="0.1.0", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(catalog_router, prefix="/api", tags=["catalog"])
app.include_router(contact_router, prefix="/api", tags=["contact"])
app.include_router(admin_router, prefix="/api", tags=["admin"])
app.include_router(events_router, prefix="/api", tags=["events"])

if settings.enable_dev_routes:
    app.include_router(dev_router, prefix="/api", tags=["dev"])

# Catch-all last so API routes win
app.include_router(spa_router)
