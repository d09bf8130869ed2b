import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrichain.api.errors import register_exception_handlers
from agrichain.api.routes.activities import router as activities_router
from agrichain.api.routes.auth import router as auth_router
from agrichain.api.routes.cooperatives import router as cooperatives_router
from agrichain.api.routes.dispatches import router as dispatches_router
from agrichain.api.routes.farmers import router as farmers_router
from agrichain.api.routes.inventory import router as inventory_router
from agrichain.api.routes.payments import router as payments_router
from agrichain.api.routes.procurements import router as procurements_router
from agrichain.api.routes.products import router as products_router
from agrichain.api.routes.sales import router as sales_router
from agrichain.core.config import settings
from agrichain.core.logging_config import configure_logging
from agrichain.db.database import SessionLocal, create_schema, engine, verify_connection
from agrichain.services.seed import seed_demo_data

logger = logging.getLogger(__name__)


def _seed() -> None:
    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    verify_connection()
    if settings.auto_create_schema:
        create_schema()
        logger.info("Database schema created")
    if settings.seed_demo_data:
        _seed()
    logger.info(
        "%s started (dispatch inventory mode: %s, completed sale edit policy: %s)",
        settings.app_name,
        settings.dispatch_inventory_mode,
        settings.completed_sale_edit_policy,
    )
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

for router in (
    auth_router,
    procurements_router,
    sales_router,
    dispatches_router,
    inventory_router,
    activities_router,
    farmers_router,
    products_router,
    payments_router,
    cooperatives_router,
):
    app.include_router(router, prefix="/api")


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok"}
