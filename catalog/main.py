from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER
from catalog.core.config import settings
from catalog.core.middleware_correlation import CorrelationIdMiddleware
from catalog.core.logging import get_logger, setup_logging
from catalog.core.errors import register_exception_handlers
from catalog.db.session import dispose_engine


# Routers
from fastapi import APIRouter
from catalog.api.routes.authors import router as authors_router


setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting %s", settings.PROJECT_NAME)
    yield
    await dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Local Library - server-rendered catalog of authors and their books.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
)

# Middlewares
app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Send visitors to the author listing."""
    return RedirectResponse(settings.authors_path, status_code=HTTP_303_SEE_OTHER)

register_exception_handlers(app)

# Mount routers
catalog = APIRouter(prefix=settings.CATALOG_PREFIX.rstrip("/"))
catalog.include_router(authors_router)
app.include_router(catalog)
