import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from crm.core.config import settings
from crm.core.exceptions import DocumentNotFound
from crm.core.logging import configure_logging
from crm.db.session import init_db
from crm.api.v1.api import api_router
from crm.api.license import router as license_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DocumentNotFound)
async def document_not_found_handler(request: Request, exc: DocumentNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)

# License verification keeps its historical, unversioned path
app.include_router(license_router, prefix="/api/license", tags=["license"])
