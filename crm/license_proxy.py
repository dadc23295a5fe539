"""
Standalone license verification server.

Serves only POST /api/license/verify, for deployments that keep the proxy
apart from the CRM API. Set LICENSE_DEV_MODE=true to answer every request
with {"status": "active"} during local development.

    uvicorn crm.license_proxy:app --port 3001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from crm.core.config import settings
from crm.core.logging import configure_logging
from crm.api.license import router as license_router

logger = logging.getLogger(__name__)

configure_logging()

app = FastAPI(title=f"{settings.PROJECT_NAME} License Proxy", version=settings.VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(license_router, prefix="/api/license", tags=["license"])


def run() -> None:
    import uvicorn

    logger.info("License proxy listening at http://localhost:%s", settings.BACKEND_PORT)
    uvicorn.run(app, host="0.0.0.0", port=settings.BACKEND_PORT)


if __name__ == "__main__":
    run()
