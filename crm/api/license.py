"""
License Verification Proxy

POST /api/license/verify takes {"tenantId": ...} and relays the upstream
license panel's answer. It sits outside /api/v1 because the frontend and the
panel agreed on this path, and it is also served on its own by
crm.license_proxy.
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from crm.core.exceptions import LicenseCheckError
from crm.schemas.license import LicenseVerifyRequest
from crm.services.license import LicenseVerifier, get_license_verifier

logger = logging.getLogger(__name__)

router = APIRouter()

TENANT_REQUIRED = {"error": "Tenant ID is required"}


async def read_verify_request(request: Request) -> LicenseVerifyRequest:
    """Parse the body leniently; anything that is not a JSON object carries no tenant."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return LicenseVerifyRequest()
    return LicenseVerifyRequest.model_validate(body)


@router.post("/verify")
async def verify_license(
    payload: LicenseVerifyRequest = Depends(read_verify_request),
    verifier: LicenseVerifier = Depends(get_license_verifier),
):
    """
    Returns:
        200: The panel's JSON body, unchanged
        400: {"error": "Tenant ID is required"} when tenantId is missing or falsy,
             or the body is not a JSON object
        500: {"error": "License check failed"} on any upstream failure
    """
    if not payload.tenant_id:
        return JSONResponse(status_code=400, content=TENANT_REQUIRED)

    try:
        data = await verifier.verify(payload.tenant_id)
    except LicenseCheckError as exc:
        logger.error("License check failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": "License check failed"})
    return JSONResponse(content=data)
