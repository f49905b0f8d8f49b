"""
Proxy Gateway API Routes
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from disasterwatch.schemas.common import ErrorResponse
from disasterwatch.schemas.gateway import DATA_SOURCE_HEADER, ServiceRequest
from disasterwatch.services.gateway_service import ProxyGatewayService, get_gateway_service

router = APIRouter()


@router.post(
    "/api-proxy",
    summary="Relay a request to an upstream data provider",
    description=(
        "Resolves {service, endpoint, params} to the provider's URL and "
        "credential scheme and returns the provider's JSON unchanged. When the "
        "provider fails, canned data is returned and X-Data-Source is 'fallback'."
    ),
    responses={400: {"model": ErrorResponse}},
)
async def proxy_request(
    request: ServiceRequest,
    gateway: ProxyGatewayService = Depends(get_gateway_service),
):
    try:
        result = await gateway.forward(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result.error is not None:
        return JSONResponse(
            status_code=502,
            content={"error": result.error},
            headers={DATA_SOURCE_HEADER: result.source.value},
        )
    return JSONResponse(
        status_code=200,
        content=result.data,
        headers={DATA_SOURCE_HEADER: result.source.value},
    )
