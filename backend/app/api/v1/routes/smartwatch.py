"""
SmartWatch Routes

Endpoints for device integrations:
- /smartwatch/available - List brands and whether they are configured
- /smartwatch/auth/{brand} - Generic authorize / code exchange
- /smartwatch/fitbit/auth-url - Fitbit authorization URL
- /smartwatch/fitbit/callback - Fitbit OAuth callback
- /smartwatch/sync/{brand} - Pull workouts from a vendor

Errors are returned as {"error": message} so the web client can show
them directly.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from app.config import settings
from app.features.smartwatch import (
    AdapterRegistry,
    AuthExchangeError,
    AuthRequest,
    ConfigurationError,
    DateRange,
    SmartwatchError,
    SyncCoordinator,
    UnsupportedVendorError,
    VendorAdapter,
)
from app.features.tracker.schemas import CamelModel, IsoDate
from app.api.v1.deps import get_registry, get_sync_coordinator

logger = logging.getLogger(__name__)

router = APIRouter()

FITBIT = "Fitbit"


# =============================================================================
# Schemas
# =============================================================================

class DateRangeSchema(BaseModel):
    start: IsoDate
    end: IsoDate


class SyncRequest(CamelModel):
    access_token: str = Field(..., min_length=1)
    date_range: DateRangeSchema


class BrandAvailability(BaseModel):
    brand: str
    available: bool


# =============================================================================
# Helpers
# =============================================================================

def _error(status_code: int, message: str, **details) -> JSONResponse:
    content = {"error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _fitbit_callback_url(request: Request, adapter: VendorAdapter) -> str:
    """
    OAuth redirect URI for Fitbit.

    Uses the configured URI when set. Otherwise it is derived from the
    request, trusting X-Forwarded-Proto/Host from a TLS-terminating proxy.
    """
    configured = getattr(adapter, "redirect_uri", None)
    if configured:
        return configured

    proto = request.headers.get("x-forwarded-proto", request.url.scheme)
    proto = proto.split(",")[0].strip()
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    path = request.app.url_path_for("fitbit_callback")
    return f"{proto}://{host}{path}"


def _settings_redirect(**params) -> RedirectResponse:
    url = f"{settings.frontend_settings_path}?{urlencode(params)}"
    return RedirectResponse(url=url, status_code=302)


# =============================================================================
# Availability & generic auth
# =============================================================================

@router.get("/smartwatch/available", response_model=list[BrandAvailability])
async def list_available(registry: AdapterRegistry = Depends(get_registry)):
    """All registered brands with their configuration status."""
    return [
        BrandAvailability(brand=adapter.brand, available=adapter.is_available())
        for adapter in registry.all()
    ]


@router.post("/smartwatch/auth/{brand}")
async def authenticate_brand(
    brand: str,
    request: Request,
    credentials: Optional[dict] = Body(None),
    registry: AdapterRegistry = Depends(get_registry)
):
    """
    Authorize with a vendor.

    Without "code" returns {"authUrl"}; with one returns {"accessToken"}.
    """
    try:
        adapter = registry.resolve(brand)
    except UnsupportedVendorError as e:
        return _error(400, str(e))
    credentials = credentials or {}
    extra = {}
    if credentials.get("accessToken"):
        extra["access_token"] = credentials["accessToken"]

    redirect_uri = credentials.get("redirectUri")
    if not redirect_uri and adapter.brand == FITBIT:
        redirect_uri = _fitbit_callback_url(request, adapter)

    try:
        result = await adapter.authenticate(AuthRequest(
            redirect_uri=redirect_uri,
            code=credentials.get("code"),
            extra=extra,
        ))
    except SmartwatchError as e:
        logger.error(f"{adapter.brand} authentication failed: {e}")
        return _error(500, str(e))

    if result.is_redirect:
        return {"authUrl": result.authorization_url}
    return {"accessToken": result.access_token}


# =============================================================================
# Fitbit OAuth Flow
# =============================================================================

@router.post("/smartwatch/fitbit/auth-url")
async def fitbit_auth_url(
    request: Request,
    registry: AdapterRegistry = Depends(get_registry)
):
    """Build the Fitbit authorization URL for the browser to visit."""
    adapter = registry.resolve(FITBIT)
    redirect_uri = _fitbit_callback_url(request, adapter)

    try:
        result = await adapter.authenticate(AuthRequest(redirect_uri=redirect_uri))
    except ConfigurationError as e:
        logger.error(f"Fitbit auth URL unavailable: {e}")
        return _error(
            500,
            "Fitbit client id is not configured",
            clientIdConfigured=False,
            redirectUri=redirect_uri,
            hint="Set FITBIT_CLIENT_ID and FITBIT_CLIENT_SECRET",
        )

    logger.info(f"Fitbit OAuth initiated, redirect_uri={redirect_uri}")
    return {"authUrl": result.authorization_url}


@router.get("/smartwatch/fitbit/callback", name="fitbit_callback")
async def fitbit_callback(
    request: Request,
    code: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    error_description: Optional[str] = Query(None),
    registry: AdapterRegistry = Depends(get_registry)
):
    """
    Handle the Fitbit OAuth redirect.

    On success the browser goes back to the settings page with the access
    token in the query string (fitbit_connected=true&access_token=...).
    Failures redirect there too, with fitbit_error=<message>.
    """
    if error:
        logger.warning(f"Fitbit OAuth error: {error}")
        return _settings_redirect(fitbit_error=error_description or error)

    if not code:
        return _error(400, "Authorization code is missing")

    adapter = registry.resolve(FITBIT)
    try:
        result = await adapter.authenticate(AuthRequest(
            redirect_uri=_fitbit_callback_url(request, adapter),
            code=code,
        ))
    except AuthExchangeError as e:
        return _settings_redirect(
            fitbit_error=f"Fitbit rejected the authorization ({e.status_code})"
        )
    except SmartwatchError as e:
        logger.error(f"Fitbit callback failed: {e}")
        return _settings_redirect(fitbit_error=str(e))

    logger.info("Fitbit connected")
    return _settings_redirect(fitbit_connected="true", access_token=result.access_token)


# =============================================================================
# Sync
# =============================================================================

@router.post("/smartwatch/sync/{brand}")
async def sync_brand(
    brand: str,
    payload: SyncRequest,
    coordinator: SyncCoordinator = Depends(get_sync_coordinator)
):
    """Fetch workouts from a vendor and store the new ones."""
    try:
        date_range = DateRange(payload.date_range.start, payload.date_range.end)
    except ValueError as e:
        return _error(400, str(e))

    try:
        result = await coordinator.sync(brand, payload.access_token, date_range)
    except UnsupportedVendorError as e:
        return _error(400, str(e))
    except Exception as e:
        logger.exception(f"{brand} sync failed")
        return _error(500, str(e))

    return {
        "success": True,
        "workoutCount": result.requested_count,
        "savedCount": result.saved_count,
        "duplicateCount": result.duplicate_count,
        "failedCount": result.failed_count,
        "placeholder": result.placeholder,
        "workouts": [record.to_dict() for record in result.records],
    }
