"""
Metrics API

Today's spend and messaging metrics across the configured ad accounts.
"""
from functools import lru_cache

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ads_monitor.config import ConfigurationError, get_settings
from ads_monitor.services.metrics_service import MetricsService
from ads_monitor.utils.logger import log

router = APIRouter(prefix="/api/metrics", tags=["metrics"])

CONFIG_ERROR_MESSAGE = "Faltan credenciales en .env.local"
UPSTREAM_ERROR_MESSAGE = "Error conectando a Facebook"


@lru_cache()
def get_metrics_service() -> MetricsService:
    """Process-wide service, built from settings once"""
    return MetricsService(get_settings().monitor_config())


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@router.get("")
async def get_metrics(service: MetricsService = Depends(get_metrics_service)):
    """
    Today's per-account totals and active campaigns

    Accounts whose report could not be fetched are left out of ``cuentas``.
    """
    try:
        snapshot = await service.refresh()
    except ConfigurationError as e:
        log.error(f"Metrics unavailable: {e}")
        return _error(CONFIG_ERROR_MESSAGE)
    except Exception:
        log.exception("Metrics refresh failed")
        return _error(UPSTREAM_ERROR_MESSAGE)

    return snapshot.to_dict()


@router.get("/dashboard")
async def get_dashboard(service: MetricsService = Depends(get_metrics_service)):
    """
    Dashboard view: global KPI and status, per-product and per-campaign
    tables, per-account totals, and the hourly projection.

    The hourly series is extrapolated from today's total, not measured.
    """
    try:
        return await service.dashboard()
    except ConfigurationError as e:
        log.error(f"Dashboard unavailable: {e}")
        return _error(CONFIG_ERROR_MESSAGE)
    except Exception:
        log.exception("Dashboard refresh failed")
        return _error(UPSTREAM_ERROR_MESSAGE)


@router.get("/status")
async def get_connector_status(service: MetricsService = Depends(get_metrics_service)):
    """Upstream connector bookkeeping (sync counts, failures)"""
    return {
        "accounts_configured": len(service.config.account_ids),
        "connector": service.connector.get_status(),
    }
