# storefront/api/routers/health.py
from fastapi import APIRouter

from storefront.data.models.common import utcnow
from storefront.domain.schemas import HealthOut
from storefront.utils.settings import APP_VERSION

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOut)
def health_check():
    return {"status": "ok", "timestamp": utcnow(), "version": APP_VERSION}
