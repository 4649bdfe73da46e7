# storefront/api/routers/admin_inventory.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_admin, get_db
from storefront.domain.context import AdminContext
from storefront.domain.schemas import InventoryAdjustmentIn, InventoryAdjustmentResultOut, InventoryOut
from storefront.services.inventory_service import InventoryService
from storefront.utils.settings import LOW_STOCK_THRESHOLD

router = APIRouter(prefix="/api/admin/inventory", tags=["admin"])


def get_service(db: Session):
    return InventoryService(db)


@router.get("", response_model=InventoryOut)
def list_inventory(
    low_stock_threshold: int = Query(LOW_STOCK_THRESHOLD, ge=0),
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.list_inventory(low_stock_threshold)


@router.post("/{product_id}/adjust", response_model=InventoryAdjustmentResultOut)
def adjust_inventory(
    product_id: str,
    payload: InventoryAdjustmentIn,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.adjust(product_id, payload, admin)
