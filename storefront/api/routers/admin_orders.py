# storefront/api/routers/admin_orders.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_admin, get_db, get_notification_service
from storefront.domain.context import AdminContext
from storefront.domain.order_status import OrderStatus, PaymentStatus
from storefront.domain.schemas import AdminOrderDetailOut, AdminOrderUpdate, OrderListOut
from storefront.services.admin_order_service import AdminOrderService
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/api/admin/orders", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> AdminOrderService:
    return AdminOrderService(db=db, notification_service=notification_service)


@router.get("", response_model=OrderListOut)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None),
    search_query: Optional[str] = Query(None, max_length=255),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    admin: AdminContext = Depends(get_current_admin),
    svc: AdminOrderService = Depends(get_service),
):
    return svc.list_orders(
        status=status.value if status else None,
        payment_status=payment_status.value if payment_status else None,
        search_query=search_query,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )


@router.get("/{order_id}", response_model=AdminOrderDetailOut)
def get_order(
    order_id: str,
    admin: AdminContext = Depends(get_current_admin),
    svc: AdminOrderService = Depends(get_service),
):
    return svc.get_order(order_id)


@router.patch("/{order_id}", response_model=AdminOrderDetailOut)
def update_order(
    order_id: str,
    payload: AdminOrderUpdate,
    admin: AdminContext = Depends(get_current_admin),
    svc: AdminOrderService = Depends(get_service),
):
    return svc.update_order(order_id, payload, admin)
