# storefront/api/routers/orders.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import (
    get_current_user,
    get_db,
    get_lock_service,
    get_notification_service,
    get_optional_user,
    get_payment_gateway,
)
from storefront.domain.context import CustomerContext
from storefront.domain.order_status import OrderStatus
from storefront.domain.schemas import OrderCreate, OrderDetailOut, OrderListOut, OrderOut
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.payment_gateway import PaymentGateway

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway),
    notification_service: NotificationService = Depends(get_notification_service),
    lock_service: LockService | None = Depends(get_lock_service),
) -> OrderService:
    return OrderService(
        db=db,
        payment_gateway=payment_gateway,
        notification_service=notification_service,
        lock_service=lock_service,
    )


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    customer: CustomerContext | None = Depends(get_optional_user),
    svc: OrderService = Depends(get_service),
):
    """
    Checkout: walidacja, platnosc i zapis zamowienia w jednej transakcji.
    Powiadomienie idzie asynchronicznie po commicie.
    """
    return svc.place_order(payload, customer)


@router.get("", response_model=OrderListOut)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    customer: CustomerContext = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(customer, status.value if status else None, limit, offset)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: str,
    guest_email: Optional[str] = Query(None),
    customer: CustomerContext | None = Depends(get_optional_user),
    svc: OrderService = Depends(get_service),
):
    return svc.get_order(order_id, customer, guest_email)
