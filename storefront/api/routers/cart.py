# storefront/api/routers/cart.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_optional_user
from storefront.domain.context import CartOwner, CustomerContext
from storefront.domain.schemas import CartItemIn, CartItemUpdate, CartOut, MessageOut
from storefront.errors import SessionRequiredError
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


def require_owner(customer: CustomerContext | None, session_id: str | None) -> CartOwner:
    owner = CartOwner.resolve(customer, session_id)
    if owner is None:
        raise SessionRequiredError()
    return owner


@router.get("", response_model=CartOut)
def get_cart(
    session_id: Optional[str] = Query(None),
    customer: CustomerContext | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_cart(require_owner(customer, session_id))


@router.post("", response_model=CartOut, status_code=201)
def add_item(
    payload: CartItemIn,
    customer: CustomerContext | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.add_item(require_owner(customer, payload.session_id), payload.product_id, payload.quantity)


# /clear przed /{cart_item_id}, inaczej "clear" zlapie sie jako id
@router.delete("/clear", response_model=MessageOut)
def clear_cart(
    session_id: Optional[str] = Query(None),
    customer: CustomerContext | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    removed = svc.clear(require_owner(customer, session_id))
    return {"message": f"Cart cleared, {removed} items removed"}


@router.patch("/{cart_item_id}", response_model=CartOut)
def update_item(
    cart_item_id: str,
    payload: CartItemUpdate,
    customer: CustomerContext | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.update_item(require_owner(customer, payload.session_id), cart_item_id, payload.quantity)


@router.delete("/{cart_item_id}", response_model=MessageOut)
def remove_item(
    cart_item_id: str,
    session_id: Optional[str] = Query(None),
    customer: CustomerContext | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.remove_item(require_owner(customer, session_id), cart_item_id)
    return {"message": "Item removed from cart"}
