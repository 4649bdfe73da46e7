# storefront/repos/cart_repo.py
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel
from storefront.domain.context import CartOwner


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def _owned_by(self, owner: CartOwner):
        if owner.user_id is not None:
            return CartItemModel.user_id == owner.user_id
        return CartItemModel.session_id == owner.session_id

    def list_items(self, owner: CartOwner) -> list[CartItemModel]:
        # tylko aktywne produkty, najnowsze na gorze
        return list(
            self.db.execute(
                select(CartItemModel)
                .join(ProductModel, CartItemModel.product_id == ProductModel.product_id)
                .options(joinedload(CartItemModel.product))
                .where(self._owned_by(owner), ProductModel.is_active.is_(True))
                .order_by(CartItemModel.added_at.desc())
            ).scalars()
        )

    def get_item(self, owner: CartOwner, cart_item_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_item_id == cart_item_id,
                self._owned_by(owner),
            )
        ).scalar_one_or_none()

    def get_item_by_product(self, owner: CartOwner, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.product_id == product_id,
                self._owned_by(owner),
            )
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def delete_for_owner(self, owner: CartOwner) -> int:
        result = self.db.execute(delete(CartItemModel).where(self._owned_by(owner)))
        return result.rowcount

    def delete_stale_guest_items(self, cutoff: datetime) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.session_id.is_not(None),
                CartItemModel.updated_at < cutoff,
            )
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
