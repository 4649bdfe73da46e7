# storefront/services/inventory_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.common import utcnow
from storefront.data.models.inventory_adjustment import InventoryAdjustmentModel
from storefront.domain.context import AdminContext
from storefront.domain.schemas import InventoryAdjustmentIn
from storefront.errors import (
    PersistenceError,
    ProductNotFoundError,
    StockMismatchError,
    StorefrontError,
    ValidationFailedError,
)
from storefront.repos.inventory_repo import InventoryRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.settings import LOW_STOCK_THRESHOLD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.repo = InventoryRepo(db)
        self.db = db

    def list_inventory(self, low_stock_threshold: int = LOW_STOCK_THRESHOLD) -> dict:
        rows = self.repo.stock_levels(low_stock_threshold)
        inventory = [dict(r._mapping) for r in rows]
        return {
            "inventory": inventory,
            "low_stock_count": sum(1 for i in inventory if i["is_low_stock"]),
            "out_of_stock_count": sum(1 for i in inventory if i["current_stock"] == 0),
        }

    def adjust(self, product_id: str, payload: InventoryAdjustmentIn, admin: AdminContext) -> dict:
        """
        Use Case: reczna korekta stanu przez admina.

        old_quantity (jesli podane) musi zgadzac sie z aktualnym stanem,
        quantity_change musi byc rowne new_quantity - stan. Zmiana stanu
        i wpis w inventory_adjustments ida w jednej transakcji.
        """
        product = self.products.get_active(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        current = product.stock_quantity
        if payload.old_quantity is not None and payload.old_quantity != current:
            logger.warning(f"Adjustment of {product_id} rejected: expected {payload.old_quantity}, stock is {current}")
            raise StockMismatchError(expected=payload.old_quantity, current=current)

        if payload.quantity_change != payload.new_quantity - current:
            raise ValidationFailedError(
                "quantity_change must equal new_quantity minus current stock",
                {
                    "quantity_change": payload.quantity_change,
                    "new_quantity": payload.new_quantity,
                    "current_stock": current,
                },
            )

        now = utcnow()
        try:
            # compare-and-set, ktos mogl zmienic stan miedzy odczytem a zapisem
            if not self.products.set_stock(product_id, current, payload.new_quantity, now):
                actual = self.products.get_stock(product_id)
                raise StockMismatchError(expected=current, current=actual)

            adjustment = self.repo.add_adjustment(
                InventoryAdjustmentModel(
                    product_id=product_id,
                    adjustment_type=payload.adjustment_type.value,
                    quantity_change=payload.quantity_change,
                    old_quantity=current,
                    new_quantity=payload.new_quantity,
                    reason=payload.reason,
                    admin_id=admin.admin_id,
                    created_at=now,
                )
            )
            self.db.commit()
        except StorefrontError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Adjustment of {product_id} rolled back")
            raise PersistenceError() from e

        logger.info(
            f"Stock of {product_id} adjusted {current} -> {payload.new_quantity} "
            f"({payload.adjustment_type.value}) by admin {admin.admin_id}"
        )
        return {
            "adjustment": adjustment,
            "updated_product": {
                "product_id": product_id,
                "stock_quantity": payload.new_quantity,
            },
        }
