# storefront/repos/inventory_repo.py
from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from storefront.data.models.inventory_adjustment import InventoryAdjustmentModel
from storefront.data.models.product import ProductModel
from storefront.domain.order_status import AdjustmentType


class InventoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_adjustment(self, adjustment: InventoryAdjustmentModel) -> InventoryAdjustmentModel:
        self.db.add(adjustment)
        self.db.flush()
        return adjustment

    def stock_levels(self, low_stock_threshold: int):
        """Aktywne produkty + data ostatniego restocku, od najnizszego stanu."""
        last_restock = (
            select(
                InventoryAdjustmentModel.product_id,
                func.max(InventoryAdjustmentModel.created_at).label("last_restocked"),
            )
            .where(InventoryAdjustmentModel.adjustment_type == AdjustmentType.RESTOCK.value)
            .group_by(InventoryAdjustmentModel.product_id)
            .subquery()
        )
        return self.db.execute(
            select(
                ProductModel.product_id,
                ProductModel.name.label("product_name"),
                ProductModel.sku,
                ProductModel.stock_quantity.label("current_stock"),
                case((ProductModel.stock_quantity <= low_stock_threshold, True), else_=False).label(
                    "is_low_stock"
                ),
                last_restock.c.last_restocked,
            )
            .outerjoin(last_restock, last_restock.c.product_id == ProductModel.product_id)
            .where(ProductModel.is_active.is_(True))
            .order_by(ProductModel.stock_quantity.asc(), ProductModel.name.asc())
        ).all()
