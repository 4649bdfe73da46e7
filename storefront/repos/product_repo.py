# storefront/repos/product_repo.py
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, product_id: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.product_id == product_id,
                ProductModel.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def get_stock(self, product_id: str) -> int | None:
        return self.db.execute(
            select(ProductModel.stock_quantity).where(ProductModel.product_id == product_id)
        ).scalar_one_or_none()

    def decrement_stock(self, product_id: str, quantity: int, now: datetime) -> bool:
        """
        Warunkowe zmniejszenie stanu w jednym UPDATE.
        0 zmienionych wierszy = brak towaru, stan nigdy nie schodzi ponizej zera.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.product_id == product_id,
                ProductModel.is_active.is_(True),
                ProductModel.stock_quantity >= quantity,
            )
            .values(
                stock_quantity=ProductModel.stock_quantity - quantity,
                sales_count=ProductModel.sales_count + quantity,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def set_stock(self, product_id: str, expected: int, new_quantity: int, now: datetime) -> bool:
        # compare-and-set na starej wartosci, jak optimistic locking na wersji
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.product_id == product_id,
                ProductModel.stock_quantity == expected,
            )
            .values(stock_quantity=new_quantity, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
