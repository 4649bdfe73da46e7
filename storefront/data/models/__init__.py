#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel, AdminUserModel
from storefront.data.models.user_session import UserSessionModel
from storefront.data.models.address import AddressModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.inventory_adjustment import InventoryAdjustmentModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel

__all__ = [
    "UserModel",
    "AdminUserModel",
    "UserSessionModel",
    "AddressModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "InventoryAdjustmentModel",
    "OrderStatusHistoryModel",
]
