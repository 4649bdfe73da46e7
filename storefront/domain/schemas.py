# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer

from storefront.domain.order_status import AdjustmentType, OrderStatus, PaymentStatus
from storefront.utils.settings import DEFAULT_CURRENCY

# Decimal w srodku, liczba w JSON-ie
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
NonNegativeMoney = Annotated[Money, Field(ge=0)]


# =====================================================
# CART
# =====================================================
class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")
    session_id: Optional[str] = Field(None, min_length=1, max_length=255)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0)
    session_id: Optional[str] = Field(None, min_length=1, max_length=255)


class CartProductOut(BaseModel):
    name: str
    brand: str
    price: Money
    sale_price: Optional[Money] = None
    stock_quantity: int
    sku: str

    model_config = ConfigDict(from_attributes=True)


class CartItemOut(BaseModel):
    cart_item_id: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    product_id: str
    quantity: int
    added_at: datetime
    updated_at: datetime
    product: CartProductOut
    line_total: Money


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    items: List[CartItemOut]
    total_quantity: int
    subtotal: Money
    shipping_cost: Money
    tax_amount: Money
    total: Money


class MessageOut(BaseModel):
    message: str


# =====================================================
# ORDERS
# =====================================================
class OrderItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1, max_length=255)
    product_brand: str = Field(..., min_length=1, max_length=255)
    product_sku: str = Field(..., min_length=1, max_length=255)
    product_image_url: Optional[str] = Field(None, max_length=1000)
    product_price: NonNegativeMoney
    sale_price: Optional[NonNegativeMoney] = None
    quantity: int = Field(..., gt=0)
    line_total: NonNegativeMoney


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamowienia (checkout)."""

    # informacyjnie, serwer i tak generuje wlasny numer
    order_number: Optional[str] = Field(None, max_length=255)
    subtotal: NonNegativeMoney
    shipping_cost: NonNegativeMoney = Decimal("0")
    tax_amount: NonNegativeMoney = Decimal("0")
    discount_amount: NonNegativeMoney = Decimal("0")
    total_amount: NonNegativeMoney
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    payment_method: str = Field(..., min_length=1, max_length=100)
    payment_details: dict[str, Any] = Field(default_factory=dict)
    shipping_address_id: str = Field(..., min_length=1)
    billing_address_id: str = Field(..., min_length=1)
    shipping_method: str = Field(..., min_length=1, max_length=255)
    promo_code: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    guest_email: Optional[EmailStr] = None
    order_items: List[OrderItemIn] = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    order_item_id: str
    order_id: str
    product_id: str
    product_name: str
    product_brand: str
    product_sku: str
    product_image_url: Optional[str] = None
    product_price: Money
    sale_price: Optional[Money] = None
    quantity: int
    line_total: Money
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    order_id: str
    order_number: str
    user_id: Optional[str] = None
    guest_email: Optional[str] = None
    status: str
    subtotal: Money
    shipping_cost: Money
    tax_amount: Money
    discount_amount: Money
    total_amount: Money
    currency: str
    payment_method: str
    payment_status: str
    payment_transaction_id: Optional[str] = None
    shipping_address_id: str
    billing_address_id: str
    shipping_method: str
    tracking_number: Optional[str] = None
    estimated_delivery_date: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    notes: Optional[str] = None
    promo_code: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    order_items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class AddressOut(BaseModel):
    address_id: str
    user_id: Optional[str] = None
    type: str
    first_name: str
    last_name: str
    street_address_1: str
    street_address_2: Optional[str] = None
    city: str
    state_province: str
    postal_code: str
    country: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(OrderOut):
    shipping_address: Optional[AddressOut] = None
    billing_address: Optional[AddressOut] = None


class OrderStatusHistoryOut(BaseModel):
    status_history_id: str
    old_status: Optional[str] = None
    new_status: str
    changed_by_admin_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminOrderDetailOut(OrderDetailOut):
    status_history: List[OrderStatusHistoryOut]


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    total: int
    limit: int
    offset: int
    has_more: bool


class AdminOrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    tracking_number: Optional[str] = Field(None, max_length=255)
    estimated_delivery_date: Optional[datetime] = None
    notes: Optional[str] = None


# =====================================================
# INVENTORY
# =====================================================
class InventoryItemOut(BaseModel):
    product_id: str
    product_name: str
    sku: str
    current_stock: int
    is_low_stock: bool
    last_restocked: Optional[datetime] = None


class InventoryOut(BaseModel):
    inventory: List[InventoryItemOut]
    low_stock_count: int
    out_of_stock_count: int


class InventoryAdjustmentIn(BaseModel):
    adjustment_type: AdjustmentType
    quantity_change: int
    old_quantity: Optional[int] = Field(None, ge=0)
    new_quantity: int = Field(..., ge=0)
    reason: Optional[str] = None


class InventoryAdjustmentOut(BaseModel):
    adjustment_id: str
    product_id: str
    adjustment_type: str
    quantity_change: int
    old_quantity: int
    new_quantity: int
    reason: Optional[str] = None
    admin_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UpdatedProductOut(BaseModel):
    product_id: str
    stock_quantity: int


class InventoryAdjustmentResultOut(BaseModel):
    adjustment: InventoryAdjustmentOut
    updated_product: UpdatedProductOut


# =====================================================
# HEALTH
# =====================================================
class HealthOut(BaseModel):
    status: str
    timestamp: datetime
    version: str
