# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime

PaymentMethod = Literal["efectivo", "tarjeta"]

ALL_CATEGORIES = "Todos"
CATEGORIES = ["Todos", "Lácteos", "Panadería", "Despensa", "Carnes", "Frutas", "Bebidas", "Higiene"]


class ProductOut(BaseModel):
    """Catalog product (read-only for the cart)."""

    id: str = Field(..., alias="_id")
    name: str = Field(..., min_length=1, alias="nombre")
    category: str = Field(..., alias="categoria")
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, alias="precio")
    description: str = Field("", alias="descripcion")
    image: str = Field("", alias="imagen")

    model_config = ConfigDict(populate_by_name=True)


class Totals(BaseModel):
    subtotal: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    shipping_fee: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, alias="envio")
    total: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class OrderItemIn(BaseModel):
    product_id: str = Field(..., min_length=1, alias="productoId")
    name: str = Field(..., min_length=1, alias="nombre")
    quantity: int = Field(..., ge=1, alias="cantidad")
    unit_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, alias="precio")

    model_config = ConfigDict(populate_by_name=True)


class DeliveryAddress(BaseModel):
    street: str = Field(..., min_length=1, max_length=300, alias="calle")
    number: str = Field("", max_length=30, alias="numero")
    neighborhood: str = Field("", max_length=120, alias="colonia")
    city: str = Field("", max_length=120, alias="ciudad")
    postal_code: str = Field("", max_length=20, alias="codigoPostal")
    references: str = Field("", max_length=500, alias="referencias")

    model_config = ConfigDict(populate_by_name=True)


class Contact(BaseModel):
    name: str = Field(..., min_length=1, max_length=120, alias="nombre")
    phone: str = Field(..., min_length=1, max_length=40, alias="telefono")

    model_config = ConfigDict(populate_by_name=True)


class OrderCreate(BaseModel):
    """Order payload sent at checkout."""

    items: List[OrderItemIn] = Field(..., min_length=1)
    address: DeliveryAddress = Field(..., alias="direccionEntrega")
    contact: Contact = Field(..., alias="contacto")
    payment_method: PaymentMethod = Field(..., alias="metodoPago")
    totals: Totals = Field(..., alias="totales")
    instructions: str = Field("", max_length=500, alias="instrucciones")

    model_config = ConfigDict(populate_by_name=True)


class OrderOut(BaseModel):
    id: int
    order_number: str = Field(..., alias="numeroOrden")
    status: str
    items: List[OrderItemIn]
    address: DeliveryAddress = Field(..., alias="direccionEntrega")
    contact: Contact = Field(..., alias="contacto")
    payment_method: PaymentMethod = Field(..., alias="metodoPago")
    totals: Totals = Field(..., alias="totales")
    total: Decimal
    instructions: str = Field("", alias="instrucciones")
    seen: bool = Field(False, alias="visto")
    created_at: datetime

    model_config = ConfigDict(populate_by_name=True)


class OrderCreated(BaseModel):
    success: bool
    order: OrderOut | None = None
    message: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class AdminNotifications(BaseModel):
    new_orders: int = Field(..., ge=0, alias="nuevosPedidos")
    orders: List[OrderOut] = Field(default_factory=list, alias="pedidos")

    model_config = ConfigDict(populate_by_name=True)


class Ack(BaseModel):
    success: bool


class CheckoutForm(BaseModel):
    """Checkout form data on the shop side."""

    name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=1, max_length=40)
    address: str = Field(..., min_length=1, max_length=300)
    instructions: str = Field("", max_length=500)
    payment_method: PaymentMethod = "tarjeta"
