# storefront/domain/cart.py
"""
Cart & pricing engine.

The cart is an immutable value. Every command takes a cart and returns a new one,
so the owner (a shop session) decides where the current cart lives.
Totals are never stored, they are derived from the items on every read.
"""
from decimal import Decimal, InvalidOperation
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.errors import MalformedPriceData
from storefront.domain.schemas import Totals
from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE


def to_price(value) -> Decimal:
    """Raw catalog value -> Decimal. Raises MalformedPriceData instead of letting NaN through."""
    if value is None or isinstance(value, bool):
        raise MalformedPriceData(f"Invalid price: {value!r}")

    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise MalformedPriceData(f"Invalid price: {value!r}") from e

    if not price.is_finite() or price < 0:
        raise MalformedPriceData(f"Invalid price: {value!r}")
    #money is stored with two decimals, finer prices would be rounded away
    if price.normalize().as_tuple().exponent < -2:
        raise MalformedPriceData(f"Invalid price: {value!r}")
    return price


class LineItem(BaseModel):
    id: str
    name: str
    unit_price: Decimal = Field(..., ge=0)
    image: str = ""
    quantity: int = Field(1, ge=1)

    model_config = ConfigDict(frozen=True)


class Cart(BaseModel):
    items: Tuple[LineItem, ...] = ()

    model_config = ConfigDict(frozen=True)

    def get(self, item_id: str) -> LineItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items


def add_item(cart: Cart, product) -> Cart:
    """
    Same id -> quantity + 1. New id -> appended with quantity 1.
    Name, price and image are snapshotted here and never refreshed from the catalog.
    """
    product_id = str(product.id)

    if cart.get(product_id):
        return Cart(items=tuple(
            item.model_copy(update={"quantity": item.quantity + 1}) if item.id == product_id else item
            for item in cart.items
        ))

    new_item = LineItem(
        id=product_id,
        name=product.name,
        unit_price=to_price(product.price),
        image=product.image or "",
        quantity=1,
    )
    return Cart(items=cart.items + (new_item,))


def change_quantity(cart: Cart, item_id: str, delta: int) -> Cart:
    #unknown id is a no-op
    if not cart.get(item_id):
        return cart

    items = []
    for item in cart.items:
        if item.id != item_id:
            items.append(item)
            continue
        new_quantity = max(0, item.quantity + delta)
        if new_quantity > 0:
            items.append(item.model_copy(update={"quantity": new_quantity}))
    return Cart(items=tuple(items))


def remove_item(cart: Cart, item_id: str) -> Cart:
    return Cart(items=tuple(i for i in cart.items if i.id != item_id))


def clear(cart: Cart) -> Cart:
    return Cart()


def item_count(cart: Cart) -> int:
    return sum(i.quantity for i in cart.items)


def shipping_fee_for(
    subtotal: Decimal,
    threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    flat_fee: Decimal = FLAT_SHIPPING_FEE,
) -> Decimal:
    # an empty cart (subtotal 0) is below the threshold and pays the flat fee
    return Decimal("0") if subtotal >= threshold else flat_fee


def totals_for_lines(
    lines,
    threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    flat_fee: Decimal = FLAT_SHIPPING_FEE,
) -> Totals:
    """Totals over (unit_price, quantity) pairs. Shared by the cart and the order API."""
    subtotal = sum((to_price(price) * int(qty) for price, qty in lines), Decimal("0"))
    fee = shipping_fee_for(subtotal, threshold, flat_fee)
    return Totals(subtotal=subtotal, shipping_fee=fee, total=subtotal + fee)


def compute_totals(
    cart: Cart,
    threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    flat_fee: Decimal = FLAT_SHIPPING_FEE,
) -> Totals:
    return totals_for_lines(
        ((i.unit_price, i.quantity) for i in cart.items),
        threshold,
        flat_fee,
    )
