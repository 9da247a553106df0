# storefront/session.py
import threading
import uuid
from decimal import Decimal
from enum import Enum
from typing import List, Tuple

from pydantic import ValidationError

from storefront.domain import cart as cart_engine
from storefront.domain.cart import Cart
from storefront.domain.errors import CatalogFetchFailure, OrderSubmissionFailure
from storefront.domain.schemas import (
    ALL_CATEGORIES,
    CheckoutForm,
    Contact,
    DeliveryAddress,
    OrderCreate,
    OrderItemIn,
    OrderOut,
    ProductOut,
    Totals,
)
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG_ERROR_MESSAGE = "No se pudieron cargar los productos. Verifica que el servidor esté corriendo."


class View(str, Enum):
    BROWSING = "browsing"
    CART = "cart-review"
    CHECKOUT = "checkout"
    CONFIRMED = "confirmed"


def parse_products(raw: list) -> Tuple[List[ProductOut], List[dict]]:
    """Validates catalog records. Malformed ones (bad price etc.) are returned separately, never shown."""
    products, rejected = [], []
    for record in raw:
        try:
            products.append(ProductOut.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Rejected malformed catalog record {record!r}: {e.errors()}")
            rejected.append(record)
    return products, rejected


class ShopSession:
    """
    One shopper's session: the cart, the current view and the catalog listing.

    browsing -> cart-review -> checkout -> confirmed -> browsing

    Catalog reloads carry a sequence number, a response for an older request is dropped.
    Order submission is non-reentrant, the cart is cleared only after a confirmed order.
    """

    def __init__(
        self,
        client: StorefrontClient | None = None,
        free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
        flat_shipping_fee: Decimal = FLAT_SHIPPING_FEE,
    ):
        self.client = client or StorefrontClient()
        self.free_shipping_threshold = free_shipping_threshold
        self.flat_shipping_fee = flat_shipping_fee

        self.cart = Cart()
        self.view = View.BROWSING

        self.category = ALL_CATEGORIES
        self.search = ""
        self.products: List[ProductOut] = []
        self.rejected_products: List[dict] = []
        self.loading = False
        self.catalog_error: str | None = None

        self.submitting = False
        self.order_error: str | None = None
        self.confirmed_order: OrderOut | None = None
        self.confirmed_totals: Totals | None = None
        self._checkout_key: str | None = None

        self._catalog_seq = 0
        self._seq_lock = threading.Lock()
        self._submit_lock = threading.Lock()

    # catalog
    def set_category(self, category: str) -> bool:
        self.category = category or ALL_CATEGORIES
        return self.reload_catalog()

    def set_search(self, term: str) -> bool:
        self.search = (term or "").strip()
        return self.reload_catalog()

    def begin_catalog_request(self) -> int:
        with self._seq_lock:
            self._catalog_seq += 1
            seq = self._catalog_seq
        self.loading = True
        self.catalog_error = None
        return seq

    def is_current(self, seq: int) -> bool:
        return seq == self._catalog_seq

    def apply_catalog_result(self, seq: int, raw: list) -> bool:
        if not self.is_current(seq):
            logger.debug(f"Dropping stale catalog response {seq} (current {self._catalog_seq})")
            return False

        self.products, self.rejected_products = parse_products(raw)
        self.loading = False
        return True

    def apply_catalog_failure(self, seq: int, error: Exception) -> bool:
        if not self.is_current(seq):
            return False

        logger.error(f"Catalog request {seq} failed: {error}")
        self.catalog_error = CATALOG_ERROR_MESSAGE
        self.loading = False
        return True

    def reload_catalog(self) -> bool:
        seq = self.begin_catalog_request()
        try:
            raw = self.client.get_products(self.category, self.search)
        except CatalogFetchFailure as e:
            self.apply_catalog_failure(seq, e)
            return False
        return self.apply_catalog_result(seq, raw)

    def retry_catalog(self) -> bool:
        return self.reload_catalog()

    # cart
    def add_to_cart(self, product: ProductOut) -> None:
        self.cart = cart_engine.add_item(self.cart, product)

    def change_quantity(self, item_id: str, delta: int) -> None:
        self.cart = cart_engine.change_quantity(self.cart, item_id, delta)

    def remove_from_cart(self, item_id: str) -> None:
        self.cart = cart_engine.remove_item(self.cart, item_id)

    @property
    def totals(self) -> Totals:
        return cart_engine.compute_totals(self.cart, self.free_shipping_threshold, self.flat_shipping_fee)

    @property
    def item_count(self) -> int:
        return cart_engine.item_count(self.cart)

    # views
    def show_store(self) -> None:
        self.view = View.BROWSING

    def show_cart(self) -> None:
        self.view = View.CART

    def start_checkout(self) -> bool:
        if self.cart.is_empty():
            return False
        if self._checkout_key is None:
            self._checkout_key = uuid.uuid4().hex
        self.order_error = None
        self.view = View.CHECKOUT
        return True

    def back_to_cart(self) -> None:
        self.view = View.CART

    # checkout
    def build_order_payload(self, form: CheckoutForm, totals: Totals) -> dict:
        order = OrderCreate(
            items=[
                OrderItemIn(
                    product_id=i.id,
                    name=i.name,
                    quantity=i.quantity,
                    unit_price=i.unit_price,
                )
                for i in self.cart.items
            ],
            address=DeliveryAddress(street=form.address, references=form.instructions),
            contact=Contact(name=form.name, phone=form.phone),
            payment_method=form.payment_method,
            totals=totals,
            instructions=form.instructions,
        )
        return order.model_dump(by_alias=True, mode="json")

    def submit_order(self, form: CheckoutForm) -> OrderOut | None:
        """
        Sends the cart as an order. Returns the confirmed order, or None when the
        submission failed (order_error is set) or another one is still in flight.
        """
        if not self._submit_lock.acquire(blocking=False):
            logger.info("Order submission already in flight, ignoring")
            return None

        self.submitting = True
        try:
            if self.cart.is_empty():
                self.order_error = "El carrito está vacío"
                return None

            totals = self.totals
            payload = self.build_order_payload(form, totals)
            self.order_error = None

            try:
                result = self.client.create_order(payload, idempotency_key=self._checkout_key)
            except OrderSubmissionFailure as e:
                self.order_error = f"Error al procesar la compra: {e}"
                return None

            if not result.success or result.order is None:
                self.order_error = result.message or "Error al procesar la compra"
                return None

            self.confirmed_order = result.order
            self.confirmed_totals = totals
            self.cart = cart_engine.clear(self.cart)
            self._checkout_key = None
            self.view = View.CONFIRMED
            logger.info(f"Order {result.order.order_number} confirmed, total {result.order.total}")
            return result.order
        finally:
            self.submitting = False
            self._submit_lock.release()
