# storefront/services/admin_poller.py
import threading
from typing import Callable, List

from requests import RequestException
from pydantic import ValidationError

from storefront.domain.schemas import OrderOut
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.settings import ADMIN_POLL_INTERVAL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AdminPoller:
    """
    Admin dashboard side of new-order notifications.
    Polls the API at a fixed interval, calls on_new_orders when the unseen count goes up.
    """

    def __init__(
        self,
        client: StorefrontClient | None = None,
        on_new_orders: Callable[[OrderOut], None] | None = None,
        interval: float = ADMIN_POLL_INTERVAL_SECONDS,
    ):
        self.client = client or StorefrontClient()
        self.on_new_orders = on_new_orders
        self.interval = interval

        self.new_orders = 0
        self.orders: List[OrderOut] = []

    def poll_once(self) -> bool:
        """One poll. Returns False when the poll failed (logged, state untouched)."""
        try:
            data = self.client.get_notifications()
        except (RequestException, ValidationError) as e:
            logger.error(f"Error checking orders: {e}")
            return False

        if data.new_orders > self.new_orders and data.orders and self.on_new_orders:
            newest = data.orders[0]
            logger.info(f"New order #{newest.order_number} - {newest.total}")
            self.on_new_orders(newest)

        self.new_orders = data.new_orders
        self.orders = list(data.orders)
        return True

    def mark_seen(self, order_id: int) -> bool:
        """Acknowledges one order. A failed call is logged and the order stays listed."""
        try:
            self.client.mark_seen(order_id)
        except RequestException as e:
            logger.error(f"Error marking order {order_id} as seen: {e}")
            return False

        self.orders = [o for o in self.orders if o.id != order_id]
        self.new_orders = max(0, self.new_orders - 1)
        return True

    def mark_all_seen(self) -> int:
        #every acknowledgement is independent, one failure doesn't stop the rest
        return sum(self.mark_seen(order.id) for order in list(self.orders))

    def run(self, stop_event: threading.Event) -> None:
        logger.info(f"Admin poller started, every {self.interval}s")
        while not stop_event.is_set():
            self.poll_once()
            stop_event.wait(self.interval)
        logger.info("Admin poller stopped")


if __name__ == "__main__":
    from storefront.utils.formatting import format_price

    def _announce(order: OrderOut) -> None:
        logger.info(f"¡Nuevo pedido en Don Pico! Pedido #{order.order_number} - {format_price(order.total)}")

    stop = threading.Event()
    poller = AdminPoller(on_new_orders=_announce)
    try:
        poller.run(stop)
    except KeyboardInterrupt:
        stop.set()
