# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import Dict, Any
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.cart import totals_for_lines
from storefront.domain.schemas import OrderCreate
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_NUMBER_FORMAT = "DP{created_at:%y%m%d}-{id:05d}"


class OrderService:
    """
    Order domain: creating orders from a checkout payload and the admin
    notification queries (unseen orders, mark as seen).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.notification_service = NotificationService()

    def create_order(self, payload: OrderCreate) -> Dict[str, Any]:
        """
        Use case: place an order.

        1. Recomputes totals from the submitted lines with the pricing engine
        2. Rejects the order if the client totals disagree
        3. Persists the order and assigns its number
        4. Sends the new-order notification (async)
        """
        totals = totals_for_lines((i.unit_price, i.quantity) for i in payload.items)

        claimed = payload.totals
        if (totals.subtotal, totals.shipping_fee, totals.total) != (claimed.subtotal, claimed.shipping_fee, claimed.total):
            logger.warning(
                f"Totals mismatch: client={claimed.model_dump()} server={totals.model_dump()}"
            )
            raise ValueError(
                f"Los totales no coinciden (subtotal {totals.subtotal}, "
                f"envio {totals.shipping_fee}, total {totals.total})"
            )

        address = payload.address
        order = OrderModel(
            status="PENDING",
            payment_method=payload.payment_method,
            contact_name=payload.contact.name,
            contact_phone=payload.contact.phone,
            street=address.street,
            number=address.number,
            neighborhood=address.neighborhood,
            city=address.city,
            postal_code=address.postal_code,
            references=address.references,
            instructions=payload.instructions,
            subtotal=totals.subtotal,
            shipping_fee=totals.shipping_fee,
            total=totals.total,
            seen=False,
            created_at=datetime.now(timezone.utc),
            items=[
                OrderItemModel(
                    product_id=i.product_id,
                    name=i.name,
                    quantity=i.quantity,
                    unit_price=i.unit_price,
                )
                for i in payload.items
            ],
        )

        created = self.repo.create_order(order, ORDER_NUMBER_FORMAT)

        logger.info(f"Order {created.order_number} created, total {created.total}")

        self.notification_service.send_new_order_notification(
            created.id, created.order_number, str(created.total)
        )

        return self._to_dict(created)

    def get_order(self, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Pedido no encontrado")

        return self._to_dict(order)

    def list_new_orders(self) -> Dict[str, Any]:
        #all unseen orders, newest first
        orders = self.repo.list_unseen()
        return {
            "new_orders": len(orders),
            "orders": [self._to_dict(o) for o in orders],
        }

    def mark_seen(self, order_id: int) -> None:
        rowcount = self.repo.mark_seen(order_id)

        if rowcount == 0:
            raise ValueError("Pedido no encontrado")

        logger.info(f"Order {order_id} marked as seen")

    @staticmethod
    def _to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status,
            "items": [
                {
                    "product_id": i.product_id,
                    "name": i.name,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                }
                for i in order.items
            ],
            "address": {
                "street": order.street,
                "number": order.number,
                "neighborhood": order.neighborhood,
                "city": order.city,
                "postal_code": order.postal_code,
                "references": order.references,
            },
            "contact": {"name": order.contact_name, "phone": order.contact_phone},
            "payment_method": order.payment_method,
            "totals": {
                "subtotal": order.subtotal,
                "shipping_fee": order.shipping_fee,
                "total": order.total,
            },
            "total": order.total,
            "instructions": order.instructions,
            "seen": order.seen,
            "created_at": order.created_at,
        }
