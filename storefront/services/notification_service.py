# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    New-order notifications, processed asynchronously by Celery.
    The admin dashboard picks new orders up by polling, this is the push side.
    """

    @staticmethod
    def send_new_order_notification(order_id: int, order_number: str, total: str):
        send_new_order_notification_task.delay(order_id, order_number, total)


@celery_app.task(name="storefront.services.notification_service.send_new_order_notification_task")
def send_new_order_notification_task(order_id: int, order_number: str, total: str):
    """
    Celery task, a real deployment would push to email/SMS/chat here.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] New order #{order_number} (id={order_id}) total={total}")

    return {"order_id": order_id, "order_number": order_number, "status": "sent"}
