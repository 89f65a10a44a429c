# storefront/services/notification_service.py
from kombu.exceptions import KombuError

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by Celery.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str, total: str):
        """
        Enqueues the order confirmation. Never fails the caller: the order is
        already committed when this runs.
        """
        try:
            send_order_notification_task.delay(user_id, order_id, total)
        except (KombuError, OSError) as e:
            logger.error(f"Could not enqueue notification for order {order_id}: {e}")


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, total: str):
    """
    Celery task. Only logs the confirmation; no mail gateway is wired in.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed, total {total}")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
