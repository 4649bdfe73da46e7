# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Wysylanie powiadomien do klienta.
    Zawsze po commicie i przez Celery, wiec blad tutaj nie cofa zamowienia.
    """

    @staticmethod
    def send_order_confirmation(recipient: str, order_number: str, order_id: str):
        send_order_notification_task.delay("order_confirmation", recipient, order_number, order_id)

    @staticmethod
    def send_status_update(
        recipient: str,
        order_number: str,
        order_id: str,
        new_status: str,
        tracking_number: str | None = None,
    ):
        send_order_notification_task.delay(
            "status_update",
            recipient,
            order_number,
            order_id,
            {"new_status": new_status, "tracking_number": tracking_number},
        )


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(
    kind: str,
    recipient: str,
    order_number: str,
    order_id: str,
    template_data: dict | None = None,
):
    """
    Celery task - mock wysylki maila, tylko loguje.
    """
    logger.info(
        f"[NOTIFICATION] {kind} to {recipient} for order {order_number} ({order_id}) "
        f"data={template_data or {}}"
    )

    return {
        "kind": kind,
        "recipient": recipient,
        "order_number": order_number,
        "status": "sent",
    }
