# stash/services/payment_service.py
from sqlalchemy.orm import Session

from stash.domain.errors import InvalidState, NotFound
from stash.domain.schemas import PaymentIntentOut
from stash.repos.order_repo import OrderRepo
from stash.services.payment_gateway import PaymentGateway, WebhookEvent
from stash.utils.logging import get_logger
from stash.utils.settings import PAYMENT_CURRENCY

logger = get_logger(__name__)

PAYMENT_SUCCEEDED = "payment_intent.succeeded"


class PaymentService:
    """
    Order payment lifecycle: pending_payment -> completed.
    The status only moves forward, through the processor's webhook.
    """

    def __init__(self, db: Session, gateway: PaymentGateway, currency: str = PAYMENT_CURRENCY):
        self.repo = OrderRepo(db)
        self.gateway = gateway
        self.currency = currency

    def create_or_retrieve_intent(self, order_id: str, user_id: str) -> PaymentIntentOut:
        order = self.repo.get_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found or you do not have permission")

        if order.status != "pending_payment":
            raise InvalidState(f"Order has already been processed. Status: {order.status}")

        # client retried: hand back the same intent instead of creating another
        if order.payment_intent_id:
            intent = self.gateway.retrieve_intent(order.payment_intent_id)
            return PaymentIntentOut(client_secret=intent.client_secret)

        intent = self.gateway.create_intent(
            amount=order.total_amount,
            currency=self.currency,
            metadata={"orderId": order.id, "userId": user_id},
            idempotency_key=f"order-{order.id}",
        )
        self.repo.set_payment_intent(order, intent.id)

        logger.info(f"PaymentIntent {intent.id} attached to order {order.id}")
        return PaymentIntentOut(client_secret=intent.client_secret)

    def handle_webhook(self, payload: bytes, signature: str | None) -> WebhookEvent:
        event = self.gateway.verify_event(payload, signature)

        if event.type != PAYMENT_SUCCEEDED:
            logger.info(f"Ignoring webhook event {event.type}")
            return event

        order_id = event.metadata.get("orderId")
        user_id = event.metadata.get("userId")
        if not order_id or not user_id:
            logger.warning(f"PaymentIntent {event.object_id} succeeded without order metadata")
            return event

        # unconditional set, repeated delivery ends in the same state
        rowcount = self.repo.update_order_status(order_id, user_id, "completed")
        if rowcount == 0:
            logger.warning(f"PaymentIntent {event.object_id} succeeded for unknown order {order_id}")
        else:
            logger.info(f"Order {order_id} completed by PaymentIntent {event.object_id}")
        return event
