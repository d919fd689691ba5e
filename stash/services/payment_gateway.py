# stash/services/payment_gateway.py
from dataclasses import dataclass, field
from typing import Any, Dict

import stripe

from stash.domain.errors import InvalidSignature, UpstreamFailure
from stash.utils.logging import get_logger
from stash.utils.retry import stripe_retry
from stash.utils.settings import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET

logger = get_logger(__name__)


@dataclass
class PaymentIntent:
    id: str
    client_secret: str
    amount: int = 0
    status: str = ""


@dataclass
class WebhookEvent:
    type: str
    object_id: str | None = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class PaymentGateway:
    """Thin wrapper over the Stripe SDK, the only place that talks to the processor."""

    def __init__(self, api_key: str | None = None, webhook_secret: str | None = None):
        self.api_key = api_key or STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret or STRIPE_WEBHOOK_SECRET

    def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: Dict[str, str],
        idempotency_key: str,
    ) -> PaymentIntent:
        logger.info(f"Stripe create PaymentIntent amount={amount} {currency}")
        try:
            intent = self._create(amount, currency, metadata, idempotency_key)
        except stripe.StripeError as e:
            logger.error(f"Stripe create PaymentIntent failed: {e}")
            raise UpstreamFailure("Payment processor error") from e
        return self._to_intent(intent)

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        logger.info(f"Stripe retrieve PaymentIntent {intent_id}")
        try:
            intent = self._retrieve(intent_id)
        except stripe.StripeError as e:
            logger.error(f"Stripe retrieve PaymentIntent {intent_id} failed: {e}")
            raise UpstreamFailure("Payment processor error") from e
        return self._to_intent(intent)

    def verify_event(self, payload: bytes, signature: str | None) -> WebhookEvent:
        """Verifies the signature over the raw body and returns the parsed event."""
        if not signature:
            raise InvalidSignature("Webhook Error: missing signature")
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise InvalidSignature(f"Webhook Error: {e}")
        except (ValueError, AttributeError):
            raise InvalidSignature("Webhook Error: invalid payload")

        data = getattr(event, "data", None)
        obj = getattr(data, "object", None)
        metadata = getattr(obj, "metadata", None)
        return WebhookEvent(
            type=getattr(event, "type", "") or "",
            object_id=getattr(obj, "id", None),
            metadata=self._metadata(metadata),
        )

    @staticmethod
    def _metadata(metadata) -> Dict[str, Any]:
        values = {}
        if metadata is None:
            return values
        for key in ("orderId", "userId"):
            try:
                values[key] = metadata[key]
            except KeyError:
                continue
        return values

    # idempotency key makes a retried create return the first intent
    @stripe_retry()
    def _create(self, amount, currency, metadata, idempotency_key):
        return stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            automatic_payment_methods={"enabled": True},
            metadata=metadata,
            idempotency_key=idempotency_key,
            api_key=self.api_key,
        )

    @stripe_retry()
    def _retrieve(self, intent_id):
        return stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)

    @staticmethod
    def _to_intent(intent) -> PaymentIntent:
        return PaymentIntent(
            id=intent["id"],
            client_secret=intent["client_secret"],
            amount=intent["amount"],
            status=intent["status"],
        )
