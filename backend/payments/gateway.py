from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional
import json
import logging

import stripe
from django.conf import settings
from django.utils.module_loading import import_string

from .exceptions import PaymentGatewayError, WebhookVerificationError
from .money import from_minor, to_minor

logger = logging.getLogger(__name__)


@dataclass
class PaymentAuthorization:
    """Gateway-neutral view of a payment authorization (a Stripe PaymentIntent)."""

    id: str
    client_secret: Optional[str]
    status: str
    amount: Decimal
    metadata: Dict[str, str] = field(default_factory=dict)

    SUCCEEDED = "succeeded"

    @property
    def succeeded(self) -> bool:
        return self.status == self.SUCCEEDED


class PaymentGateway(ABC):
    """
    The interface the order core needs from a payment provider.
    Every call must either return or raise PaymentGatewayError; none may hang.
    """

    @abstractmethod
    def create_authorization(
        self, amount: Decimal, customer_email: str, metadata: Optional[Dict[str, str]] = None
    ) -> PaymentAuthorization:
        """Create an authorization for `amount` that the customer completes client-side."""

    @abstractmethod
    def retrieve_authorization(self, payment_id: str) -> PaymentAuthorization:
        """Fetch the current state of an authorization."""

    @abstractmethod
    def void_authorization(self, payment_id: str) -> None:
        """
        Release an authorization that no order will be recorded against.
        Refunds instead when the customer has already paid.
        """

    @abstractmethod
    def refund(self, payment_id: str) -> None:
        """Refund the full captured amount of an authorization."""

    @abstractmethod
    def construct_webhook_event(self, payload: bytes, signature: str) -> dict:
        """Verify a webhook delivery and return the event as a dict."""


class StripePaymentGateway(PaymentGateway):
    """
    PaymentGateway backed by Stripe PaymentIntents.

    Calls go through a requests-based HTTP client carrying
    PAYMENT_GATEWAY_TIMEOUT, and network retries are disabled, so a slow
    Stripe surfaces as PaymentGatewayError instead of a hung request.
    """

    def __init__(self, api_key=None, currency=None, timeout=None, webhook_secret=None):
        self.api_key = api_key or settings.STRIPE_SECRET_KEY
        self.currency = (currency or settings.STRIPE_CURRENCY).lower()
        self.timeout = timeout or settings.PAYMENT_GATEWAY_TIMEOUT
        self.webhook_secret = webhook_secret or settings.STRIPE_WEBHOOK_SECRET
        self._configure()

    def _configure(self):
        stripe.api_key = self.api_key
        stripe.max_network_retries = 0
        stripe.default_http_client = stripe.RequestsClient(timeout=self.timeout)

    def _to_authorization(self, intent) -> PaymentAuthorization:
        metadata = intent.get("metadata") or {}
        return PaymentAuthorization(
            id=intent["id"],
            client_secret=intent.get("client_secret"),
            status=intent["status"],
            amount=from_minor(self.currency, intent["amount"]),
            metadata=dict(metadata),
        )

    def create_authorization(self, amount, customer_email, metadata=None):
        try:
            intent = stripe.PaymentIntent.create(
                amount=to_minor(self.currency, amount),
                currency=self.currency,
                receipt_email=customer_email,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe PaymentIntent creation failed for {customer_email}: {e}")
            raise PaymentGatewayError(
                getattr(e, "user_message", None) or str(e), original=e
            ) from e

        logger.info(f"Created Stripe PI {intent['id']} for {amount} {self.currency.upper()}")
        return self._to_authorization(intent)

    def retrieve_authorization(self, payment_id):
        try:
            intent = stripe.PaymentIntent.retrieve(payment_id)
        except stripe.StripeError as e:
            logger.error(f"Could not retrieve Stripe PI {payment_id}: {e}")
            raise PaymentGatewayError(str(e), payment_id=payment_id, original=e) from e
        return self._to_authorization(intent)

    def void_authorization(self, payment_id):
        authorization = self.retrieve_authorization(payment_id)
        if authorization.succeeded:
            self.refund(payment_id)
            return

        try:
            stripe.PaymentIntent.cancel(payment_id)
            logger.info(f"Cancelled Stripe PI {payment_id}")
        except stripe.InvalidRequestError as e:
            # Already canceled or otherwise finalized.
            logger.warning(f"Could not cancel Stripe PI {payment_id} (likely already finalized): {e}")
        except stripe.StripeError as e:
            raise PaymentGatewayError(str(e), payment_id=payment_id, original=e) from e

    def refund(self, payment_id):
        try:
            refund = stripe.Refund.create(payment_intent=payment_id)
        except stripe.StripeError as e:
            logger.error(f"Stripe refund failed for PI {payment_id}: {e}")
            raise PaymentGatewayError(str(e), payment_id=payment_id, original=e) from e
        logger.info(f"Refunded Stripe PI {payment_id} (refund {refund['id']})")

    def construct_webhook_event(self, payload, signature):
        if not self.webhook_secret:
            raise WebhookVerificationError("Webhook secret not configured")
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as e:
            raise WebhookVerificationError("Invalid payload") from e
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError("Invalid signature") from e
        return json.loads(payload)


def get_payment_gateway() -> PaymentGateway:
    """Instantiate the gateway named by settings.PAYMENT_GATEWAY_CLASS."""
    gateway_class = import_string(settings.PAYMENT_GATEWAY_CLASS)
    return gateway_class()
