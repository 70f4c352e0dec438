"""
Custom exceptions for the payments app.
"""

from orders.exceptions import StateError


class PaymentGatewayError(Exception):
    """Raised when the payment gateway rejects a request, errors or times out."""

    def __init__(self, message, payment_id=None, original=None):
        self.payment_id = payment_id
        self.original = original
        super().__init__(message)


class WebhookVerificationError(Exception):
    """Raised when a webhook payload or its signature cannot be verified."""
    pass


class PaymentNotCompleted(StateError):
    """Raised when confirming a payment the customer has not completed."""

    code = "payment_not_completed"

    def __init__(self, payment_id, gateway_status):
        self.payment_id = payment_id
        self.gateway_status = gateway_status
        super().__init__("Payment has not been completed")

    def get_details(self):
        return {"paymentStatus": self.gateway_status}
