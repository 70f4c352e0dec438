"""
API exception handler.

Domain errors from the order core are rendered as
{"error": message, "code": code, ...details} with the status the exception
carries. Everything else goes through DRF's default handler.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from orders.exceptions import OrderError
from payments.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    if isinstance(exc, OrderError):
        body = {"error": exc.message, "code": exc.code}
        body.update(exc.get_details())
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}")
        return Response(body, status=exc.status_code)

    if isinstance(exc, PaymentGatewayError):
        logger.error(f"Payment gateway error: {exc}")
        return Response(
            {"error": "Payment provider unavailable", "code": "payment_gateway_error"},
            status=status.HTTP_502_BAD_GATEWAY,
        )

    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return Response(
            {"error": "Invalid request", "code": "invalid", "detail": detail},
            status=status.HTTP_400_BAD_REQUEST,
        )

    return exception_handler(exc, context)
