"""
Payment endpoints: confirmation after client-side payment, and the
Stripe webhook that keeps Order.payment_status in step with the gateway.
"""

import logging

from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from rest_framework import permissions, serializers
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import PaymentGatewayError, WebhookVerificationError
from .gateway import get_payment_gateway
from .services import PaymentWebhookService, confirm_payment

logger = logging.getLogger(__name__)


class ConfirmPaymentSerializer(serializers.Serializer):
    paymentIntentId = serializers.CharField(max_length=255)


class ConfirmPaymentView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = confirm_payment(serializer.validated_data["paymentIntentId"])
        return Response(result)


@method_decorator(csrf_exempt, name="dispatch")
class StripeWebhookView(APIView):
    """
    Receives Stripe events. Anything that fails signature verification is
    rejected with 400; a gateway error while reconciling returns 500 so
    Stripe redelivers the event.
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        payload = request.body
        sig_header = request.META.get("HTTP_STRIPE_SIGNATURE", "")
        gateway = get_payment_gateway()

        try:
            event = gateway.construct_webhook_event(payload, sig_header)
        except WebhookVerificationError as e:
            logger.error(f"Stripe webhook rejected: {e}")
            return HttpResponse(status=400)

        try:
            outcome = PaymentWebhookService(gateway).handle_event(event)
        except PaymentGatewayError as e:
            logger.error(f"Stripe webhook {event.get('id')} ({event.get('type')}) failed: {e}")
            return HttpResponse(status=500)

        logger.info(f"Stripe webhook {event.get('id')} ({event.get('type')}): {outcome}")
        return HttpResponse(status=200)
