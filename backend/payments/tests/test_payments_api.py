"""
Payments API Integration Tests

Stripe webhook deliveries are signed with the test webhook secret the same
way Stripe signs them, so signature verification runs for real.
"""
import time

import pytest
from rest_framework import status

from core_backend.tests.fixtures import make_order, sign_webhook_payload, stripe_event
from orders.models import Order

WEBHOOK_URL = '/api/payments/webhook'


@pytest.fixture
def pending_order(order_day, staff_user, chicken_bowl):
    return make_order(
        order_day, 'ORD-20261014-0001', [(chicken_bowl, 1)], user=staff_user, payment_id='pi_test_0001'
    )


def deliver(client, payload, signature):
    return client.post(
        WEBHOOK_URL, data=payload, content_type='application/json', HTTP_STRIPE_SIGNATURE=signature
    )


@pytest.mark.django_db
class TestStripeWebhook:

    def test_signed_success_event_completes_order(self, api_client, fake_gateway, pending_order):
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})

        response = deliver(api_client, payload, sign_webhook_payload(payload))

        assert response.status_code == status.HTTP_200_OK
        pending_order.refresh_from_db()
        assert pending_order.payment_status == Order.PaymentStatus.COMPLETED

    def test_redelivery_is_harmless(self, api_client, fake_gateway, pending_order):
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})

        deliver(api_client, payload, sign_webhook_payload(payload))
        response = deliver(api_client, payload, sign_webhook_payload(payload))

        assert response.status_code == status.HTTP_200_OK
        pending_order.refresh_from_db()
        assert pending_order.payment_status == Order.PaymentStatus.COMPLETED

    def test_bad_signature_rejected(self, api_client, fake_gateway, pending_order):
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})

        response = deliver(api_client, payload, sign_webhook_payload(payload, secret='whsec_wrong'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        pending_order.refresh_from_db()
        assert pending_order.payment_status == Order.PaymentStatus.PENDING

    def test_stale_signature_rejected(self, api_client, fake_gateway, pending_order):
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})
        an_hour_ago = int(time.time()) - 3600

        response = deliver(api_client, payload, sign_webhook_payload(payload, timestamp=an_hour_ago))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_signature_rejected(self, api_client, fake_gateway, pending_order):
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})

        response = api_client.post(WEBHOOK_URL, data=payload, content_type='application/json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unconfigured_secret_rejects_everything(self, settings, api_client, fake_gateway, pending_order):
        settings.STRIPE_WEBHOOK_SECRET = ''
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_test_0001', 'metadata': {}})

        response = deliver(api_client, payload, sign_webhook_payload(payload))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_orphan_success_refunded(self, api_client, fake_gateway, db):
        payload = stripe_event('payment_intent.succeeded', {
            'id': 'pi_orphan',
            'metadata': {'order_id': '0b0e5a3c-56a1-4d3e-9d2f-6f1c1d0e4a42'},
        })

        response = deliver(api_client, payload, sign_webhook_payload(payload))

        assert response.status_code == status.HTTP_200_OK
        assert ('refund', 'pi_orphan') in fake_gateway.calls

    def test_gateway_error_asks_for_redelivery(self, api_client, monkeypatch, fake_gateway, db):
        from core_backend.tests.fixtures import FakePaymentGateway
        from payments.exceptions import PaymentGatewayError

        def refund_down(self, payment_id):
            raise PaymentGatewayError('Request timed out', payment_id=payment_id)

        monkeypatch.setattr(FakePaymentGateway, 'refund', refund_down)
        payload = stripe_event('payment_intent.succeeded', {'id': 'pi_orphan', 'metadata': {}})

        response = deliver(api_client, payload, sign_webhook_payload(payload))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


@pytest.mark.django_db
class TestConfirmPaymentAPI:

    def test_confirm(self, staff_client, fake_gateway, pending_order):
        from decimal import Decimal
        fake_gateway().create_authorization(
            Decimal('14.00'), 'sam.staff@example.com', {'order_number': 'ORD-20261014-0001'}
        )
        fake_gateway.mark_succeeded('pi_test_0001')

        response = staff_client.post('/api/payments/confirm', {'paymentIntentId': 'pi_test_0001'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['orderId'] == str(pending_order.id)
        pending_order.refresh_from_db()
        assert pending_order.payment_status == Order.PaymentStatus.COMPLETED

    def test_incomplete_payment(self, staff_client, fake_gateway, pending_order):
        from decimal import Decimal
        fake_gateway().create_authorization(Decimal('14.00'), 'sam.staff@example.com')

        response = staff_client.post('/api/payments/confirm', {'paymentIntentId': 'pi_test_0001'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'payment_not_completed'

    def test_unknown_payment_is_bad_gateway(self, staff_client, fake_gateway, db):
        response = staff_client.post('/api/payments/confirm', {'paymentIntentId': 'pi_missing'}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_requires_authentication(self, api_client, fake_gateway, db):
        response = api_client.post('/api/payments/confirm', {'paymentIntentId': 'pi_test_0001'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
