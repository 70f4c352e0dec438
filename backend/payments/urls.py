from django.urls import path

from . import views

app_name = "payments"

urlpatterns = [
    path("confirm", views.ConfirmPaymentView.as_view(), name="confirm"),
    path("webhook", views.StripeWebhookView.as_view(), name="webhook"),
]
