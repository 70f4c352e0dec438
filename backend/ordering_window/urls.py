from django.urls import path

from . import views

app_name = "ordering_window"

urlpatterns = [
    path("status", views.OrderingWindowStatusView.as_view(), name="status"),
]
