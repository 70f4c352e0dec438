from django.urls import path

from . import views

app_name = "orders"

urlpatterns = [
    # Ordering
    path("orders", views.OrderListCreateView.as_view(), name="order-list"),
    path("orders/guest", views.GuestOrderCreateView.as_view(), name="guest-order-create"),
    path("orders/guest/<uuid:pk>", views.GuestOrderDetailView.as_view(), name="guest-order-detail"),
    path("orders/<uuid:pk>", views.OrderDetailView.as_view(), name="order-detail"),
    # Kitchen
    path("kitchen/orders", views.KitchenOrderListView.as_view(), name="kitchen-orders"),
    path("kitchen/summary", views.KitchenSummaryView.as_view(), name="kitchen-summary"),
    path("kitchen/stats", views.KitchenStatsView.as_view(), name="kitchen-stats"),
    path(
        "kitchen/orders/<uuid:pk>/status",
        views.KitchenOrderStatusView.as_view(),
        name="kitchen-order-status",
    ),
    path(
        "kitchen/order-items/<uuid:pk>/status",
        views.KitchenOrderItemStatusView.as_view(),
        name="kitchen-order-item-status",
    ),
    path(
        "kitchen/menu-items/<uuid:pk>/fulfill",
        views.KitchenFulfillMenuItemView.as_view(),
        name="kitchen-fulfill-menu-item",
    ),
]
