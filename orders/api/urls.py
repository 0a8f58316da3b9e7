from django.urls import path
from .views import (
    OrderListCreateAPIView,
    OrderDetailDeleteAPIView,
    OrderStatusUpdateAPIView,
    OrderFileDownloadAPIView,
)

urlpatterns = [
    path("orders/", OrderListCreateAPIView.as_view(), name="order-list"),
    path("orders/<str:order_id>/", OrderDetailDeleteAPIView.as_view(), name="order-detail"),
    path("orders/<str:order_id>/status/", OrderStatusUpdateAPIView.as_view(), name="order-status"),
    path(
        "orders/<str:order_id>/files/<str:file_name>/",
        OrderFileDownloadAPIView.as_view(),
        name="order-file",
    ),
]
