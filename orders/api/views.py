"""Orders API views.

Customers submit orders (multipart: order fields plus ``files`` parts) and
look them up by order id. Staff list, update the status of, delete, and
download the files of orders. The views only parse requests and render
responses; the work happens in :class:`orders.services.OrderService`.
"""

from django.http import FileResponse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from core.responses import envelope
from orders.services import get_order_service
from .permissions import IsAdminStaff
from .serializers import (
    OrderCreateSerializer,
    OrderCreatedSerializer,
    OrderListQuerySerializer,
    OrderOutputSerializer,
    OrderStatusPatchSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _validate_patch_only_status(data):
    """Allow only 'status' in the PATCH body."""
    extra = set(data.keys()) - {"status"}
    if extra:
        raise ValidationError(
            {"detail": f"Only 'status' may be updated. Invalid fields: {', '.join(sorted(extra))}."}
        )


# --------------------------------------- views ---------------------------------------

class OrderListCreateAPIView(APIView):
    """GET: paginated order list (staff only).
    POST: submit a new order with its files (public).
    """

    parser_classes = (MultiPartParser, FormParser, JSONParser)

    def get_permissions(self):
        """Public on POST, staff-only otherwise."""
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated(), IsAdminStaff()]

    def get(self, request):
        query = OrderListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        orders, pagination = get_order_service().list_orders(**query.validated_data)
        data = {
            "orders": OrderOutputSerializer(orders, many=True).data,
            "pagination": pagination,
        }
        return envelope(data)

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = get_order_service().create_order(
            serializer.validated_data, request.FILES.getlist("files")
        )
        return envelope(
            OrderCreatedSerializer(order).data,
            message="Order created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class OrderDetailDeleteAPIView(APIView):
    """GET: look up an order by its order id (public).
    DELETE: remove the order and its files (staff only).
    """

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAuthenticated(), IsAdminStaff()]
        return [AllowAny()]

    def get(self, request, order_id):
        order = get_order_service().get_order(order_id)
        return envelope(OrderOutputSerializer(order).data)

    def delete(self, request, order_id):
        get_order_service().delete_order(order_id)
        return envelope(message="Order deleted successfully")


class OrderStatusUpdateAPIView(APIView):
    """PATCH /api/orders/{order_id}/status/ -> updated order (staff only)."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def patch(self, request, order_id):
        _validate_patch_only_status(request.data)
        serializer = OrderStatusPatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = get_order_service().update_status(order_id, serializer.validated_data["status"])
        return envelope(
            OrderOutputSerializer(order).data, message="Order status updated successfully"
        )


class OrderFileDownloadAPIView(APIView):
    """GET /api/orders/{order_id}/files/{file_name}/ -> file bytes (staff only)."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request, order_id, file_name):
        record, stream = get_order_service().open_file(order_id, file_name)
        return FileResponse(
            stream,
            as_attachment=True,
            filename=record.original_name,
            content_type=record.type,
        )
