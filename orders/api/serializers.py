"""Orders API serializers.

Input serializers parse the camelCase request payloads into model field
names in a single validating step; output serializers render orders back in
camelCase. No output serializer exposes a file's storage path.
"""

from rest_framework import serializers

from orders.models import Order, OrderFile

# API sort keys -> model fields
SORT_FIELDS = {
    "orderId": "order_id",
    "fullName": "full_name",
    "phoneNumber": "phone_number",
    "printType": "print_type",
    "bindingColorType": "binding_color_type",
    "copies": "copies",
    "paperSize": "paper_size",
    "printSide": "print_side",
    "selectedPages": "selected_pages",
    "colorPages": "color_pages",
    "bwPages": "bw_pages",
    "status": "status",
    "totalCost": "total_cost",
    "orderDate": "order_date",
    "updatedAt": "updated_at",
}


class OrderCreateSerializer(serializers.Serializer):
    """Order fields of the multipart submission (files are handled separately)."""

    fullName = serializers.CharField(source="full_name", min_length=2, max_length=100)
    phoneNumber = serializers.CharField(source="phone_number", min_length=10, max_length=15)
    printType = serializers.ChoiceField(source="print_type", choices=Order.PrintType.choices)
    bindingColorType = serializers.ChoiceField(
        source="binding_color_type",
        choices=Order.BindingColorType.choices,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    copies = serializers.IntegerField(min_value=1, max_value=1000, required=False, default=1)
    paperSize = serializers.ChoiceField(
        source="paper_size", choices=Order.PaperSize.choices, required=False, default=Order.PaperSize.A4
    )
    printSide = serializers.ChoiceField(
        source="print_side", choices=Order.PrintSide.choices, required=False, default=Order.PrintSide.SINGLE
    )
    selectedPages = serializers.CharField(
        source="selected_pages", max_length=255, required=False, allow_blank=True, default="all"
    )
    colorPages = serializers.CharField(
        source="color_pages", max_length=255, required=False, allow_blank=True, default=""
    )
    bwPages = serializers.CharField(
        source="bw_pages", max_length=255, required=False, allow_blank=True, default=""
    )
    specialInstructions = serializers.CharField(
        source="special_instructions", max_length=1000, required=False, allow_blank=True, default=""
    )

    def validate_bindingColorType(self, value):
        return value or None

    # allow_blank keeps a blank form value from being replaced by the default,
    # so it is rejected here; only a missing field falls back to "all".
    def validate_selectedPages(self, value):
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value


class OrderFileSerializer(serializers.ModelSerializer):
    """Public view of a file record (no storage path)."""

    originalName = serializers.CharField(source="original_name")
    uploadDate = serializers.DateTimeField(source="upload_date")

    class Meta:
        model = OrderFile
        fields = ["name", "originalName", "size", "type", "uploadDate"]


class OrderOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a complete order representation."""

    orderId = serializers.CharField(source="order_id")
    fullName = serializers.CharField(source="full_name")
    phoneNumber = serializers.CharField(source="phone_number")
    printType = serializers.CharField(source="print_type")
    bindingColorType = serializers.CharField(source="binding_color_type", allow_null=True)
    paperSize = serializers.CharField(source="paper_size")
    printSide = serializers.CharField(source="print_side")
    selectedPages = serializers.CharField(source="selected_pages")
    colorPages = serializers.CharField(source="color_pages")
    bwPages = serializers.CharField(source="bw_pages")
    specialInstructions = serializers.CharField(source="special_instructions")
    files = OrderFileSerializer(many=True, read_only=True)
    totalCost = serializers.DecimalField(
        source="total_cost", max_digits=10, decimal_places=2, coerce_to_string=False
    )
    orderDate = serializers.DateTimeField(source="order_date")
    updatedAt = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = Order
        fields = [
            "id",
            "orderId",
            "fullName",
            "phoneNumber",
            "printType",
            "bindingColorType",
            "copies",
            "paperSize",
            "printSide",
            "selectedPages",
            "colorPages",
            "bwPages",
            "specialInstructions",
            "files",
            "status",
            "totalCost",
            "orderDate",
            "updatedAt",
        ]


class OrderCreatedSerializer(serializers.ModelSerializer):
    """Minimal projection returned after an order was accepted."""

    orderId = serializers.CharField(source="order_id")
    totalCost = serializers.DecimalField(
        source="total_cost", max_digits=10, decimal_places=2, coerce_to_string=False
    )

    class Meta:
        model = Order
        fields = ["orderId", "totalCost", "status", "id"]


class OrderStatusPatchSerializer(serializers.Serializer):
    """Patch serializer used to update only the order status."""

    status = serializers.ChoiceField(choices=Order.Status.choices)


class OrderListQuerySerializer(serializers.Serializer):
    """Query parameters of the admin order list."""

    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=10)
    status = serializers.ChoiceField(
        choices=Order.Status.choices, required=False, allow_blank=True, default=""
    )
    sortBy = serializers.ChoiceField(choices=list(SORT_FIELDS), required=False, default="orderDate")
    sortOrder = serializers.ChoiceField(choices=("asc", "desc"), required=False, default="desc")

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        return {
            "page": values["page"],
            "limit": values["limit"],
            "status": values["status"] or None,
            "sort_by": SORT_FIELDS[values["sortBy"]],
            "sort_order": values["sortOrder"],
        }
