from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderFile
from .services import get_order_service


class OrderFileInline(admin.TabularInline):
    model = OrderFile
    extra = 0
    can_delete = False
    fields = ("position", "name", "original_name", "size", "type", "upload_date")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order back office:
    - list: order id, customer, print type, status (badge), cost, dates
    - filter: status, print type, order date (date hierarchy)
    - search: order id, name, phone number
    - read-only: everything the customer submitted; status stays editable
    """
    list_display = (
        "order_id",
        "full_name",
        "phone_number",
        "print_type",
        "status_badge",
        "copies",
        "total_cost",
        "order_date",
        "updated_at",
    )
    list_filter = ("status", "print_type", "order_date")
    date_hierarchy = "order_date"
    ordering = ("-order_date", "-id")
    search_fields = ("order_id", "full_name", "phone_number")
    inlines = (OrderFileInline,)

    # Only the status may change after submission
    readonly_fields = (
        "order_id",
        "full_name",
        "phone_number",
        "print_type",
        "binding_color_type",
        "copies",
        "paper_size",
        "print_side",
        "selected_pages",
        "color_pages",
        "bw_pages",
        "special_instructions",
        "total_cost",
        "order_date",
        "updated_at",
    )
    fields = ("status",) + readonly_fields

    def has_add_permission(self, request):
        return False

    # Deleting through the service also removes the stored files
    def delete_model(self, request, obj):
        get_order_service().delete_order(obj.order_id)

    def delete_queryset(self, request, queryset):
        service = get_order_service()
        for order_id in list(queryset.values_list("order_id", flat=True)):
            service.delete_order(order_id)

    def status_badge(self, obj):
        color = {
            "pending": "#f59e0b",
            "processing": "#0ea5e9",
            "completed": "#22c55e",
            "cancelled": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"
