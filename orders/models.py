"""Orders app models.

Defines the Order model and its File Records. An Order snapshots the print
options chosen by the customer together with the cost derived at creation
time; later status changes never recompute the cost. File Records belong to
exactly one order and are removed with it.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """A customer's print job: contact data, print options, files, status."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        PROCESSING = "processing", "processing"
        COMPLETED = "completed", "completed"
        CANCELLED = "cancelled", "cancelled"

    class PrintType(models.TextChoices):
        BLACK_AND_WHITE = "blackAndWhite", "blackAndWhite"
        COLOR = "color", "color"
        CUSTOM = "custom", "custom"
        SOFT_BINDING = "softBinding", "softBinding"
        SPIRAL_BINDING = "spiralBinding", "spiralBinding"
        CUSTOM_PRINT = "customPrint", "customPrint"

    class BindingColorType(models.TextChoices):
        BLACK_AND_WHITE = "blackAndWhite", "blackAndWhite"
        COLOR = "color", "color"
        CUSTOM = "custom", "custom"

    class PaperSize(models.TextChoices):
        A4 = "a4", "a4"
        A3 = "a3", "a3"
        LETTER = "letter", "letter"
        LEGAL = "legal", "legal"

    class PrintSide(models.TextChoices):
        SINGLE = "single", "single"
        DOUBLE = "double", "double"

    order_id = models.CharField(max_length=64, unique=True, editable=False)
    full_name = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=15)

    print_type = models.CharField(max_length=20, choices=PrintType.choices)
    binding_color_type = models.CharField(
        max_length=20, choices=BindingColorType.choices, null=True, blank=True, default=None
    )
    copies = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1), MaxValueValidator(1000)]
    )
    paper_size = models.CharField(
        max_length=10, choices=PaperSize.choices, default=PaperSize.A4
    )
    print_side = models.CharField(
        max_length=10, choices=PrintSide.choices, default=PrintSide.SINGLE
    )
    selected_pages = models.CharField(max_length=255, default="all", blank=True)
    color_pages = models.CharField(max_length=255, default="", blank=True)
    bw_pages = models.CharField(max_length=255, default="", blank=True)
    special_instructions = models.TextField(max_length=1000, default="", blank=True)

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    total_cost = models.DecimalField(
        max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    order_date = models.DateTimeField(default=timezone.now, editable=False, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-order_date", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.order_id} {self.print_type} {self.status}>"


class OrderFile(models.Model):
    """An uploaded document stored for an order."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="files")
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=255)
    original_name = models.CharField(max_length=255)
    size = models.PositiveBigIntegerField()
    type = models.CharField(max_length=255)
    path = models.CharField(max_length=512)
    upload_date = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("position", "id")
        constraints = [
            models.UniqueConstraint(fields=["order", "name"], name="unique_file_name_per_order")
        ]

    def __str__(self) -> str:
        return f"OrderFile<{self.name} ({self.original_name})>"


# Allowed status changes. Every status is reachable from every other so staff
# can correct mistakes; tighten entries here to enforce a forward-only flow.
STATUS_TRANSITIONS = {
    current: frozenset(Order.Status.values) for current in Order.Status.values
}


def can_transition(current: str, target: str) -> bool:
    return target in STATUS_TRANSITIONS.get(current, frozenset())
