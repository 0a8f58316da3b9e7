"""Order repository on top of the Django ORM.

Uniqueness of ``order_id`` is enforced by the database index; the repository
translates integrity and connection failures into the orders error kinds.
Status updates are a single ``UPDATE`` statement and deletes run inside one
transaction, so concurrent requests against the same order never observe a
half-applied change.
"""

from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from .exceptions import DuplicateOrderId, PersistenceError
from .models import Order, OrderFile


class OrderRepository:
    """Persistent collection of orders and their file records."""

    def _queryset(self):
        return Order.objects.prefetch_related("files")

    def insert(self, fields: dict, files) -> Order:
        """Persist an order with its file records in one transaction."""
        if not files:
            raise ValidationError({"files": "At least one file is required"})
        try:
            with transaction.atomic():
                order = Order.objects.create(**fields)
                OrderFile.objects.bulk_create(
                    [
                        OrderFile(
                            order=order,
                            position=index,
                            name=f.name,
                            original_name=f.original_name,
                            size=f.size,
                            type=f.type,
                            path=f.path,
                            upload_date=f.upload_date,
                        )
                        for index, f in enumerate(files)
                    ]
                )
        except IntegrityError as exc:
            if Order.objects.filter(order_id=fields.get("order_id")).exists():
                raise DuplicateOrderId() from exc
            raise PersistenceError("Failed to create order") from exc
        except DatabaseError as exc:
            raise PersistenceError("Failed to create order") from exc
        return self.find_by_id(order.order_id)

    def find_by_id(self, order_id: str):
        return self._queryset().filter(order_id=order_id).first()

    def find_many(self, filters=None, sort_by="order_date", descending=True, page=1, page_size=10):
        """Return ``(orders, total)`` for one page of the filtered, sorted collection."""
        qs = self._queryset().filter(**(filters or {}))
        total = qs.count()
        prefix = "-" if descending else ""
        qs = qs.order_by(f"{prefix}{sort_by}", f"{prefix}id")
        offset = (page - 1) * page_size
        return list(qs[offset:offset + page_size]), total

    def latest(self, limit: int):
        """Newest orders first, without their file records."""
        return list(Order.objects.order_by("-order_date", "-id")[:limit])

    def update_status(self, order_id: str, status: str):
        """Set the status atomically; returns the updated order or None if absent."""
        try:
            updated = Order.objects.filter(order_id=order_id).update(
                status=status, updated_at=timezone.now()
            )
        except DatabaseError as exc:
            raise PersistenceError("Failed to update order status") from exc
        if not updated:
            return None
        return self.find_by_id(order_id)

    def delete_by_id(self, order_id: str) -> bool:
        try:
            with transaction.atomic():
                deleted, _ = Order.objects.filter(order_id=order_id).delete()
        except DatabaseError as exc:
            raise PersistenceError("Failed to delete order") from exc
        return deleted > 0

    def count_matching(self, **filters) -> int:
        return Order.objects.filter(**filters).count()

    def sum_field(self, field: str, **filters) -> Decimal:
        total = Order.objects.filter(**filters).aggregate(total=Sum(field))["total"]
        return total if total is not None else Decimal("0")

    def breakdown(self, group_field: str, sum_field: str):
        """Count and sum per distinct value of ``group_field``."""
        rows = (
            Order.objects.order_by()
            .values(group_field)
            .annotate(count=Count("id"), total=Sum(sum_field))
            .order_by(group_field)
        )
        return [
            {
                "key": row[group_field],
                "count": row["count"],
                "total": row["total"] if row["total"] is not None else Decimal("0"),
            }
            for row in rows
        ]
