"""Order lifecycle service.

Coordinates the file store, the cost estimator, and the repository for every
order operation. Creating an order writes files first and the database row
second; if the row cannot be written the files stored for it are removed
again on a best-effort basis, so a failed request can briefly leave files
without an order but never an order without files.
"""

import logging
import math
import secrets
import time

from rest_framework.exceptions import NotFound, ValidationError

from .models import Order, can_transition
from .pricing import estimate_cost
from .repository import OrderRepository
from .storage import OrderFileStore

logger = logging.getLogger(__name__)


def generate_order_id() -> str:
    """``ORD-<ms timestamp>-<random>``; the suffix keeps same-millisecond ids apart."""
    return f"ORD-{int(time.time() * 1000)}-{secrets.token_hex(4).upper()}"


class OrderService:
    """Create, read, update, and delete orders together with their files."""

    def __init__(self, repository=None, file_store=None, estimator=estimate_cost,
                 id_factory=generate_order_id):
        self.repository = repository or OrderRepository()
        self.file_store = file_store or OrderFileStore()
        self.estimator = estimator
        self.id_factory = id_factory

    # --- create ---
    def create_order(self, data: dict, uploads) -> Order:
        """Store the uploads, price the order, and persist it.

        ``data`` holds the already validated order fields (model field names).
        Raises ValidationError or a storage error before anything is written
        when the uploads are missing or not acceptable.
        """
        uploads = list(uploads or [])
        self.file_store.check(uploads)

        total_cost = self.estimator(
            data.get("print_type"), data.get("selected_pages", "all"), data.get("copies", 1)
        )
        stored = self._store_all(uploads)

        fields = dict(
            data,
            order_id=self.id_factory(),
            total_cost=total_cost,
            status=Order.Status.PENDING,
        )
        try:
            order = self.repository.insert(fields, stored)
        except Exception:
            logger.error("Persisting order failed, removing %d stored file(s)", len(stored))
            self._discard(stored)
            raise

        logger.info(
            "Order %s created with %d file(s), total %s",
            order.order_id, len(stored), order.total_cost,
        )
        return order

    def _store_all(self, uploads):
        stored = []
        try:
            for upload in uploads:
                stored.append(self.file_store.save(upload))
        except Exception:
            self._discard(stored)
            raise
        return stored

    def _discard(self, stored) -> None:
        for f in stored:
            try:
                self.file_store.delete(f.path)
            except Exception:
                logger.exception("Could not remove stored file %s", f.path)

    # --- read ---
    def get_order(self, order_id: str) -> Order:
        order = self.repository.find_by_id(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    def list_orders(self, status=None, sort_by="order_date", sort_order="desc", page=1, limit=10):
        """Return ``(orders, pagination)`` for one page of the admin order list."""
        filters = {"status": status} if status else {}
        orders, total = self.repository.find_many(
            filters,
            sort_by=sort_by,
            descending=sort_order != "asc",
            page=page,
            page_size=limit,
        )
        pagination = {
            "current": page,
            "pages": math.ceil(total / limit),
            "total": total,
            "limit": limit,
        }
        return orders, pagination

    # --- update ---
    def update_status(self, order_id: str, status: str) -> Order:
        if status not in Order.Status.values:
            raise ValidationError(
                {"status": f"Must be one of: {', '.join(Order.Status.values)}."}
            )
        current = self.get_order(order_id)
        if not can_transition(current.status, status):
            raise ValidationError(
                {"status": f"Cannot change status from '{current.status}' to '{status}'."}
            )

        order = self.repository.update_status(order_id, status)
        if order is None:
            raise NotFound("Order not found")
        logger.info("Order %s status %s -> %s", order_id, current.status, status)
        return order

    # --- delete ---
    def delete_order(self, order_id: str) -> None:
        """Delete the stored files (failures are logged) and then the order."""
        order = self.get_order(order_id)
        for f in order.files.all():
            try:
                self.file_store.delete(f.path)
            except Exception:
                logger.exception("Could not delete file %s of order %s", f.path, order_id)

        if not self.repository.delete_by_id(order_id):
            raise NotFound("Order not found")
        logger.info("Order %s deleted", order_id)

    # --- files ---
    def open_file(self, order_id: str, file_name: str):
        """Return ``(file_record, stream)`` for a file attached to an order."""
        order = self.get_order(order_id)
        record = next((f for f in order.files.all() if f.name == file_name), None)
        if record is None:
            raise NotFound("File not found")
        if not self.file_store.exists(record.path):
            logger.warning("File %s of order %s is missing on disk", record.path, order_id)
            raise NotFound("File not found on disk")
        return record, self.file_store.open(record.path)


def get_order_service() -> OrderService:
    return OrderService()
