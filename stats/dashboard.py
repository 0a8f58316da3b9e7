"""Dashboard statistics over the order repository.

Everything is computed on demand. Two time windows are easy to confuse:

* ``weekOrders`` counts orders since the start of the current calendar week
  (``DASHBOARD_WEEK_START`` is the first day of the week).
* ``dailyOrders`` is a rolling window: the last seven calendar days
  including today, one entry per day.

Day boundaries are midnights in the configured ``TIME_ZONE``.
"""

from datetime import datetime, time, timedelta

from django.conf import settings
from django.utils import timezone

from orders.models import Order
from orders.repository import OrderRepository

RECENT_ORDERS = 10
DAILY_WINDOW_DAYS = 7


def _start_of(day):
    return timezone.make_aware(datetime.combine(day, time.min))


class DashboardAggregator:
    """Builds the admin dashboard snapshot."""

    def __init__(self, repository=None, now=timezone.now, week_start=None):
        self.repository = repository or OrderRepository()
        self.now = now
        self.week_start = settings.DASHBOARD_WEEK_START if week_start is None else week_start

    def snapshot(self) -> dict:
        today = timezone.localtime(self.now()).date()
        start_of_day = _start_of(today)
        start_of_week = _start_of(today - timedelta(days=(today.weekday() - self.week_start) % 7))
        start_of_month = _start_of(today.replace(day=1))

        return {
            "overview": self._overview(start_of_day, start_of_week, start_of_month),
            "orderStatus": {
                value: self.repository.count_matching(status=value)
                for value in Order.Status.values
            },
            "recentOrders": self._recent_orders(),
            "ordersByType": [
                {"printType": row["key"], "count": row["count"], "revenue": row["total"]}
                for row in self.repository.breakdown("print_type", "total_cost")
            ],
            "dailyOrders": self._daily_orders(today),
        }

    def _overview(self, start_of_day, start_of_week, start_of_month):
        repo = self.repository
        completed = Order.Status.COMPLETED
        return {
            "totalOrders": repo.count_matching(),
            "todayOrders": repo.count_matching(order_date__gte=start_of_day),
            "weekOrders": repo.count_matching(order_date__gte=start_of_week),
            "monthOrders": repo.count_matching(order_date__gte=start_of_month),
            "totalRevenue": repo.sum_field("total_cost", status=completed),
            "monthRevenue": repo.sum_field(
                "total_cost", status=completed, order_date__gte=start_of_month
            ),
        }

    def _recent_orders(self):
        return [
            {
                "orderId": o.order_id,
                "fullName": o.full_name,
                "printType": o.print_type,
                "status": o.status,
                "orderDate": o.order_date,
                "totalCost": o.total_cost,
            }
            for o in self.repository.latest(RECENT_ORDERS)
        ]

    def _daily_orders(self, today):
        days = []
        for offset in range(DAILY_WINDOW_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            count = self.repository.count_matching(
                order_date__gte=_start_of(day),
                order_date__lt=_start_of(day + timedelta(days=1)),
            )
            days.append({"date": day.isoformat(), "orders": count})
        return days
