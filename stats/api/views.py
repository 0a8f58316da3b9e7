from django.db import DatabaseError
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.responses import envelope
from orders.api.permissions import IsAdminStaff
from orders.exceptions import PersistenceError
from stats.dashboard import DashboardAggregator


class DashboardAPIView(APIView):
    """
    GET /api/stats/dashboard/

    Returns the admin dashboard snapshot:
    - overview: order counts (total, today, this week, this month) and revenue
      (all time and this month, completed orders only)
    - orderStatus: number of orders per status
    - recentOrders: the 10 newest orders (summary fields)
    - ordersByType: count and revenue per print type
    - dailyOrders: order counts for the last 7 days, oldest first

    Authentication: token
    Permissions: staff only
    """

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request):
        try:
            snapshot = DashboardAggregator().snapshot()
        except DatabaseError as exc:
            raise PersistenceError("Failed to retrieve statistics") from exc
        return envelope(snapshot)
