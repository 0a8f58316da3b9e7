from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from orders.tests.factories import create_customer, create_staff, make_order
from stats.dashboard import DashboardAggregator


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


# Wednesday
NOW = utc(2026, 10, 14, 12, 0)


@override_settings(TIME_ZONE="UTC")
class DashboardAggregatorTests(TestCase):
    """
    Orders around a fixed "now" (Wed 2026-10-14):
    - today, completed color 160
    - Sunday 10-11, pending 15       (this week when weeks start on Sunday)
    - Saturday 10-10, completed 32.5 (last 7 days, but last week)
    - 10-08, cancelled customPrint 0 (first day of the 7-day window)
    - 09-30, completed 7.5           (previous month)
    """

    def setUp(self):
        self.today = make_order(order_date=utc(2026, 10, 14, 9), status="completed",
                                print_type="color", total_cost=Decimal("160"))
        self.sunday = make_order(order_date=utc(2026, 10, 11, 10), status="pending",
                                 total_cost=Decimal("15"))
        self.saturday = make_order(order_date=utc(2026, 10, 10, 10), status="completed",
                                   print_type="spiralBinding", total_cost=Decimal("32.5"))
        self.window_start = make_order(order_date=utc(2026, 10, 8, 8), status="cancelled",
                                       print_type="customPrint", total_cost=Decimal("0"))
        self.last_month = make_order(order_date=utc(2026, 9, 30, 10), status="completed",
                                     total_cost=Decimal("7.5"))

    def snapshot(self, week_start=6):
        return DashboardAggregator(now=lambda: NOW, week_start=week_start).snapshot()

    def test_overview_counts_and_revenue(self):
        overview = self.snapshot()["overview"]
        self.assertEqual(overview["totalOrders"], 5)
        self.assertEqual(overview["todayOrders"], 1)
        self.assertEqual(overview["weekOrders"], 2)
        self.assertEqual(overview["monthOrders"], 4)
        self.assertEqual(overview["totalRevenue"], Decimal("200"))
        self.assertEqual(overview["monthRevenue"], Decimal("192.5"))
        self.assertLessEqual(overview["monthRevenue"], overview["totalRevenue"])

    def test_week_starts_on_configured_day(self):
        self.assertEqual(self.snapshot(week_start=0)["overview"]["weekOrders"], 1)

    def test_status_counts(self):
        self.assertEqual(
            self.snapshot()["orderStatus"],
            {"pending": 1, "processing": 0, "completed": 3, "cancelled": 1},
        )

    def test_daily_orders_is_rolling_seven_days(self):
        daily = self.snapshot()["dailyOrders"]
        self.assertEqual(
            daily,
            [
                {"date": "2026-10-08", "orders": 1},
                {"date": "2026-10-09", "orders": 0},
                {"date": "2026-10-10", "orders": 1},
                {"date": "2026-10-11", "orders": 1},
                {"date": "2026-10-12", "orders": 0},
                {"date": "2026-10-13", "orders": 0},
                {"date": "2026-10-14", "orders": 1},
            ],
        )

    def test_orders_by_type(self):
        by_type = {row["printType"]: row for row in self.snapshot()["ordersByType"]}
        self.assertEqual(set(by_type), {"blackAndWhite", "color", "spiralBinding", "customPrint"})
        self.assertEqual(by_type["blackAndWhite"]["count"], 2)
        self.assertEqual(by_type["blackAndWhite"]["revenue"], Decimal("22.5"))
        self.assertEqual(by_type["color"]["revenue"], Decimal("160"))

    def test_recent_orders_newest_first(self):
        recent = self.snapshot()["recentOrders"]
        self.assertEqual(
            [r["orderId"] for r in recent],
            [o.order_id for o in (self.today, self.sunday, self.saturday,
                                  self.window_start, self.last_month)],
        )
        self.assertEqual(
            set(recent[0]), {"orderId", "fullName", "printType", "status", "orderDate", "totalCost"}
        )

    def test_recent_orders_skip_file_records(self):
        make_order(order_date=NOW, files=2)
        with self.assertNumQueries(1):
            recent = DashboardAggregator(now=lambda: NOW)._recent_orders()
        self.assertEqual(len(recent), 6)

    def test_recent_orders_limited_to_ten(self):
        for _ in range(12):
            make_order(order_date=NOW)
        self.assertEqual(len(self.snapshot()["recentOrders"]), 10)


class DashboardAPITests(APITestCase):
    def setUp(self):
        self.url = reverse("stats-dashboard")
        self.admin, self.admin_token = create_staff()
        self.cust, self.cust_token = create_customer()

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_requires_auth_401(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_forbidden_for_non_staff_403(self):
        self.auth(self.cust_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_empty_database_returns_zeros(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        data = res.data["data"]
        self.assertEqual(data["overview"]["totalOrders"], 0)
        self.assertEqual(data["overview"]["totalRevenue"], Decimal("0"))
        self.assertEqual(data["recentOrders"], [])
        self.assertEqual(data["ordersByType"], [])
        self.assertEqual(len(data["dailyOrders"]), 7)
        self.assertTrue(all(day["orders"] == 0 for day in data["dailyOrders"]))

    def test_snapshot_shape_with_orders(self):
        make_order(status="completed", total_cost=Decimal("40"))
        make_order(status="pending", total_cost=Decimal("10"))
        self.auth(self.admin_token)
        res = self.client.get(self.url)
        data = res.data["data"]
        for key in ["overview", "orderStatus", "recentOrders", "ordersByType", "dailyOrders"]:
            self.assertIn(key, data)
        self.assertEqual(data["overview"]["totalOrders"], 2)
        self.assertEqual(data["overview"]["todayOrders"], 2)
        self.assertEqual(data["overview"]["totalRevenue"], Decimal("40"))
        self.assertLessEqual(data["overview"]["monthRevenue"], data["overview"]["totalRevenue"])
        self.assertEqual(data["dailyOrders"][-1]["orders"], 2)
