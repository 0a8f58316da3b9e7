from django.urls import path
from .views import DashboardAPIView

urlpatterns = [
    path("stats/dashboard/", DashboardAPIView.as_view(), name="stats-dashboard"),
]
