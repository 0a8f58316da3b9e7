from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("orders.api.urls")),
    path("api/", include("stats.api.urls")),
    path("api/", include("admin_auth.api.urls")),
]
