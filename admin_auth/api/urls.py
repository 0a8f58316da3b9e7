from django.urls import path
from .views import AdminLoginView, AdminLogoutView, AdminVerifyView

urlpatterns = [
    path("auth/login/", AdminLoginView.as_view(), name="admin-login"),
    path("auth/verify/", AdminVerifyView.as_view(), name="admin-verify"),
    path("auth/logout/", AdminLogoutView.as_view(), name="admin-logout"),
]
