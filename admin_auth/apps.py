from django.apps import AppConfig


class AdminAuthConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "admin_auth"
