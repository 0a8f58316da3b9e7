import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token


class Command(BaseCommand):
    help = "Create or update the shop's staff user for the admin dashboard."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=os.environ.get("ADMIN_USERNAME", "admin"))
        parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"))
        parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL", ""))

    def handle(self, *args, **options):
        User = get_user_model()
        username = options["username"]

        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": options["email"]},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created admin '{username}'"))
        else:
            self.stdout.write(f"Admin '{username}' already exists")

        # staff flag is what the API permission checks
        user.is_staff = True
        user.is_active = True
        fields = ["is_staff", "is_active"]
        if options["password"]:
            user.set_password(options["password"])
            fields.append("password")
        elif created:
            user.set_unusable_password()
            fields.append("password")
            self.stdout.write(self.style.WARNING("No password given; set one with changepassword."))
        user.save(update_fields=fields)

        token, _ = Token.objects.get_or_create(user=user)
        self.stdout.write(f"  → token={token.key}")
        self.stdout.write(self.style.SUCCESS("Admin ready."))
