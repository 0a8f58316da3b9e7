import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_id", models.CharField(editable=False, max_length=64, unique=True)),
                ("full_name", models.CharField(max_length=100)),
                ("phone_number", models.CharField(max_length=15)),
                (
                    "print_type",
                    models.CharField(
                        choices=[
                            ("blackAndWhite", "blackAndWhite"),
                            ("color", "color"),
                            ("custom", "custom"),
                            ("softBinding", "softBinding"),
                            ("spiralBinding", "spiralBinding"),
                            ("customPrint", "customPrint"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "binding_color_type",
                    models.CharField(
                        blank=True,
                        choices=[("blackAndWhite", "blackAndWhite"), ("color", "color"), ("custom", "custom")],
                        default=None,
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "copies",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(1000),
                        ],
                    ),
                ),
                (
                    "paper_size",
                    models.CharField(
                        choices=[("a4", "a4"), ("a3", "a3"), ("letter", "letter"), ("legal", "legal")],
                        default="a4",
                        max_length=10,
                    ),
                ),
                (
                    "print_side",
                    models.CharField(choices=[("single", "single"), ("double", "double")], default="single", max_length=10),
                ),
                ("selected_pages", models.CharField(blank=True, default="all", max_length=255)),
                ("color_pages", models.CharField(blank=True, default="", max_length=255)),
                ("bw_pages", models.CharField(blank=True, default="", max_length=255)),
                ("special_instructions", models.TextField(blank=True, default="", max_length=1000)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "pending"),
                            ("processing", "processing"),
                            ("completed", "completed"),
                            ("cancelled", "cancelled"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "total_cost",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("order_date", models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-order_date", "-id"),
            },
        ),
        migrations.CreateModel(
            name="OrderFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                ("name", models.CharField(max_length=255)),
                ("original_name", models.CharField(max_length=255)),
                ("size", models.PositiveBigIntegerField()),
                ("type", models.CharField(max_length=255)),
                ("path", models.CharField(max_length=512)),
                ("upload_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="files",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ("position", "id"),
            },
        ),
        migrations.AddConstraint(
            model_name="orderfile",
            constraint=models.UniqueConstraint(fields=("order", "name"), name="unique_file_name_per_order"),
        ),
    ]
