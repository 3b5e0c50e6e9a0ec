from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Camp",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(5, "Nazwa musi mieć minimum 5 znaków")])),
                ("type", models.CharField(choices=[("hotelik", "Hotelik"), ("zlot", "Zlot"), ("turnus", "Turnus")], default="turnus", max_length=20)),
                ("location", models.CharField(default="Przebrno", max_length=200, validators=[django.core.validators.MinLengthValidator(2, "Lokalizacja musi mieć minimum 2 znaki")])),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("1"), "Cena musi być większa od 0")])),
                ("capacity", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1, "Pojemność musi być większa od 0")])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "camps",
                "ordering": ["start_date"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="camps_dates_check", violation_error_message="Data zakończenia musi być późniejsza niż data rozpoczęcia"),
                    models.CheckConstraint(condition=models.Q(("price__gt", 0)), name="camps_price_check"),
                    models.CheckConstraint(condition=models.Q(("capacity__gt", 0)), name="camps_capacity_check"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CampTypeDescription",
            fields=[
                ("type", models.CharField(choices=[("hotelik", "Hotelik"), ("zlot", "Zlot"), ("turnus", "Turnus")], max_length=20, primary_key=True, serialize=False)),
                ("label", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
            ],
            options={
                "db_table": "camp_type_descriptions",
                "ordering": ["type"],
            },
        ),
        migrations.CreateModel(
            name="DocumentTemplate",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("payment_reminder", "Przypomnienie o płatności"), ("registration_card", "Karta zgłoszeniowa")], max_length=30)),
                ("name", models.CharField(max_length=200)),
                ("content", models.TextField()),
                ("is_default", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "document_templates",
                "ordering": ["-is_default", "-created_at"],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("is_default", True)), fields=("type",), name="document_templates_one_default_per_type"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Admin",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("admin", "Administrator"), ("super_admin", "Superadministrator")], default="admin", max_length=20)),
                ("permissions", models.JSONField(blank=True, default=dict)),
                ("last_login", models.DateTimeField(blank=True, null=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="admin_profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "admins",
            },
        ),
        migrations.CreateModel(
            name="HomepageSection",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("hero", "Baner"), ("features", "Zalety"), ("stats", "Statystyki"), ("camps", "Obozy")], max_length=20)),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                ("subtitle", models.CharField(blank=True, max_length=255, null=True)),
                ("content", models.JSONField(blank=True, default=dict)),
                ("order", models.IntegerField(default=0)),
                ("is_visible", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "homepage_sections",
                "ordering": ["order", "pk"],
            },
        ),
        migrations.CreateModel(
            name="HomepageImage",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("url", models.CharField(max_length=500)),
                ("alt", models.CharField(blank=True, default="", max_length=255)),
                ("section", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="images", to="camps.homepagesection")),
            ],
            options={
                "db_table": "homepage_images",
            },
        ),
        migrations.CreateModel(
            name="AdminAuditLog",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=50)),
                ("table_name", models.CharField(blank=True, max_length=100, null=True)),
                ("record_id", models.CharField(blank=True, max_length=64, null=True)),
                ("old_data", models.JSONField(blank=True, null=True)),
                ("new_data", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "admin_audit_logs",
                "ordering": ["-created_at"],
            },
        ),
    ]
