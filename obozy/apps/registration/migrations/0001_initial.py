from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("camps", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2, "Imię musi mieć minimum 2 znaki")])),
                ("last_name", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2, "Nazwisko musi mieć minimum 2 znaki")])),
                ("pesel", models.CharField(max_length=11, validators=[django.core.validators.RegexValidator("^[0-9]{11}$", "PESEL musi mieć 11 cyfr", code="invalid_pesel")])),
                ("birth_date", models.DateField()),
                ("email", models.EmailField(max_length=254, validators=[django.core.validators.EmailValidator("Wprowadź poprawny adres email", code="invalid_email")])),
                ("phone", models.CharField(max_length=30, validators=[django.core.validators.RegexValidator("^\\+?[0-9\\s-]{9,}$", "Wprowadź poprawny numer telefonu", code="invalid_phone")])),
                ("address", models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(5, "Wprowadź pełny adres")])),
                ("city", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2, "Wprowadź nazwę miasta")])),
                ("postal_code", models.CharField(max_length=6, validators=[django.core.validators.RegexValidator("^[0-9]{2}-[0-9]{3}$", "Wprowadź poprawny kod pocztowy (XX-XXX)", code="invalid_postal_code")])),
                ("zhp_status", models.CharField(blank=True, max_length=100, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("registration_status", models.CharField(choices=[("pending", "Oczekujące"), ("confirmed", "Potwierdzone"), ("cancelled", "Anulowane")], default="pending", max_length=20)),
                ("payment_status", models.CharField(choices=[("pending", "Oczekujące"), ("partial", "Częściowe"), ("completed", "Opłacone"), ("refunded", "Zwrócone")], default="pending", max_length=20)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("camp", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="registrations", to="camps.camp")),
            ],
            options={
                "db_table": "registrations",
                "ordering": ["-created_at", "-pk"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("pesel__regex", "^[0-9]{11}$")), name="registrations_pesel_check", violation_error_code="invalid_pesel"),
                    models.CheckConstraint(condition=models.Q(("postal_code__regex", "^[0-9]{2}-[0-9]{3}$")), name="registrations_postal_code_check", violation_error_code="invalid_postal_code"),
                    models.CheckConstraint(condition=models.Q(("phone__regex", "^\\+?[0-9\\s-]{9,}$")), name="registrations_phone_check", violation_error_code="invalid_phone"),
                    models.UniqueConstraint(fields=("camp", "pesel"), name="registrations_camp_pesel_unique"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RegistrationCard",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file_path", models.CharField(max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("registration", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cards", to="registration.registration")),
                ("uploaded_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "registration_cards",
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("registration", "Zgłoszenie"), ("payment", "Płatność"), ("reminder", "Przypomnienie"), ("confirmation", "Potwierdzenie"), ("custom", "Wiadomość")], max_length=20)),
                ("subject", models.CharField(max_length=255)),
                ("content", models.TextField()),
                ("is_read", models.BooleanField(default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True)),
                ("registration", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="registration.registration")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-sent_at", "-pk"],
            },
        ),
    ]
