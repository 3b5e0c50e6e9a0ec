from decimal import Decimal

from django.conf import settings
from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.db.models import Q

PERMISSION_KEYS = (
    "can_manage_users",
    "can_manage_camps",
    "can_manage_registrations",
    "can_manage_admins",
)


class Camp(models.Model):
    HOTELIK = "hotelik"
    ZLOT = "zlot"
    TURNUS = "turnus"
    TYPE_CHOICES = (
        (HOTELIK, "Hotelik"),
        (ZLOT, "Zlot"),
        (TURNUS, "Turnus"),
    )

    name = models.CharField(
        max_length=200,
        validators=[MinLengthValidator(5, "Nazwa musi mieć minimum 5 znaków")])
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TURNUS)
    location = models.CharField(
        max_length=200,
        default="Przebrno",
        validators=[MinLengthValidator(2, "Lokalizacja musi mieć minimum 2 znaki")])
    start_date = models.DateField()
    end_date = models.DateField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("1"), "Cena musi być większa od 0")])
    capacity = models.PositiveIntegerField(
        validators=[MinValueValidator(1, "Pojemność musi być większa od 0")])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "camps"
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gte=models.F("start_date")),
                name="camps_dates_check",
                violation_error_message=(
                    "Data zakończenia musi być późniejsza niż data rozpoczęcia"),
            ),
            models.CheckConstraint(condition=Q(price__gt=0),
                                   name="camps_price_check"),
            models.CheckConstraint(condition=Q(capacity__gt=0),
                                   name="camps_capacity_check"),
        ]

    def __str__(self):
        return self.name

    @property
    def type_label(self):
        return self.get_type_display()


class CampTypeDescription(models.Model):
    type = models.CharField(max_length=20, choices=Camp.TYPE_CHOICES,
                            primary_key=True)
    label = models.CharField(max_length=100)
    description = models.TextField(blank=True)

    class Meta:
        db_table = "camp_type_descriptions"
        ordering = ["type"]

    def __str__(self):
        return self.label


class DocumentTemplate(models.Model):
    PAYMENT_REMINDER = "payment_reminder"
    REGISTRATION_CARD = "registration_card"
    TYPE_CHOICES = (
        (PAYMENT_REMINDER, "Przypomnienie o płatności"),
        (REGISTRATION_CARD, "Karta zgłoszeniowa"),
    )

    type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    name = models.CharField(max_length=200)
    content = models.TextField()
    is_default = models.BooleanField(default=False)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True,
                                   blank=True, on_delete=models.SET_NULL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "document_templates"
        ordering = ["-is_default", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["type"],
                condition=Q(is_default=True),
                name="document_templates_one_default_per_type",
            ),
        ]

    def __str__(self):
        return self.name


class Admin(models.Model):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    ROLE_CHOICES = (
        (ADMIN, "Administrator"),
        (SUPER_ADMIN, "Superadministrator"),
    )

    user = models.OneToOneField(settings.AUTH_USER_MODEL,
                                on_delete=models.CASCADE,
                                related_name="admin_profile")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ADMIN)
    permissions = models.JSONField(default=dict, blank=True)
    last_login = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "admins"

    def __str__(self):
        return f"{self.user} ({self.role})"

    def resolved_permissions(self):
        if self.role == self.SUPER_ADMIN:
            return {key: True for key in PERMISSION_KEYS}
        stored = self.permissions or {}
        return {key: bool(stored.get(key, False)) for key in PERMISSION_KEYS}


class HomepageSection(models.Model):
    HERO = "hero"
    FEATURES = "features"
    STATS = "stats"
    CAMPS = "camps"
    TYPE_CHOICES = (
        (HERO, "Baner"),
        (FEATURES, "Zalety"),
        (STATS, "Statystyki"),
        (CAMPS, "Obozy"),
    )

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255, null=True, blank=True)
    subtitle = models.CharField(max_length=255, null=True, blank=True)
    content = models.JSONField(default=dict, blank=True)
    order = models.IntegerField(default=0)
    is_visible = models.BooleanField(default=True)

    class Meta:
        db_table = "homepage_sections"
        ordering = ["order", "pk"]

    def __str__(self):
        return self.title or self.get_type_display()

    @property
    def template_name(self):
        return f"public/sections/{self.type}.html"


class HomepageImage(models.Model):
    section = models.ForeignKey(HomepageSection, on_delete=models.CASCADE,
                                related_name="images")
    url = models.CharField(max_length=500)
    alt = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "homepage_images"

    def __str__(self):
        return self.alt or self.url


class AdminAuditLog(models.Model):
    action = models.CharField(max_length=50)
    table_name = models.CharField(max_length=100, null=True, blank=True)
    record_id = models.CharField(max_length=64, null=True, blank=True)
    old_data = models.JSONField(null=True, blank=True)
    new_data = models.JSONField(null=True, blank=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True,
                             on_delete=models.SET_NULL)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "admin_audit_logs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.action} @ {self.created_at}"
