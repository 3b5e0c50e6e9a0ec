from decimal import Decimal

from django.conf import settings
from django.core.validators import (EmailValidator, MinLengthValidator,
                                    MinValueValidator, RegexValidator)
from django.db import models
from django.db.models import Q

from obozy.apps.camps.models import Camp

PESEL_REGEX = r"^[0-9]{11}$"
POSTAL_CODE_REGEX = r"^[0-9]{2}-[0-9]{3}$"
PHONE_REGEX = r"^\+?[0-9\s-]{9,}$"


class Registration(models.Model):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REGISTRATION_STATUS_CHOICES = (
        (PENDING, "Oczekujące"),
        (CONFIRMED, "Potwierdzone"),
        (CANCELLED, "Anulowane"),
    )

    PAYMENT_PENDING = "pending"
    PAYMENT_PARTIAL = "partial"
    PAYMENT_COMPLETED = "completed"
    PAYMENT_REFUNDED = "refunded"
    PAYMENT_STATUS_CHOICES = (
        (PAYMENT_PENDING, "Oczekujące"),
        (PAYMENT_PARTIAL, "Częściowe"),
        (PAYMENT_COMPLETED, "Opłacone"),
        (PAYMENT_REFUNDED, "Zwrócone"),
    )

    camp = models.ForeignKey(Camp, on_delete=models.CASCADE,
                             related_name="registrations")
    first_name = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(2, "Imię musi mieć minimum 2 znaki")])
    last_name = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(2, "Nazwisko musi mieć minimum 2 znaki")])
    pesel = models.CharField(
        max_length=11,
        validators=[RegexValidator(PESEL_REGEX, "PESEL musi mieć 11 cyfr",
                                   code="invalid_pesel")])
    birth_date = models.DateField()
    email = models.EmailField(
        max_length=254,
        validators=[EmailValidator("Wprowadź poprawny adres email",
                                   code="invalid_email")])
    phone = models.CharField(
        max_length=30,
        validators=[RegexValidator(PHONE_REGEX,
                                   "Wprowadź poprawny numer telefonu",
                                   code="invalid_phone")])
    address = models.CharField(
        max_length=255,
        validators=[MinLengthValidator(5, "Wprowadź pełny adres")])
    city = models.CharField(
        max_length=100,
        validators=[MinLengthValidator(2, "Wprowadź nazwę miasta")])
    postal_code = models.CharField(
        max_length=6,
        validators=[RegexValidator(POSTAL_CODE_REGEX,
                                   "Wprowadź poprawny kod pocztowy (XX-XXX)",
                                   code="invalid_postal_code")])
    zhp_status = models.CharField(max_length=100, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    registration_status = models.CharField(
        max_length=20, choices=REGISTRATION_STATUS_CHOICES, default=PENDING)
    payment_status = models.CharField(
        max_length=20, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING)
    paid_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "registrations"
        ordering = ["-created_at", "-pk"]
        constraints = [
            models.CheckConstraint(
                condition=Q(pesel__regex=PESEL_REGEX),
                name="registrations_pesel_check",
                violation_error_code="invalid_pesel",
            ),
            models.CheckConstraint(
                condition=Q(postal_code__regex=POSTAL_CODE_REGEX),
                name="registrations_postal_code_check",
                violation_error_code="invalid_postal_code",
            ),
            models.CheckConstraint(
                condition=Q(phone__regex=PHONE_REGEX),
                name="registrations_phone_check",
                violation_error_code="invalid_phone",
            ),
            models.UniqueConstraint(
                fields=["camp", "pesel"],
                name="registrations_camp_pesel_unique",
            ),
        ]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def full_address(self):
        return f"{self.address}, {self.postal_code} {self.city}"

    @property
    def note_entries(self):
        if not self.notes:
            return []
        return [note for note in self.notes.split("\n") if note.strip()]


class RegistrationCard(models.Model):
    registration = models.ForeignKey(Registration, on_delete=models.CASCADE,
                                     related_name="cards")
    file_path = models.CharField(max_length=500)
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True,
                                    blank=True, on_delete=models.SET_NULL)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "registration_cards"

    def __str__(self):
        return self.file_path


class Notification(models.Model):
    REGISTRATION = "registration"
    PAYMENT = "payment"
    REMINDER = "reminder"
    CONFIRMATION = "confirmation"
    CUSTOM = "custom"
    TYPE_CHOICES = (
        (REGISTRATION, "Zgłoszenie"),
        (PAYMENT, "Płatność"),
        (REMINDER, "Przypomnienie"),
        (CONFIRMATION, "Potwierdzenie"),
        (CUSTOM, "Wiadomość"),
    )

    registration = models.ForeignKey(Registration, null=True,
                                     blank=True, on_delete=models.CASCADE,
                                     related_name="notifications")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True,
                             on_delete=models.CASCADE)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    subject = models.CharField(max_length=255)
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-sent_at", "-pk"]

    def __str__(self):
        return self.subject
