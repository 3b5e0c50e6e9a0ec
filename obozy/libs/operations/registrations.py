from collections import namedtuple
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction
from django.utils import timezone

from obozy.apps.camps.models import Camp
from obozy.apps.registration.models import (Notification, Registration,
                                            RegistrationCard)
from obozy.libs.cacheing.query_cache import (ALL, NOTIFICATIONS,
                                             REGISTRATION_CARDS, REGISTRATIONS,
                                             STATS, QueryKey, cached_query)
from obozy.libs.data_export.registrations_export import (
    export_filename, export_registrations_df)
from obozy.libs.errors import ErrorKind, NotFoundError
from obozy.libs.notifications import SUCCESS, WARNING, create_notification
from obozy.libs.operations.base import fail, operation, request_user
from obozy.libs.payments import format_amount
from obozy.libs.storage import REGISTRATION_CARDS_BUCKET, get_storage
from obozy.libs.templating import NO_ZHP_STATUS, format_date, format_datetime

REGISTRATION_FIELDS = ("camp", "first_name", "last_name", "pesel",
                       "birth_date", "email", "phone", "address", "city",
                       "postal_code", "zhp_status", "notes")
ADMIN_EDITABLE_FIELDS = REGISTRATION_FIELDS + ("registration_status",
                                               "payment_status")

Export = namedtuple("Export", ["filename", "df"])


def _ensure_unique(registration):
    duplicates = Registration.objects.filter(camp_id=registration.camp_id,
                                             pesel=registration.pesel)
    if registration.pk:
        duplicates = duplicates.exclude(pk=registration.pk)
    if duplicates.exists():
        fail(ErrorKind.DUPLICATE_REGISTRATION)


def _save(registration):
    _ensure_unique(registration)
    registration.full_clean(validate_constraints=False)
    try:
        with transaction.atomic():
            registration.save()
    except IntegrityError:
        # lost a race with a concurrent submission of the same participant
        if Registration.objects.filter(camp_id=registration.camp_id,
                                       pesel=registration.pesel).exists():
            fail(ErrorKind.DUPLICATE_REGISTRATION)
        raise
    return registration


def _camp_filter(camp_id):
    if camp_id in (None, "", ALL):
        return None
    return int(camp_id)


@operation("create_registration", table="registrations",
           invalidates=(REGISTRATIONS, STATS, NOTIFICATIONS))
def create_registration(data, request=None):
    registration = Registration(
        registration_status=Registration.PENDING,
        payment_status=Registration.PAYMENT_PENDING,
    )
    for field in REGISTRATION_FIELDS:
        if field in data:
            setattr(registration, field, data[field])
    _save(registration)

    Notification.objects.create(
        registration=registration,
        type=Notification.REGISTRATION,
        subject="Potwierdzenie zgłoszenia",
        content=(f"Dziękujemy za zgłoszenie na obóz "
                 f"\"{registration.camp.name}\". "
                 f"Skontaktujemy się z Tobą wkrótce."),
    )
    create_notification(
        "Nowe zgłoszenie",
        "Zgłoszenie zostało wysłane pomyślnie! Sprawdź swoją skrzynkę email.",
        SUCCESS, request=request)
    return registration


@operation("get_registrations", mutates=False)
def get_registrations(camp_id=None, request=None):
    camp_id = _camp_filter(camp_id)

    def load():
        registrations = Registration.objects.select_related("camp")
        if camp_id is not None:
            registrations = registrations.filter(camp_id=camp_id)
        return list(registrations.order_by("-created_at", "-pk"))

    return cached_query(QueryKey(REGISTRATIONS, camp_id or ALL), load)


@operation("update_registration", table="registrations",
           invalidates=(REGISTRATIONS, STATS))
def update_registration(registration_id, data, request=None):
    registration = Registration.objects.select_related("camp").get(
        pk=registration_id)
    for field in ADMIN_EDITABLE_FIELDS:
        if field in data:
            setattr(registration, field, data[field])
    _save(registration)
    create_notification(
        "Aktualizacja zgłoszenia",
        f"Zaktualizowano zgłoszenie: {registration.full_name}",
        SUCCESS, request=request)
    return registration


@operation("delete_registration", table="registrations",
           invalidates=(REGISTRATIONS, REGISTRATION_CARDS, STATS,
                        NOTIFICATIONS))
def delete_registration(registration_id, request=None):
    registration = Registration.objects.get(pk=registration_id)
    full_name = registration.full_name
    registration.delete()
    create_notification("Usunięcie zgłoszenia",
                        f"Usunięto zgłoszenie: {full_name}",
                        WARNING, request=request)
    return registration_id


@operation("exclude_registration", table="registrations",
           invalidates=(REGISTRATIONS, STATS, NOTIFICATIONS))
def exclude_registration(registration_id, reason, request=None):
    registration = Registration.objects.get(pk=registration_id)
    registration.registration_status = Registration.CANCELLED
    # exclusion overwrites earlier notes, see add_registration_note
    registration.notes = f"Wykluczono: {reason}"
    registration.save(update_fields=["registration_status", "notes",
                                     "updated_at"])

    Notification.objects.create(
        registration=registration,
        type=Notification.CONFIRMATION,
        subject="Wykluczenie z obozu",
        content=f"Twoje zgłoszenie zostało anulowane. Powód: {reason}",
    )
    create_notification("Wykluczono uczestnika",
                        "Uczestnik został wykluczony z obozu",
                        WARNING, request=request)
    return registration


@operation("add_registration_note", table="registrations",
           invalidates=(REGISTRATIONS,))
def add_registration_note(registration_id, note, request=None):
    registration = Registration.objects.select_for_update().get(
        pk=registration_id)
    timestamp = format_datetime(timezone.localtime())
    registration.notes = f"{timestamp}: {note}\n{registration.notes or ''}"
    registration.save(update_fields=["notes", "updated_at"])
    create_notification("Dodano notatkę", "Notatka została dodana pomyślnie",
                        SUCCESS, request=request)
    return registration


@operation("register_payment", table="registrations",
           invalidates=(REGISTRATIONS, STATS))
def register_payment(registration_id, amount, request=None):
    try:
        amount = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        fail(ErrorKind.VALIDATION, "Wprowadź poprawną kwotę")
    if not amount.is_finite() or amount <= 0:
        fail(ErrorKind.VALIDATION, "Kwota musi być większa od 0")

    registration = Registration.objects.select_for_update().get(
        pk=registration_id)
    registration.paid_amount = (registration.paid_amount or 0) + amount
    registration.save(update_fields=["paid_amount", "updated_at"])
    create_notification("Płatność", "Płatność została zarejestrowana",
                        SUCCESS, request=request)
    return registration


@operation("send_payment_reminder", table="notifications",
           invalidates=(NOTIFICATIONS,))
def send_payment_reminder(registration_id, request=None):
    registration = Registration.objects.select_related("camp").get(
        pk=registration_id)
    camp = registration.camp
    reminder = Notification.objects.create(
        registration=registration,
        type=Notification.PAYMENT,
        subject="Przypomnienie o płatności",
        content=(f"Przypominamy o konieczności dokonania płatności za obóz "
                 f"\"{camp.name}\". Prosimy o uregulowanie należności "
                 f"w wysokości {format_amount(camp.price)} PLN."),
    )
    create_notification(
        "Wysłano przypomnienie",
        f"Wysłano przypomnienie o płatności do {registration.full_name}",
        SUCCESS, request=request)
    return reminder


@operation("send_custom_email", table="notifications",
           invalidates=(NOTIFICATIONS,))
def send_custom_email(registration_id, subject, content, request=None):
    registration = Registration.objects.get(pk=registration_id)
    message = Notification.objects.create(
        registration=registration,
        type=Notification.CUSTOM,
        subject=subject,
        content=content,
    )
    create_notification("Wysłano wiadomość",
                        "Wiadomość została wysłana pomyślnie",
                        SUCCESS, request=request)
    return message


@operation("export_registrations", mutates=False)
def export_registrations(camp_id=None, request=None):
    camp_id = _camp_filter(camp_id)
    camp = Camp.objects.get(pk=camp_id) if camp_id is not None else None
    registrations = Registration.objects.select_related("camp").order_by(
        "-created_at", "-pk")
    if camp is not None:
        registrations = registrations.filter(camp=camp)
    return Export(export_filename(camp), export_registrations_df(registrations))


@operation("generate_registration_card", mutates=False)
def generate_registration_card(registration_id, request=None):
    registration = Registration.objects.select_related("camp").get(
        pk=registration_id)
    camp = registration.camp
    return {
        "participant": {
            "name": registration.full_name,
            "pesel": registration.pesel,
            "birth_date": format_date(registration.birth_date),
            "email": registration.email,
            "phone": registration.phone,
            "address": registration.full_address,
            "zhp_status": registration.zhp_status or NO_ZHP_STATUS,
        },
        "camp": {
            "name": camp.name,
            "dates": f"{format_date(camp.start_date)} - "
                     f"{format_date(camp.end_date)}",
            "price": f"{format_amount(camp.price)} PLN",
        },
        "status": {
            "registration": registration.registration_status,
            "payment": registration.payment_status,
        },
    }


@operation("upload_registration_card", table="registration_cards",
           invalidates=(REGISTRATION_CARDS,))
def upload_registration_card(registration_id, uploaded_file, request=None):
    registration = Registration.objects.get(pk=registration_id)
    path = f"{registration.pk}/{uploaded_file.name}"
    get_storage(REGISTRATION_CARDS_BUCKET).upload(path, uploaded_file.read())

    card = RegistrationCard.objects.create(
        registration=registration,
        file_path=path,
        uploaded_by=request_user(request),
    )
    create_notification("Dodano kartę zgłoszeniową",
                        "Karta zgłoszeniowa została pomyślnie dodana",
                        SUCCESS, request=request)
    return card


def _latest_card(registration_id):
    return RegistrationCard.objects.filter(
        registration_id=registration_id).order_by("-created_at", "-pk").first()


@operation("get_registration_card", mutates=False)
def get_registration_card(registration_id, request=None):
    def load():
        card = _latest_card(registration_id)
        if card is None:
            return ""
        return get_storage(REGISTRATION_CARDS_BUCKET).public_url(card.file_path)

    url = cached_query(QueryKey(REGISTRATION_CARDS, int(registration_id)), load)
    return url or None


@operation("delete_registration_card", table="registration_cards",
           invalidates=(REGISTRATION_CARDS,))
def delete_registration_card(registration_id, request=None):
    cards = RegistrationCard.objects.filter(registration_id=registration_id)
    card = _latest_card(registration_id)
    if card is None:
        raise NotFoundError("Nie znaleziono karty zgłoszeniowej")

    get_storage(REGISTRATION_CARDS_BUCKET).remove(
        sorted({stored.file_path for stored in cards}))
    cards.delete()
    create_notification("Usunięto kartę zgłoszeniową",
                        "Karta zgłoszeniowa została pomyślnie usunięta",
                        WARNING, request=request)
    return card
