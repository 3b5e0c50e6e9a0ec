from io import BytesIO

import pandas as pd
from django.utils import timezone
from django.utils.text import slugify

from obozy.libs.payments import format_amount, payment_state
from obozy.libs.templating import (NO_ZHP_STATUS, format_date,
                                   format_datetime)

SHEET_NAME = "Zgłoszenia"
XLSX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

COLUMNS = (
    "Imię",
    "Nazwisko",
    "PESEL",
    "Data urodzenia",
    "Email",
    "Telefon",
    "Adres",
    "Miasto",
    "Kod pocztowy",
    "Status ZHP",
    "Obóz",
    "Data rozpoczęcia",
    "Data zakończenia",
    "Cena",
    "Status zgłoszenia",
    "Status płatności",
    "Data zgłoszenia",
    "Uwagi",
)


def registration_row(registration):
    camp = registration.camp
    return {
        "Imię": registration.first_name,
        "Nazwisko": registration.last_name,
        "PESEL": registration.pesel,
        "Data urodzenia": format_date(registration.birth_date),
        "Email": registration.email,
        "Telefon": registration.phone,
        "Adres": registration.address,
        "Miasto": registration.city,
        "Kod pocztowy": registration.postal_code,
        "Status ZHP": registration.zhp_status or NO_ZHP_STATUS,
        "Obóz": camp.name,
        "Data rozpoczęcia": format_date(camp.start_date),
        "Data zakończenia": format_date(camp.end_date),
        "Cena": f"{format_amount(camp.price)} PLN",
        "Status zgłoszenia": registration.get_registration_status_display(),
        "Status płatności": payment_state(registration.paid_amount,
                                          camp.price).text,
        "Data zgłoszenia": format_datetime(
            timezone.localtime(registration.created_at)),
        "Uwagi": registration.notes or "",
    }


def export_registrations_df(registrations):
    """One row per registration, columns always in the same order"""
    rows = [registration_row(registration) for registration in registrations]
    return pd.DataFrame(rows, columns=list(COLUMNS))


# letters NFKD does not decompose into an ASCII base
POLISH_LETTERS = str.maketrans({"ł": "l", "Ł": "L"})


def camp_label(camp):
    return slugify(camp.name.translate(POLISH_LETTERS)) or f"camp-{camp.pk}"


def export_filename(camp=None, today=None):
    today = today or timezone.localdate()
    label = camp_label(camp) if camp is not None else "all"
    return f"registrations_{label}_{today.isoformat()}.xlsx"


def to_xlsx(df):
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return output.getvalue()
