from datetime import timedelta

import pytest
from django.utils import timezone

from obozy.apps.camps.forms import CampForm, LoginForm
from obozy.apps.registration.forms import PaymentForm, RegistrationForm
from obozy.apps.registration.sections import (SECTION_IDS, open_section_ids,
                                              section_states)
from obozy.libs.tests.helpers import make_camp, registration_post_data


def camp_post_data(**overrides):
    start = timezone.localdate() + timedelta(days=7)
    data = {
        "name": "Turnus Lipcowy",
        "type": "turnus",
        "location": "Przebrno",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=10)).isoformat(),
        "price": "1000",
        "capacity": "30",
    }
    data.update(overrides)
    return data


def test_camp_form_messages():
    start = timezone.localdate() + timedelta(days=7)
    form = CampForm(camp_post_data(
        name="Obóz", location="P", type="", price="0", capacity="0",
        end_date=(start - timedelta(days=1)).isoformat()))

    assert not form.is_valid()
    assert form.errors["name"] == ["Nazwa musi mieć minimum 5 znaków"]
    assert form.errors["location"] == ["Lokalizacja musi mieć minimum 2 znaki"]
    assert form.errors["type"] == ["Wybierz typ obozu"]
    assert form.errors["price"] == ["Cena musi być większa od 0"]
    assert form.errors["capacity"] == ["Pojemność musi być większa od 0"]
    assert form.errors["end_date"] == \
        ["Data zakończenia musi być późniejsza niż data rozpoczęcia"]


def test_new_camps_cannot_start_in_the_past():
    yesterday = timezone.localdate() - timedelta(days=1)
    form = CampForm(camp_post_data(start_date=yesterday.isoformat()))
    assert form.errors["start_date"] == \
        ["Data rozpoczęcia musi być w przyszłości"]


@pytest.mark.django_db
def test_running_camps_can_still_be_edited():
    camp = make_camp(start_date=timezone.localdate() - timedelta(days=2))
    form = CampForm(camp_post_data(
        start_date=camp.start_date.isoformat(),
        end_date=camp.end_date.isoformat()), instance=camp)
    assert form.is_valid(), form.errors


def test_camp_form_defaults():
    form = CampForm()
    assert form["type"].initial == "turnus"
    assert form["location"].initial == "Przebrno"


def test_login_form_messages():
    form = LoginForm({"email": "nie-email", "password": ""})
    assert form.errors["email"] == ["Wprowadź poprawny adres email"]
    assert form.errors["password"] == ["Wprowadź hasło"]


def test_payment_form_rejects_zero():
    assert PaymentForm({"amount": "0"}).errors["amount"] == \
        ["Kwota musi być większa od 0"]
    assert PaymentForm({"amount": "12.50"}).is_valid()


@pytest.mark.django_db
class TestRegistrationForm:
    def test_valid_submission(self):
        form = RegistrationForm(registration_post_data(make_camp()))
        assert form.is_valid(), form.errors
        assert form.cleaned_data["zhp_status"] is None

    def test_field_messages(self):
        tomorrow = timezone.localdate() + timedelta(days=1)
        form = RegistrationForm(registration_post_data(
            make_camp(), camp="", first_name="J", last_name="K", pesel="123",
            birth_date=tomorrow.isoformat(), email="jan", phone="12",
            address="ul.", city="G", postal_code="80001"))

        assert form.errors == {
            "camp": ["Wybierz obóz"],
            "first_name": ["Imię musi mieć minimum 2 znaki"],
            "last_name": ["Nazwisko musi mieć minimum 2 znaki"],
            "pesel": ["PESEL musi mieć 11 cyfr"],
            "birth_date": ["Data urodzenia nie może być z przyszłości"],
            "email": ["Wprowadź poprawny adres email"],
            "phone": ["Wprowadź poprawny numer telefonu"],
            "address": ["Wprowadź pełny adres"],
            "city": ["Wprowadź nazwę miasta"],
            "postal_code": ["Wprowadź poprawny kod pocztowy (XX-XXX)"],
        }

    def test_digits_outside_ascii_are_refused(self):
        form = RegistrationForm(registration_post_data(
            make_camp(), pesel="٠١٢٣٤٥٦٧٨٩١", phone="+48 ٦٠٠ ١٠٠ ٢٠٠",
            postal_code="٨٠-٠٠١"))

        assert form.errors == {
            "pesel": ["PESEL musi mieć 11 cyfr"],
            "phone": ["Wprowadź poprawny numer telefonu"],
            "postal_code": ["Wprowadź poprawny kod pocztowy (XX-XXX)"],
        }


def test_only_the_first_section_opens_on_an_empty_form():
    assert open_section_ids({}) == ["camp"]


def test_sections_expand_up_to_the_one_after_the_last_filled():
    assert open_section_ids({"camp": "1"}) == ["camp", "personal"]
    assert open_section_ids({"camp": "1", "email": "a@b.pl"}) == \
        ["camp", "personal", "contact", "address"]
    assert open_section_ids({"notes": "wegetarianin"}) == list(SECTION_IDS)


def test_toggling_and_errors():
    assert open_section_ids({"camp": "1"}, toggled=["personal"]) == ["camp"]
    assert open_section_ids({}, toggled=["additional"]) == \
        ["camp", "additional"]
    assert open_section_ids({}, error_fields=["postal_code"]) == \
        ["camp", "address"]


@pytest.mark.django_db
def test_section_states_flag_errors():
    form = RegistrationForm(registration_post_data(make_camp(), pesel="123"))
    form.is_valid()
    states = {state.section.id: state for state in section_states(form)}

    assert states["personal"].has_errors
    assert states["personal"].is_open
    assert not states["camp"].has_errors
    assert [state.number for state in states.values()] == [1, 2, 3, 4, 5]
    assert [field.name for field in states["contact"].fields] == \
        ["email", "phone"]
