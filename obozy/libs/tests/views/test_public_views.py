import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from obozy.apps.camps.models import Camp, HomepageSection
from obozy.apps.camps.views.public_views import filter_camps
from obozy.apps.registration.models import Registration
from obozy.libs.tests.helpers import (make_camp, make_registration,
                                      registration_post_data)


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.mark.django_db
class TestPublicHome:
    def test_home_lists_visible_sections_and_camps(self, client):
        HomepageSection.objects.create(type=HomepageSection.HERO,
                                       title="Witaj w Przebrnie")
        HomepageSection.objects.create(type=HomepageSection.FEATURES,
                                       title="Ukryta sekcja", is_visible=False)
        make_camp(name="Turnus Lipcowy")

        response = client.get(reverse("public_home"))

        assert response.status_code == 200
        content = response.content.decode()
        assert "Witaj w Przebrnie" in content
        assert "Ukryta sekcja" not in content
        assert "Turnus Lipcowy" in content

    def test_search_and_type_filter(self, client):
        make_camp(name="Hotelik Majowy", type=Camp.HOTELIK)
        make_camp(name="Zlot Jesienny", type=Camp.ZLOT, location="Gdańsk")

        response = client.get(reverse("public_home"),
                              {"q": "gdańsk", "type": "all"})
        assert [c.name for c in response.context["camps"]] == ["Zlot Jesienny"]

        response = client.get(reverse("public_home"), {"type": "hotelik"})
        assert [c.name for c in response.context["camps"]] == ["Hotelik Majowy"]
        assert response.context["camp_count"] == 2


def test_filter_camps_ignores_unknown_types():
    camps = [Camp(name="Zlot", type=Camp.ZLOT, location="Przebrno")]
    assert filter_camps(camps, camp_type="wakacje") == camps
    assert filter_camps(camps, search="  PRZEBRNO ") == camps
    assert filter_camps(camps, search="Gdynia") == []


@pytest.mark.django_db
class TestRegistrationPortal:
    def test_camp_is_preselected(self, client):
        camp = make_camp()
        response = client.get(reverse("registration_portal"),
                              {"camp": camp.pk})

        assert response.status_code == 200
        assert response.context["form"]["camp"].value() == camp.pk
        open_sections = [state.section.id for state in
                         response.context["sections"] if state.is_open]
        assert open_sections == ["camp"]

    def test_successful_registration(self, client):
        camp = make_camp()
        response = client.post(reverse("registration_portal"),
                               registration_post_data(camp))

        assert response.status_code == 302
        assert response.url == reverse("public_home")
        registration = Registration.objects.get()
        assert registration.camp == camp
        assert registration.registration_status == Registration.PENDING
        assert messages_of(response) == [
            "Zgłoszenie zostało wysłane pomyślnie! Sprawdź swoją skrzynkę email."]

    def test_short_pesel_shows_inline_error(self, client):
        camp = make_camp()
        response = client.post(reverse("registration_portal"),
                               registration_post_data(camp, pesel="123"))

        assert response.status_code == 200
        assert response.context["form"].errors["pesel"] == \
            ["PESEL musi mieć 11 cyfr"]
        assert "PESEL musi mieć 11 cyfr" in response.content.decode()
        assert not Registration.objects.exists()

    def test_duplicate_registration(self, client):
        camp = make_camp()
        make_registration(camp)

        response = client.post(reverse("registration_portal"),
                               registration_post_data(camp))

        duplicate = "Już istnieje zgłoszenie dla tego uczestnika na ten obóz"
        assert response.status_code == 200
        assert response.context["form"].non_field_errors() == [duplicate]
        assert Registration.objects.count() == 1
