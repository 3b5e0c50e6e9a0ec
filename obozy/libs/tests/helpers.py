from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.contrib.messages.storage.fallback import FallbackStorage
from django.contrib.sessions.backends.cache import SessionStore
from django.test import RequestFactory
from django.utils import timezone

from obozy.apps.camps.models import Admin, Camp
from obozy.apps.registration.models import Registration

PASSWORD = "haslo-123"


def make_camp(**overrides):
    start = timezone.localdate() + timedelta(days=30)
    fields = {
        "name": "Obóz Letni Przebrno",
        "type": Camp.TURNUS,
        "location": "Przebrno",
        "start_date": start,
        "end_date": start + timedelta(days=14),
        "price": Decimal("1000.00"),
        "capacity": 40,
    }
    fields.update(overrides)
    return Camp.objects.create(**fields)


def registration_data(camp, **overrides):
    data = {
        "camp": camp,
        "first_name": "Jan",
        "last_name": "Kowalski",
        "pesel": "08271512345",
        "birth_date": date(2008, 7, 15),
        "email": "jan.kowalski@example.com",
        "phone": "+48 600 100 200",
        "address": "ul. Harcerska 12",
        "city": "Gdańsk",
        "postal_code": "80-001",
        "zhp_status": None,
        "notes": None,
    }
    data.update(overrides)
    return data


def registration_post_data(camp, /, **overrides):
    data = registration_data(camp, zhp_status="", notes="")
    data["camp"] = str(camp.pk)
    data["birth_date"] = data["birth_date"].isoformat()
    data.update(overrides)
    return data


def make_registration(camp, **overrides):
    return Registration.objects.create(**registration_data(camp, **overrides))


def make_user(email, password=PASSWORD, **kwargs):
    return get_user_model().objects.create_user(email, email, password,
                                                **kwargs)


def make_admin(email, role=Admin.ADMIN, permissions=None, password=PASSWORD):
    user = make_user(email, password)
    Admin.objects.create(user=user, role=role, permissions=permissions or {})
    return user


def make_request(path="/", user=None, method="get"):
    """A request carrying a session and message storage, as middleware would"""
    request = getattr(RequestFactory(), method)(path)
    request.session = SessionStore()
    request._messages = FallbackStorage(request)
    request.user = user if user is not None else AnonymousUser()
    return request


def flashed(request):
    return [str(message) for message in request._messages]
