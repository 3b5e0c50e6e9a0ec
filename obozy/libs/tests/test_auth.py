from unittest.mock import patch

import pytest
from django.contrib.auth.models import AnonymousUser
from django.db import OperationalError

from obozy.apps.camps import auth_roles
from obozy.apps.camps.models import Admin
from obozy.libs.errors import ErrorKind
from obozy.libs.session import (SIGNED_IN, SIGNED_OUT, AuthEvents,
                                SessionContext, auth_events)
from obozy.libs.tests.helpers import (PASSWORD, flashed, make_admin,
                                      make_request, make_user)


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event, user, request):
        self.events.append((event, user))


def test_subscribers_receive_events_until_unsubscribed():
    events = AuthEvents()
    recorder = events.subscribe(Recorder())

    events.publish(SIGNED_IN, "ola")
    events.unsubscribe(recorder)
    events.publish(SIGNED_OUT, "ola")

    assert recorder.events == [(SIGNED_IN, "ola")]
    assert events.subscribers == ()


def test_a_failing_subscriber_does_not_stop_the_others():
    events = AuthEvents()

    def broken(event, user, request):
        raise RuntimeError("boom")

    events.subscribe(broken)
    recorder = events.subscribe(Recorder())
    events.publish(SIGNED_IN, "ola")

    assert recorder.events == [(SIGNED_IN, "ola")]


@pytest.mark.django_db
class TestAdminLookup:
    def test_users_without_an_admin_row_are_not_admins(self):
        user = make_user("harcerz@example.com")
        assert not auth_roles.is_admin(user)
        assert auth_roles.check_admin_permissions(user) is None
        assert not auth_roles.is_admin(AnonymousUser())
        assert not auth_roles.is_admin(None)

    def test_permissions_follow_role_and_stored_flags(self):
        admin = make_admin("druh@example.com",
                           permissions={"can_manage_camps": True})
        boss = make_admin("komendant@example.com", role=Admin.SUPER_ADMIN)

        assert auth_roles.has_permission(admin, "can_manage_camps")
        assert not auth_roles.has_permission(admin, "can_manage_users")
        assert all(auth_roles.check_admin_permissions(boss).values())

    def test_admin_changes_are_picked_up(self):
        user = make_user("nowy@example.com")
        assert not auth_roles.is_admin(user)

        Admin.objects.create(user=user)
        assert auth_roles.is_admin(user)

        Admin.objects.filter(user=user).delete()
        assert not auth_roles.is_admin(user)

    def test_lookup_failures_fail_closed(self):
        user = make_admin("druh@example.com")
        with patch.object(auth_roles, "admin_lookup",
                          side_effect=OperationalError("down")):
            assert not auth_roles.is_admin(user)
            assert auth_roles.check_admin_permissions(user) is None

    def test_session_context_resolves_once(self):
        request = make_request(user=make_admin("druh@example.com"))
        context = SessionContext(request)
        with patch("obozy.apps.camps.auth_roles.admin_lookup",
                   wraps=auth_roles.admin_lookup) as lookup:
            assert context.is_admin
            assert context.has_permission("can_manage_camps") is False
            assert lookup.call_count == 1
            context.refresh()
            assert context.is_admin
            assert lookup.call_count == 2


@pytest.mark.django_db
class TestSignIn:
    def test_sign_in_by_email(self):
        admin = make_admin("druh@example.com")
        request = make_request()

        result = auth_roles.sign_in(request, " Druh@Example.com ", PASSWORD)

        assert result.error is None
        assert result.data == admin
        assert request.user == admin
        admin.admin_profile.refresh_from_db()
        assert admin.admin_profile.last_login is not None

    def test_wrong_password(self):
        make_admin("druh@example.com")
        request = make_request()

        result = auth_roles.sign_in(request, "druh@example.com", "zle")

        assert result.error.kind is ErrorKind.INVALID_CREDENTIALS
        assert flashed(request) == ["Nieprawidłowy email lub hasło"]

    def test_unknown_email(self):
        result = auth_roles.sign_in(make_request(), "nikt@example.com",
                                    PASSWORD)
        assert result.error.kind is ErrorKind.INVALID_CREDENTIALS

    def test_inactive_account_is_unconfirmed(self):
        make_user("nowy@example.com", is_active=False)
        result = auth_roles.sign_in(make_request(), "nowy@example.com",
                                    PASSWORD)
        assert result.error.kind is ErrorKind.EMAIL_NOT_CONFIRMED

    def test_database_outage_is_a_network_error(self):
        with patch.object(auth_roles, "authenticate",
                          side_effect=OperationalError("down")):
            result = auth_roles.sign_in(make_request(), "druh@example.com",
                                        PASSWORD)
        assert result.error.kind is ErrorKind.NETWORK

    def test_sign_in_and_out_are_published(self):
        recorder = auth_events.subscribe(Recorder())
        try:
            admin = make_admin("druh@example.com")
            request = make_request()
            auth_roles.sign_in(request, "druh@example.com", PASSWORD)
            auth_roles.sign_out(request)
        finally:
            auth_events.unsubscribe(recorder)

        assert recorder.events == [(SIGNED_IN, admin), (SIGNED_OUT, admin)]
