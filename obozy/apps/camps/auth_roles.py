"""
Who is allowed into the admin panel.

A user is an administrator when an ``Admin`` row points at them. Lookups are
cached per user under ``QueryKey(ADMINS, user_pk)`` and every check fails
closed: an error while reading the admin table means "not an admin".
"""
import logging

from django.contrib.auth import authenticate, login, logout
from django.db import (DatabaseError, InterfaceError, OperationalError,
                       ProgrammingError)
from django.utils import timezone

from obozy.apps.camps.auth_backends import find_user_by_email
from obozy.apps.camps.models import Admin
from obozy.libs import errors
from obozy.libs.cacheing.query_cache import (ADMINS, QueryKey, cached_query,
                                             invalidate)
from obozy.libs.errors import ErrorKind, OperationError
from obozy.libs.notifications import ERROR, flash
from obozy.libs.operations.base import Result
from obozy.libs.session import SIGNED_IN

logger = logging.getLogger(__name__)

NO_PERMISSION_MESSAGE = "Brak uprawnień administratora"


def _load_admin(user_id):
    admin = Admin.objects.filter(user_id=user_id).first()
    if admin is None:
        # cached as False, None would read as a cache miss
        return False
    return {"role": admin.role, "permissions": admin.resolved_permissions()}


def admin_lookup(user):
    if user is None or not user.is_authenticated:
        return None
    return cached_query(QueryKey(ADMINS, user.pk), _load_admin, user.pk) or None


def is_admin(user):
    try:
        return admin_lookup(user) is not None
    except DatabaseError:
        logger.exception("Error checking admin status of %s", user)
        return False


def check_admin_permissions(user):
    try:
        found = admin_lookup(user)
    except DatabaseError:
        logger.exception("Error checking admin permissions of %s", user)
        return None
    if found is None:
        return None
    return dict(found["permissions"])


def has_permission(user, key):
    permissions = check_admin_permissions(user)
    return bool(permissions and permissions.get(key))


def _sign_in_error(exc):
    if isinstance(exc, (OperationalError, InterfaceError)):
        return OperationError(ErrorKind.NETWORK)
    if isinstance(exc, ProgrammingError):
        return OperationError(ErrorKind.SCHEMA)
    return OperationError(ErrorKind.UNKNOWN)


def sign_in(request, email, password):
    email = (email or "").strip()
    password = (password or "").strip()
    try:
        user = authenticate(request, username=email, password=password)
        if user is None:
            candidate = find_user_by_email(email)
            if (candidate is not None and not candidate.is_active
                    and candidate.check_password(password)):
                error = OperationError(ErrorKind.EMAIL_NOT_CONFIRMED)
            else:
                error = OperationError(ErrorKind.INVALID_CREDENTIALS)
            logger.info("Rejected sign in for %s: %s", email, error.kind.name)
            flash(request, error.msg, ERROR)
            return Result(None, error)
        login(request, user)
    except Exception as e:
        errors.emit_current_exception()
        error = _sign_in_error(e)
        logger.warning("Sign in for %s failed: %s", email, error.kind.name)
        flash(request, error.msg, ERROR)
        return Result(None, error)
    return Result(user, None)


def sign_out(request):
    logout(request)


def forget_admin_lookup(event, user, request):
    invalidate(ADMINS)
    context = getattr(request, "session_context", None)
    if context is not None:
        context.refresh()


def stamp_admin_last_login(event, user, request):
    if event == SIGNED_IN and user is not None:
        Admin.objects.filter(user=user).update(last_login=timezone.now())
