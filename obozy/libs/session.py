"""
Per-request view of who is signed in, plus a channel for sign in/out events.

``SessionContext`` is attached to every request by middleware and resolves the
admin lookup at most once per request. ``auth_events`` is fed from Django's
``user_logged_in`` / ``user_logged_out`` signals; anything interested in auth
state changes subscribes a callable taking ``(event, user, request)``.
"""
import logging

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

_UNRESOLVED = object()


class AuthEvents:
    def __init__(self):
        self._subscribers = []

    def subscribe(self, callback):
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscribers(self):
        return tuple(self._subscribers)

    def publish(self, event, user, request=None):
        for callback in list(self._subscribers):
            try:
                callback(event, user, request)
            except Exception:
                logger.exception("Auth event subscriber %r failed on %s",
                                 callback, event)


auth_events = AuthEvents()


class SessionContext:
    def __init__(self, request):
        self.request = request
        self._admin = _UNRESOLVED

    @property
    def user(self):
        return getattr(self.request, "user", None)

    @property
    def is_authenticated(self):
        return self.user is not None and self.user.is_authenticated

    def _resolve(self):
        if self._admin is _UNRESOLVED:
            from obozy.apps.camps.auth_roles import check_admin_permissions
            self._admin = check_admin_permissions(self.user)
        return self._admin

    @property
    def is_admin(self):
        return self._resolve() is not None

    @property
    def permissions(self):
        return self._resolve()

    def has_permission(self, key):
        permissions = self._resolve()
        return bool(permissions and permissions.get(key))

    def refresh(self):
        self._admin = _UNRESOLVED
