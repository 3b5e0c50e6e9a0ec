import logging

from django.contrib import messages
from django.db import DatabaseError, transaction
from django.utils import timezone

from obozy.apps.registration.models import Notification

logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"

SEVERITY_LEVELS = {
    INFO: messages.INFO,
    SUCCESS: messages.SUCCESS,
    WARNING: messages.WARNING,
    ERROR: messages.ERROR,
}


def _request_user(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None


def flash(request, message, severity=INFO):
    if request is None:
        return
    messages.add_message(request, SEVERITY_LEVELS.get(severity, messages.INFO),
                         message)


def create_notification(title, message, severity=INFO, request=None):
    """
    Store a system notification and show it to the current user as a flash

    The row is always of the ``custom`` type and belongs to the signed in user
    when there is one. A failing insert is logged and the flash still shows.
    """
    try:
        with transaction.atomic():
            Notification.objects.create(
                type=Notification.CUSTOM,
                subject=title,
                content=message,
                user=_request_user(request),
            )
    except DatabaseError:
        logger.exception("Failed to create notification '%s'", title)
    flash(request, message, severity)


def mark_notification_as_read(notification_id):
    try:
        updated = Notification.objects.filter(pk=notification_id).update(
            is_read=True, read_at=timezone.now())
    except DatabaseError:
        logger.exception("Failed to mark notification %s as read",
                         notification_id)
        return False
    return bool(updated)


def get_unread_notifications(user):
    if user is None or not user.is_authenticated:
        return []
    try:
        return list(Notification.objects.filter(user=user, is_read=False))
    except DatabaseError:
        logger.exception("Failed to fetch notifications for %s", user)
        return []
