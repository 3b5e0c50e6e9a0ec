"""Error logging and health checks backed by the admin audit log."""
import logging
import time

from django.contrib.auth import SESSION_KEY
from django.db import DatabaseError, transaction

from obozy.apps.camps.models import Admin, AdminAuditLog

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "error"


def _audit(action, new_data, table_name=None, user=None):
    try:
        with transaction.atomic():
            AdminAuditLog.objects.create(
                action=action,
                table_name=table_name,
                new_data=new_data,
                user=user if user is not None and user.is_authenticated else None,
            )
    except DatabaseError:
        logger.exception("Failed to record '%s' in the audit log", action)


def log_error(error_type, message, metadata=None, user=None):
    logger.error("%s: %s %s", error_type, message, metadata or {})
    user_id = user.pk if user is not None and user.is_authenticated else None
    _audit("error", {
        "type": error_type,
        "message": message,
        "metadata": metadata or {},
        "user_id": user_id,
    }, table_name="errors", user=user)


def monitor_database_health():
    start = time.perf_counter()
    error = None
    try:
        Admin.objects.exists()
    except DatabaseError as e:
        error = str(e)
    latency = (time.perf_counter() - start) * 1000

    report = {
        "status": UNHEALTHY if error else HEALTHY,
        "latency": round(latency, 2),
        "error": error,
    }
    if error:
        logger.warning("Database health check failed: %s", error)
    _audit("health_check", report)
    return report


def monitor_auth_health(request):
    error = None
    has_session = False
    try:
        has_session = SESSION_KEY in request.session
    except (AttributeError, DatabaseError) as e:
        error = str(e)

    report = {
        "status": UNHEALTHY if error else HEALTHY,
        "has_session": has_session,
        "error": error,
    }
    _audit("auth_health_check", report)
    return report
