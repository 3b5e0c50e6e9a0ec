"""
Shared plumbing for the domain operations.

Every operation is a plain function decorated with ``operation``. The decorated
function runs inside a transaction and returns its data; the wrapper turns that
into a ``Result`` and guarantees nothing escapes:

* on success the declared cache entities are invalidated and the mutation is
  written to the audit log,
* on failure the exception is classified into an ``OperationError``, logged,
  reported, written to the audit log as an ``error`` and flashed to the user.
"""
import logging
from collections import namedtuple
from functools import wraps

from django.db import DatabaseError, transaction

from obozy.apps.camps.models import AdminAuditLog
from obozy.libs import errors
from obozy.libs.cacheing import query_cache
from obozy.libs.errors import ErrorKind, OperationError, classify_exception
from obozy.libs.monitoring import log_error
from obozy.libs.notifications import ERROR, flash

logger = logging.getLogger(__name__)

Result = namedtuple("Result", ["data", "error"])

# Failures worth a stack trace; the rest are user input problems
REPORTED_KINDS = (ErrorKind.UNKNOWN, ErrorKind.NETWORK, ErrorKind.SCHEMA,
                  ErrorKind.STORAGE)


def request_user(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None


def fail(kind, message=None):
    raise OperationError(kind, message)


def _record_mutation(name, table, data, request):
    record_id = data if isinstance(data, int) else getattr(data, "pk", None)
    try:
        with transaction.atomic():
            AdminAuditLog.objects.create(
                action=name,
                table_name=table,
                record_id=str(record_id) if record_id is not None else None,
                user=request_user(request),
            )
    except DatabaseError:
        logger.exception("Failed to audit %s", name)


def operation(name, table=None, invalidates=(), mutates=True):
    def decorator(fxn):
        @wraps(fxn)
        def wrapper(*args, request=None, **kwargs):
            try:
                with transaction.atomic():
                    data = fxn(*args, request=request, **kwargs)
                    if mutates:
                        _record_mutation(name, table, data, request)
            except Exception as e:
                error = classify_exception(e)
                if error.kind in REPORTED_KINDS:
                    errors.emit_current_exception()
                logger.warning("%s failed: %s (%s)", name, error.msg,
                               error.kind.name)
                log_error(name, error.msg,
                          metadata={"kind": error.kind.name, "args": repr(args)},
                          user=request_user(request))
                flash(request, error.msg, ERROR)
                return Result(None, error)

            if invalidates:
                query_cache.invalidate(*invalidates)
            logger.debug("%s succeeded", name)
            return Result(data, None)

        wrapper.invalidates = tuple(invalidates)
        return wrapper

    return decorator
