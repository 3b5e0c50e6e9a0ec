import enum
import os
import sys
import traceback

import sentry_sdk
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, InterfaceError, OperationalError, ProgrammingError


def emit_current_exception():
    if os.environ.get("DEBUG") in ["1", 1, True, "true"]:
        traceback.print_exc(file=sys.stdout)
    else:
        sentry_sdk.capture_exception()


class ErrorKind(enum.Enum):
    """Failure categories surfaced to users, each with its Polish message."""

    VALIDATION = "Nieprawidłowe dane"
    INVALID_CREDENTIALS = "Nieprawidłowy email lub hasło"
    EMAIL_NOT_CONFIRMED = "Email nie został potwierdzony"
    NETWORK = "Problem z połączeniem internetowym"
    SCHEMA = "Problem z połączeniem z bazą danych. Spróbuj ponownie za chwilę."
    INVALID_PESEL = "Nieprawidłowy format numeru PESEL"
    INVALID_EMAIL = "Nieprawidłowy format adresu email"
    INVALID_PHONE = "Nieprawidłowy format numeru telefonu"
    INVALID_POSTAL_CODE = "Nieprawidłowy format kodu pocztowego"
    DUPLICATE_REGISTRATION = "Już istnieje zgłoszenie dla tego uczestnika na ten obóz"
    NOT_FOUND = "Nie znaleziono rekordu"
    STORAGE = "Wystąpił błąd podczas operacji na pliku"
    UNKNOWN = "Wystąpił nieoczekiwany błąd"

    @property
    def message(self):
        return self.value


# Constraint violation codes declared on the models, mapped to error kinds
CONSTRAINT_ERROR_KINDS = {
    "invalid_pesel": ErrorKind.INVALID_PESEL,
    "invalid_email": ErrorKind.INVALID_EMAIL,
    "invalid_phone": ErrorKind.INVALID_PHONE,
    "invalid_postal_code": ErrorKind.INVALID_POSTAL_CODE,
    "duplicate_registration": ErrorKind.DUPLICATE_REGISTRATION,
}


class OperationError(Exception):
    def __init__(self, kind=ErrorKind.UNKNOWN, message=None):
        self.kind = kind
        self.msg = message or kind.message
        super(OperationError, self).__init__(self.msg)

    def __str__(self):
        return self.msg

    def __eq__(self, other):
        return (isinstance(other, OperationError) and
                other.kind == self.kind and other.msg == self.msg)

    def __hash__(self):
        return hash((self.kind, self.msg))


class StorageError(Exception):
    """Raised when the object storage rejects an upload or removal."""


class NotFoundError(OperationError):
    def __init__(self, message=None):
        super(NotFoundError, self).__init__(ErrorKind.NOT_FOUND, message)


def validation_codes(error):
    if hasattr(error, "error_dict"):
        errors = [e for field_errors in error.error_dict.values()
                  for e in field_errors]
    else:
        errors = error.error_list
    return [e.code for e in errors]


def kind_for_validation_codes(codes):
    for code in codes:
        if code in CONSTRAINT_ERROR_KINDS:
            return CONSTRAINT_ERROR_KINDS[code]
    return ErrorKind.VALIDATION


def classify_exception(exc):
    """Map an exception raised by the data layer to an OperationError"""
    if isinstance(exc, OperationError):
        return exc
    if isinstance(exc, StorageError):
        return OperationError(ErrorKind.STORAGE)
    if isinstance(exc, ObjectDoesNotExist):
        return NotFoundError()
    if isinstance(exc, (OperationalError, InterfaceError)):
        return OperationError(ErrorKind.NETWORK)
    if isinstance(exc, ProgrammingError):
        return OperationError(ErrorKind.SCHEMA)
    if isinstance(exc, DatabaseError):
        return OperationError(ErrorKind.UNKNOWN)
    if isinstance(exc, ValidationError):
        kind = kind_for_validation_codes(validation_codes(exc))
        if kind is ErrorKind.VALIDATION and exc.messages:
            return OperationError(kind, exc.messages[0])
        return OperationError(kind)
    return OperationError(ErrorKind.UNKNOWN)
