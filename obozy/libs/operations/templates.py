from django.conf import settings
from django.utils import timezone

from obozy.apps.camps.models import DocumentTemplate
from obozy.apps.registration.models import Registration
from obozy.libs.cacheing.query_cache import TEMPLATES, QueryKey, cached_query
from obozy.libs.notifications import SUCCESS, WARNING, create_notification
from obozy.libs.operations.base import operation, request_user
from obozy.libs.payments import format_amount
from obozy.libs.templating import (NO_ZHP_STATUS, format_date,
                                   render_template)

TEMPLATE_FIELDS = ("type", "name", "content", "is_default")


def _clear_other_defaults(template):
    others = DocumentTemplate.objects.select_for_update().filter(
        type=template.type, is_default=True)
    if template.pk:
        others = others.exclude(pk=template.pk)
    others.update(is_default=False)


def _save(template, data):
    for field in TEMPLATE_FIELDS:
        if field in data:
            setattr(template, field, data[field])
    if template.is_default:
        _clear_other_defaults(template)
    template.full_clean()
    template.save()
    return template


@operation("get_templates", mutates=False)
def get_templates(template_type, request=None):
    return cached_query(
        QueryKey(TEMPLATES, template_type),
        lambda: list(DocumentTemplate.objects.filter(type=template_type)
                     .order_by("-is_default", "-created_at", "-pk")))


@operation("create_template", table="document_templates",
           invalidates=(TEMPLATES,))
def create_template(data, request=None):
    template = _save(DocumentTemplate(created_by=request_user(request)), data)
    create_notification("Nowy szablon",
                        f"Utworzono nowy szablon: {template.name}",
                        SUCCESS, request=request)
    return template


@operation("update_template", table="document_templates",
           invalidates=(TEMPLATES,))
def update_template(template_id, data, request=None):
    template = _save(DocumentTemplate.objects.get(pk=template_id), data)
    create_notification("Aktualizacja szablonu",
                        f"Zaktualizowano szablon: {template.name}",
                        SUCCESS, request=request)
    return template


@operation("delete_template", table="document_templates",
           invalidates=(TEMPLATES,))
def delete_template(template_id, request=None):
    template = DocumentTemplate.objects.get(pk=template_id)
    name = template.name
    template.delete()
    create_notification("Usunięcie szablonu", f"Usunięto szablon: {name}",
                        WARNING, request=request)
    return template_id


def document_variables(registration, today=None):
    camp = registration.camp
    today = today or timezone.localdate()
    return {
        "current_date": format_date(today),
        "camp_name": camp.name,
        "camp_dates": f"{format_date(camp.start_date)} - "
                      f"{format_date(camp.end_date)}",
        "participant_name": registration.full_name,
        "amount": format_amount(camp.price),
        "due_date": format_date(camp.start_date),
        "account_number": settings.PAYMENT_ACCOUNT_NUMBER,
        "pesel": registration.pesel,
        "birth_date": format_date(registration.birth_date),
        "email": registration.email,
        "phone": registration.phone,
        "address": registration.full_address,
        "zhp_status": registration.zhp_status or NO_ZHP_STATUS,
        "notes": registration.notes or "",
    }


@operation("generate_document", mutates=False)
def generate_document(template_id, registration_id, request=None):
    template = DocumentTemplate.objects.get(pk=template_id)
    registration = Registration.objects.select_related("camp").get(
        pk=registration_id)
    return render_template(template.content, document_variables(registration))
