from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from obozy.apps.camps.forms import DocumentTemplateForm
from obozy.apps.camps.helpers import (admin_permission_required,
                                      redirect_and_flash_error)
from obozy.apps.camps.models import DocumentTemplate
from obozy.apps.registration.forms import PaymentForm
from obozy.apps.registration.models import Registration
from obozy.libs import operations
from obozy.libs.payments import payment_state

MANAGE_REGISTRATIONS = "can_manage_registrations"


@admin_permission_required(MANAGE_REGISTRATIONS)
def view_payments(request):
    registrations = operations.get_registrations(request=request).data or []
    rows = [(registration,
             payment_state(registration.paid_amount, registration.camp.price),
             PaymentForm(prefix=str(registration.pk)))
            for registration in registrations
            if registration.registration_status != Registration.CANCELLED]
    templates = {
        template_type: operations.get_templates(template_type).data or []
        for template_type, _ in DocumentTemplate.TYPE_CHOICES
    }
    return render(request, "panel/payments.html", {
        "title": "Płatności",
        "rows": rows,
        "templates": templates,
        "type_labels": dict(DocumentTemplate.TYPE_CHOICES),
    })


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def register_payment(request, registration_id):
    form = PaymentForm(request.POST, prefix=str(registration_id))
    if not form.is_valid():
        error = form.errors.get("amount", ["Wprowadź poprawną kwotę"])[0]
        return redirect_and_flash_error(request, error,
                                        path="/admin/payments/")
    operations.register_payment(registration_id, form.cleaned_data["amount"],
                                request=request)
    return redirect("view_payments")


@admin_permission_required(MANAGE_REGISTRATIONS)
def enter_template(request):
    if request.method == "POST":
        form = DocumentTemplateForm(request.POST)
        if form.is_valid():
            result = operations.create_template(form.cleaned_data,
                                                request=request)
            if result.error is None:
                return redirect("view_payments")
    else:
        template_type = request.GET.get("type",
                                        DocumentTemplate.PAYMENT_REMINDER)
        form = DocumentTemplateForm(initial={"type": template_type})
    return render(request, "panel/form.html", {
        "title": "Nowy szablon",
        "form": form,
        "back": "view_payments",
    })


@admin_permission_required(MANAGE_REGISTRATIONS)
def edit_template(request, template_id):
    template = get_object_or_404(DocumentTemplate, pk=template_id)
    if request.method == "POST":
        form = DocumentTemplateForm(request.POST, instance=template)
        if form.is_valid():
            result = operations.update_template(template.pk, form.cleaned_data,
                                                request=request)
            if result.error is None:
                return redirect("view_payments")
    else:
        form = DocumentTemplateForm(instance=template)
    return render(request, "panel/form.html", {
        "title": f"Edycja szablonu: {template.name}",
        "form": form,
        "back": "view_payments",
    })


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def delete_template(request, template_id):
    operations.delete_template(template_id, request=request)
    return redirect("view_payments")
