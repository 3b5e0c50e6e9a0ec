from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from obozy.apps.camps.helpers import (admin_permission_required,
                                      redirect_and_flash_error)
from obozy.apps.camps.models import Camp, DocumentTemplate
from obozy.apps.registration.forms import (AdminRegistrationForm,
                                           CustomEmailForm, ExcludeForm,
                                           NoteForm,
                                           RegistrationCardUploadForm)
from obozy.apps.registration.models import Registration
from obozy.libs import operations
from obozy.libs.data_export.registrations_export import (XLSX_CONTENT_TYPE,
                                                         to_xlsx)
from obozy.libs.notifications import SUCCESS, flash
from obozy.libs.payments import payment_state

MANAGE_REGISTRATIONS = "can_manage_registrations"


def _selected_camp(request):
    camp_id = request.GET.get("camp", "all")
    if camp_id != "all" and not (camp_id.isdigit() and
                                 Camp.objects.filter(pk=camp_id).exists()):
        return "all"
    return camp_id


def _detail(registration_id):
    return redirect("view_registration", registration_id)


@admin_permission_required(MANAGE_REGISTRATIONS)
def view_registrations(request):
    camp_id = _selected_camp(request)
    registrations = operations.get_registrations(camp_id, request=request).data
    return render(request, "panel/registrations.html", {
        "title": "Zgłoszenia",
        "registrations": registrations or [],
        "camps": operations.get_camps().data or [],
        "selected_camp": camp_id,
    })


@admin_permission_required(MANAGE_REGISTRATIONS)
def view_registration(request, registration_id):
    registration = get_object_or_404(
        Registration.objects.select_related("camp"), pk=registration_id)
    if request.method == "POST":
        form = AdminRegistrationForm(request.POST, instance=registration)
        if form.is_valid():
            result = operations.update_registration(
                registration.pk, form.cleaned_data, request=request)
            if result.error is None:
                return _detail(registration.pk)
    else:
        form = AdminRegistrationForm(instance=registration)

    return render(request, "panel/registration_detail.html", {
        "title": f"Zgłoszenie: {registration.full_name}",
        "registration": registration,
        "payment": payment_state(registration.paid_amount,
                                 registration.camp.price),
        "form": form,
        "note_form": NoteForm(),
        "exclude_form": ExcludeForm(),
        "email_form": CustomEmailForm(),
        "card_form": RegistrationCardUploadForm(),
        "card_url": operations.get_registration_card(registration.pk).data,
        "templates": DocumentTemplate.objects.order_by("type", "-is_default",
                                                       "name"),
        "history": registration.notifications.all()[:20],
    })


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def delete_registration(request, registration_id):
    operations.delete_registration(registration_id, request=request)
    return redirect("view_registrations")


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def exclude_registration(request, registration_id):
    form = ExcludeForm(request.POST)
    if not form.is_valid():
        return redirect_and_flash_error(request, "Podaj powód wykluczenia")
    operations.exclude_registration(registration_id,
                                    form.cleaned_data["reason"],
                                    request=request)
    return _detail(registration_id)


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def add_registration_note(request, registration_id):
    form = NoteForm(request.POST)
    if not form.is_valid():
        return redirect_and_flash_error(request, "Treść notatki jest wymagana")
    operations.add_registration_note(registration_id, form.cleaned_data["note"],
                                     request=request)
    return _detail(registration_id)


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def send_custom_email(request, registration_id):
    form = CustomEmailForm(request.POST)
    if not form.is_valid():
        return redirect_and_flash_error(request,
                                        "Temat i treść wiadomości są wymagane")
    operations.send_custom_email(registration_id,
                                 form.cleaned_data["subject"],
                                 form.cleaned_data["content"],
                                 request=request)
    return _detail(registration_id)


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def send_payment_reminder(request, registration_id):
    operations.send_payment_reminder(registration_id, request=request)
    return redirect(request.headers.get("referer", "/admin/payments/"))


@admin_permission_required(MANAGE_REGISTRATIONS)
def export_registrations(request):
    result = operations.export_registrations(_selected_camp(request),
                                             request=request)
    if result.error is not None:
        return redirect("view_registrations")
    response = HttpResponse(to_xlsx(result.data.df),
                            content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = \
        f"attachment; filename={result.data.filename}"
    flash(request, "Pomyślnie wyeksportowano dane", SUCCESS)
    return response


@admin_permission_required(MANAGE_REGISTRATIONS)
def generate_document(request, registration_id, template_id):
    result = operations.generate_document(template_id, registration_id,
                                          request=request)
    if result.error is not None:
        return _detail(registration_id)
    return render(request, "panel/document.html", {
        "title": "Dokument",
        "content": result.data,
        "registration_id": registration_id,
    })


@admin_permission_required(MANAGE_REGISTRATIONS)
def registration_card_data(request, registration_id):
    result = operations.generate_registration_card(registration_id,
                                                   request=request)
    if result.error is not None:
        return JsonResponse({"error": result.error.msg}, status=404)
    return JsonResponse(result.data)


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def upload_registration_card(request, registration_id):
    form = RegistrationCardUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        error = form.errors.get("card", ["Wybierz plik"])[0]
        return redirect_and_flash_error(request, error)
    operations.upload_registration_card(registration_id,
                                        form.cleaned_data["card"],
                                        request=request)
    return _detail(registration_id)


@require_POST
@admin_permission_required(MANAGE_REGISTRATIONS)
def delete_registration_card(request, registration_id):
    operations.delete_registration_card(registration_id, request=request)
    return _detail(registration_id)
