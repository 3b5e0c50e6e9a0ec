from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from obozy.apps.camps.forms import CampForm, CampTypeDescriptionForm
from obozy.apps.camps.helpers import (admin_permission_required,
                                      redirect_and_flash_error)
from obozy.apps.camps.models import Camp
from obozy.libs import operations

MANAGE_CAMPS = "can_manage_camps"


@admin_permission_required(MANAGE_CAMPS)
def view_camps(request):
    camps = operations.get_camps(request=request).data or []
    descriptions = {
        description.type: description
        for description in operations.get_camp_type_descriptions().data or []
    }
    description_forms = [
        CampTypeDescriptionForm(
            prefix=camp_type,
            initial={
                "type": camp_type,
                "label": getattr(descriptions.get(camp_type), "label", label),
                "description": getattr(descriptions.get(camp_type),
                                       "description", ""),
            })
        for camp_type, label in Camp.TYPE_CHOICES
    ]
    return render(request, "panel/camps.html", {
        "title": "Obozy",
        "camps": camps,
        "description_forms": description_forms,
    })


@admin_permission_required(MANAGE_CAMPS)
def enter_camp(request):
    if request.method == "POST":
        form = CampForm(request.POST)
        if form.is_valid():
            result = operations.create_camp(form.cleaned_data, request=request)
            if result.error is None:
                return redirect("view_camps")
    else:
        form = CampForm()
    return render(request, "panel/form.html", {
        "title": "Nowy obóz",
        "form": form,
        "back": "view_camps",
    })


@admin_permission_required(MANAGE_CAMPS)
def edit_camp(request, camp_id):
    camp = get_object_or_404(Camp, pk=camp_id)
    if request.method == "POST":
        form = CampForm(request.POST, instance=camp)
        if form.is_valid():
            result = operations.update_camp(camp.pk, form.cleaned_data,
                                            request=request)
            if result.error is None:
                return redirect("view_camps")
    else:
        form = CampForm(instance=camp)
    return render(request, "panel/form.html", {
        "title": f"Edycja obozu: {camp.name}",
        "form": form,
        "back": "view_camps",
    })


@require_POST
@admin_permission_required(MANAGE_CAMPS)
def delete_camp(request, camp_id):
    operations.delete_camp(camp_id, request=request)
    return redirect("view_camps")


@require_POST
@admin_permission_required(MANAGE_CAMPS)
def update_camp_type_description(request, camp_type):
    if camp_type not in dict(Camp.TYPE_CHOICES):
        return redirect("view_camps")
    form = CampTypeDescriptionForm(request.POST, prefix=camp_type)
    if not form.is_valid():
        return redirect_and_flash_error(request, "Nazwa typu jest wymagana",
                                        path="/admin/camps/")
    operations.update_camp_type_description(
        camp_type, form.cleaned_data["label"],
        form.cleaned_data["description"], request=request)
    return redirect("view_camps")
