from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from obozy.apps.camps.forms import HomepageImageForm, HomepageSectionForm
from obozy.apps.camps.helpers import (admin_permission_required,
                                      redirect_and_flash_error)
from obozy.apps.camps.models import HomepageSection
from obozy.libs import operations

MANAGE_USERS = "can_manage_users"


@admin_permission_required(MANAGE_USERS)
def view_settings(request):
    sections = operations.get_homepage_sections(visible_only=False,
                                                request=request).data or []
    return render(request, "panel/settings.html", {
        "title": "Ustawienia strony głównej",
        "sections": [(section,
                      HomepageSectionForm(instance=section,
                                          prefix=f"section-{section.pk}"),
                      HomepageImageForm(prefix=f"image-{section.pk}"))
                     for section in sections],
    })


@require_POST
@admin_permission_required(MANAGE_USERS)
def update_section(request, section_id):
    section = get_object_or_404(HomepageSection, pk=section_id)
    form = HomepageSectionForm(request.POST, instance=section,
                               prefix=f"section-{section.pk}")
    if not form.is_valid():
        errors = [error for field_errors in form.errors.values()
                  for error in field_errors]
        return redirect_and_flash_error(request, errors[0],
                                        path="/admin/settings/")
    operations.update_homepage_section(section.pk, form.cleaned_data,
                                       request=request)
    return redirect("view_settings")


@require_POST
@admin_permission_required(MANAGE_USERS)
def upload_image(request, section_id):
    form = HomepageImageForm(request.POST, request.FILES,
                             prefix=f"image-{section_id}")
    if not form.is_valid():
        error = form.errors.get("image", ["Wybierz plik"])[0]
        return redirect_and_flash_error(request, error,
                                        path="/admin/settings/")
    operations.upload_homepage_image(section_id, form.cleaned_data["image"],
                                     alt=form.cleaned_data["alt"],
                                     request=request)
    return redirect("view_settings")


@require_POST
@admin_permission_required(MANAGE_USERS)
def delete_image(request, image_id):
    operations.delete_homepage_image(image_id, request=request)
    return redirect("view_settings")
