from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from obozy.apps.camps.models import Camp
from obozy.apps.camps.views.public_views import filter_camps
from obozy.apps.registration.forms import RegistrationForm
from obozy.apps.registration.sections import section_states
from obozy.libs import operations
from obozy.libs.errors import ErrorKind

# Error kinds that belong to a single form field; the rest go on top of the form
FIELD_FOR_ERROR = {
    ErrorKind.INVALID_PESEL: "pesel",
    ErrorKind.INVALID_EMAIL: "email",
    ErrorKind.INVALID_PHONE: "phone",
    ErrorKind.INVALID_POSTAL_CODE: "postal_code",
}


def _initial(request):
    camp_id = request.GET.get("camp", "")
    if camp_id.isdigit() and Camp.objects.filter(pk=camp_id).exists():
        return {"camp": int(camp_id)}
    return {}


@require_http_methods(["GET", "POST"])
def registration_portal(request):
    toggled = request.GET.getlist("toggle")
    if request.method == "POST":
        form = RegistrationForm(request.POST)
        if form.is_valid():
            result = operations.create_registration(form.cleaned_data,
                                                    request=request)
            if result.error is None:
                return redirect("public_home")
            form.add_error(FIELD_FOR_ERROR.get(result.error.kind),
                           result.error.msg)
    else:
        form = RegistrationForm(initial=_initial(request))

    camps = operations.get_camps().data or []
    camp_type = request.GET.get("type", "all")
    return render(request, "registration/portal.html", {
        "form": form,
        "sections": section_states(form, toggled),
        "camps": filter_camps(camps, camp_type=camp_type),
        "type_descriptions": operations.get_camp_type_descriptions().data or [],
        "type_choices": Camp.TYPE_CHOICES,
        "active_type": camp_type,
        "toggled": toggled,
    })
