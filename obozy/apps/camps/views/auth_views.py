import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from obozy.apps.camps.auth_roles import (NO_PERMISSION_MESSAGE, is_admin,
                                         sign_in, sign_out)
from obozy.apps.camps.forms import LoginForm
from obozy.apps.camps.helpers import redirect_and_flash_success
from obozy.libs.errors import ErrorKind
from obozy.libs.monitoring import HEALTHY, monitor_database_health

logger = logging.getLogger(__name__)

ADMIN_HOME = "/admin/"


def _next_url(request):
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and next_url.startswith(ADMIN_HOME) and \
            url_has_allowed_host_and_scheme(next_url, request.get_host()):
        return next_url
    return ADMIN_HOME


@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.user.is_authenticated:
        if is_admin(request.user):
            return redirect(ADMIN_HOME)
        sign_out(request)
        messages.error(request, NO_PERMISSION_MESSAGE)

    form = LoginForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        if monitor_database_health()["status"] != HEALTHY:
            messages.error(request, ErrorKind.SCHEMA.message)
        else:
            result = sign_in(request, form.cleaned_data["email"],
                             form.cleaned_data["password"])
            if result.error is None:
                if is_admin(result.data):
                    return redirect_and_flash_success(
                        request, "Zalogowano pomyślnie", path=_next_url(request))
                logger.info("Non-admin %s tried to sign in", result.data)
                sign_out(request)
                messages.error(request, NO_PERMISSION_MESSAGE)

    return render(request, "public/login.html", {
        "form": form,
        "next": _next_url(request),
    })


def logout_view(request):
    sign_out(request)
    return redirect_and_flash_success(request, "Wylogowano pomyślnie", path="/")
