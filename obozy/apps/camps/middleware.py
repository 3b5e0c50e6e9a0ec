from urllib.parse import quote

from obozy.apps.camps.helpers import redirect_and_flash_info
from obozy.libs.session import SessionContext

ADMIN_PREFIX = "/admin/"


class SessionContextMiddleware:
    """Attach a lazily resolved SessionContext to every request"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.session_context = SessionContext(request)
        return self.get_response(request)


class AdminRouteGuard:
    """Every page of the admin panel requires a signed in administrator"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith(ADMIN_PREFIX) and \
                not request.session_context.is_admin:
            return redirect_and_flash_info(
                request,
                "Zaloguj się jako administrator, aby kontynuować",
                path=f"/login/?next={quote(request.path)}")
        return self.get_response(request)
