from functools import wraps

from django.contrib import messages
from django.shortcuts import redirect


def redirect_and_flash_info(request, message, **kwargs):
    return redirect_and_flash(request, message, messages.INFO, **kwargs)


def redirect_and_flash_success(request, message, **kwargs):
    return redirect_and_flash(request, message, messages.SUCCESS, **kwargs)


def redirect_and_flash_error(request, message, **kwargs):
    return redirect_and_flash(request, message, messages.ERROR, **kwargs)


def redirect_and_flash(request, message, message_level, **kwargs):
    path = kwargs.get("path", request.headers.get("referer", "/admin/"))
    messages.add_message(request, message_level, message)
    return redirect(path)


def redirect_back(request, default="/admin/"):
    return redirect(request.headers.get("referer", default))


def admin_permission_required(key):
    """Send admins lacking the given permission to the 403 page"""

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if not request.session_context.has_permission(key):
                return redirect("403")
            return view(request, *args, **kwargs)

        return wrapper

    return decorator
