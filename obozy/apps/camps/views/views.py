from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from obozy.apps.camps.helpers import redirect_back
from obozy.apps.registration.models import Registration
from obozy.libs import operations
from obozy.libs.monitoring import (HEALTHY, monitor_auth_health,
                                   monitor_database_health)
from obozy.libs.notifications import (get_unread_notifications,
                                      mark_notification_as_read)

TABS = (
    ("view_camps", "Obozy", "can_manage_camps"),
    ("view_registrations", "Zgłoszenia", "can_manage_registrations"),
    ("view_payments", "Płatności", "can_manage_registrations"),
    ("view_stats", "Statystyki", None),
    ("view_settings", "Ustawienia", "can_manage_users"),
)


def index(request):
    context = request.session_context
    tabs = [(url_name, label) for url_name, label, key in TABS
            if key is None or context.has_permission(key)]
    return render(request, "panel/index.html", {
        "title": "Panel administracyjny",
        "tabs": tabs,
        "stats": operations.get_stats(request=request).data or {},
        "unread": get_unread_notifications(request.user),
    })


def view_stats(request):
    stats = operations.get_stats(request=request).data or {}
    recent = Registration.objects.select_related("camp").order_by(
        "-created_at", "-pk")[:10]
    return render(request, "panel/stats.html", {
        "title": "Statystyki",
        "stats": stats,
        "recent": recent,
    })


def view_notifications(request):
    return render(request, "panel/notifications.html", {
        "title": "Powiadomienia",
        "notifications": get_unread_notifications(request.user),
    })


@require_POST
def read_notification(request, notification_id):
    mark_notification_as_read(notification_id)
    return redirect_back(request, default="/admin/notifications/")


def health(request):
    database = monitor_database_health()
    auth = monitor_auth_health(request)
    healthy = database["status"] == HEALTHY and auth["status"] == HEALTHY
    return JsonResponse({"database": database, "auth": auth},
                        status=200 if healthy else 503)


def render_403(request, *args, **kwargs):
    response = render(request, "common/403.html")
    response.status_code = 403
    return response


def render_404(request, *args, **kwargs):
    response = render(request, "common/404.html")
    response.status_code = 404
    return response


def render_500(request, *args, **kwargs):
    response = render(request, "common/500.html")
    response.status_code = 500
    return response
