from django.shortcuts import render

from obozy.apps.camps.models import Camp
from obozy.libs import operations

CAMP_TYPES = tuple(value for value, _ in Camp.TYPE_CHOICES)


def filter_camps(camps, search="", camp_type="all"):
    search = (search or "").strip().lower()
    if camp_type in CAMP_TYPES:
        camps = [camp for camp in camps if camp.type == camp_type]
    if search:
        camps = [camp for camp in camps
                 if search in camp.name.lower()
                 or search in camp.location.lower()]
    return camps


def public_home(request):
    sections = operations.get_homepage_sections().data or []
    camps = operations.get_camps().data or []
    descriptions = operations.get_camp_type_descriptions().data or []

    search = request.GET.get("q", "")
    camp_type = request.GET.get("type", "all")
    stats = operations.get_stats().data or {}

    return render(request, "public/home.html", {
        "sections": sections,
        "camps": filter_camps(camps, search, camp_type),
        "camp_count": len(camps),
        "type_descriptions": descriptions,
        "type_choices": Camp.TYPE_CHOICES,
        "search": search,
        "active_type": camp_type if camp_type in CAMP_TYPES else "all",
        "stats": stats,
    })
