from obozy.apps.camps.models import Camp, CampTypeDescription
from obozy.libs.cacheing.query_cache import (ALL, CAMP_TYPES, CAMPS,
                                             REGISTRATIONS, STATS, QueryKey,
                                             cached_query)
from obozy.libs.notifications import SUCCESS, WARNING, create_notification
from obozy.libs.operations.base import operation

CAMP_FIELDS = ("name", "type", "location", "start_date", "end_date", "price",
               "capacity")


def _apply(camp, data):
    for field in CAMP_FIELDS:
        if field in data:
            setattr(camp, field, data[field])
    camp.full_clean()
    camp.save()
    return camp


@operation("get_camps", mutates=False)
def get_camps(request=None):
    return cached_query(QueryKey(CAMPS, ALL),
                        lambda: list(Camp.objects.order_by("start_date", "pk")))


@operation("create_camp", table="camps", invalidates=(CAMPS, STATS))
def create_camp(data, request=None):
    camp = _apply(Camp(), data)
    create_notification("Nowy obóz", f"Utworzono nowy obóz: {camp.name}",
                        SUCCESS, request=request)
    return camp


@operation("update_camp", table="camps", invalidates=(CAMPS, REGISTRATIONS))
def update_camp(camp_id, data, request=None):
    camp = _apply(Camp.objects.get(pk=camp_id), data)
    create_notification("Aktualizacja obozu",
                        f"Zaktualizowano obóz: {camp.name}",
                        SUCCESS, request=request)
    return camp


@operation("delete_camp", table="camps",
           invalidates=(CAMPS, REGISTRATIONS, STATS))
def delete_camp(camp_id, request=None):
    camp = Camp.objects.get(pk=camp_id)
    name = camp.name
    camp.delete()
    create_notification("Usunięcie obozu", f"Usunięto obóz: {name}",
                        WARNING, request=request)
    return camp_id


@operation("get_camp_type_descriptions", mutates=False)
def get_camp_type_descriptions(request=None):
    return cached_query(QueryKey(CAMP_TYPES, ALL),
                        lambda: list(CampTypeDescription.objects.all()))


@operation("update_camp_type_description", table="camp_type_descriptions",
           invalidates=(CAMP_TYPES,))
def update_camp_type_description(camp_type, label, description, request=None):
    description_row, _ = CampTypeDescription.objects.update_or_create(
        type=camp_type,
        defaults={"label": label, "description": description},
    )
    create_notification("Opis typu obozu", "Opis został zaktualizowany",
                        SUCCESS, request=request)
    return description_row
