from obozy.apps.camps.models import Camp
from obozy.apps.registration.models import Registration
from obozy.libs.cacheing.query_cache import STATS, QueryKey, cached_query
from obozy.libs.operations.base import operation


def _count_stats():
    registrations = Registration.objects.all()
    return {
        "total_camps": Camp.objects.count(),
        "total_registrations": registrations.count(),
        "pending_registrations": registrations.filter(
            registration_status=Registration.PENDING).count(),
        "confirmed_registrations": registrations.filter(
            registration_status=Registration.CONFIRMED).count(),
    }


@operation("get_stats", mutates=False)
def get_stats(request=None):
    return cached_query(QueryKey(STATS), _count_stats)
