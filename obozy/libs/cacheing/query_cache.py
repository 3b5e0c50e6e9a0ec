"""Read-through cache for admin and public list queries.

Every cached query is addressed by a ``QueryKey`` made of the entity it reads
and the filter it was run with, e.g. ``QueryKey(REGISTRATIONS, camp_id)``.
Each entity carries a generation counter that is part of the physical cache
key, so invalidating an entity drops all of its filtered variants at once.
"""
import logging
from collections import namedtuple
from hashlib import sha1

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

QUERY_CACHE = "queries"

CAMPS = "camps"
CAMP_TYPES = "camp_types"
REGISTRATIONS = "registrations"
REGISTRATION_CARDS = "registration_cards"
TEMPLATES = "templates"
NOTIFICATIONS = "notifications"
HOMEPAGE = "homepage"
STATS = "stats"
ADMINS = "admins"

ENTITIES = (CAMPS, CAMP_TYPES, REGISTRATIONS, REGISTRATION_CARDS, TEMPLATES,
            NOTIFICATIONS, HOMEPAGE, STATS, ADMINS)

ALL = "all"


class QueryKey(namedtuple("QueryKey", ["entity", "filter"])):
    __slots__ = ()

    def __new__(cls, entity, filter=ALL):
        if entity not in ENTITIES:
            raise ValueError(f"Unknown cache entity '{entity}'")
        return super(QueryKey, cls).__new__(cls, entity, filter)


def _generation_key(entity):
    return f"gen:{entity}"


def _generation(entity):
    cache = caches[QUERY_CACHE]
    generation = cache.get(_generation_key(entity))
    if generation is None:
        generation = 1
        cache.set(_generation_key(entity), generation, settings.QUERY_CACHE_TIME)
    return generation


def physical_key(key):
    raw = f"{key.entity}:{_generation(key.entity)}:{key.filter!r}"
    return f"q:{key.entity}:{sha1(raw.encode('utf-8')).hexdigest()}"


def cached_query(key, fxn, *args, **kwargs):
    """
    Return the cached result for ``key`` or compute it with ``fxn``

    For example:
    cached_query(QueryKey(CAMPS), lambda: list(Camp.objects.all()))

    Results must not be None since None marks a cache miss.
    """
    cache = caches[QUERY_CACHE]
    cache_key = physical_key(key)
    result = cache.get(cache_key)
    if result is None:
        result = fxn(*args, **kwargs)
        cache.set(cache_key, result, settings.QUERY_STALE_TIME)
    return result


def invalidate(*entities):
    cache = caches[QUERY_CACHE]
    for entity in entities:
        if entity not in ENTITIES:
            raise ValueError(f"Unknown cache entity '{entity}'")
        try:
            cache.incr(_generation_key(entity))
        except ValueError:
            # generation expired or never read; next read starts a fresh one
            cache.set(_generation_key(entity), 2, settings.QUERY_CACHE_TIME)
        logger.debug("Invalidated cached queries for %s", entity)


def clear_cache():
    caches[QUERY_CACHE].clear()
