"""Per-business caching of dashboard KPIs"""
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger('bizos.dashboard')

DASHBOARD_CACHE_PREFIX = 'dashboard_kpis'


def dashboard_cache_key(business_id):
    return f"{DASHBOARD_CACHE_PREFIX}:{business_id}"


def get_cached_dashboard(business_id):
    data = cache.get(dashboard_cache_key(business_id))
    if data is not None:
        logger.debug(f"Cache HIT for dashboard of business {business_id}")
    return data


def set_cached_dashboard(business_id, data):
    cache.set(dashboard_cache_key(business_id), data, settings.DASHBOARD_CACHE_TTL)


def invalidate_dashboard_cache(business_id):
    try:
        cache.delete(dashboard_cache_key(business_id))
        logger.info(f"Invalidated dashboard cache for business {business_id}")
    except Exception as e:
        # A cache outage must not break writes; the entry expires on its own
        logger.warning(f"Error invalidating dashboard cache for business {business_id}: {e}")
