import pytest

from obozy.libs.cacheing import query_cache
from obozy.libs.tests.helpers import make_admin


@pytest.fixture(autouse=True)
def clear_query_cache_between_tests():
    """Cached query results and admin lookups must not leak across tests."""
    query_cache.clear_cache()
    yield
    query_cache.clear_cache()


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    settings.STORAGE = dict(settings.STORAGE, use_s3=False)
    return tmp_path


@pytest.fixture
def admin_user(db):
    return make_admin("admin@example.com", role="super_admin")


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client
