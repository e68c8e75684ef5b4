import importlib
import sys

import pytest
from django.core.exceptions import ImproperlyConfigured

PROD = "ordertrack_backend.settings.prod"


def load_prod_settings():
    sys.modules.pop(PROD, None)
    try:
        return importlib.import_module(PROD)
    finally:
        sys.modules.pop(PROD, None)


@pytest.fixture
def prod_env(monkeypatch):
    monkeypatch.setenv("DJANGO_SECRET_KEY", "a-real-secret")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
    return monkeypatch


def test_prod_uses_shared_redis_cache(prod_env):
    prod = load_prod_settings()
    assert prod.CACHES["default"]["BACKEND"] == "django.core.cache.backends.redis.RedisCache"
    assert prod.CACHES["default"]["LOCATION"] == "redis://cache:6379/1"
    assert prod.SIMPLE_JWT["SIGNING_KEY"] == "a-real-secret"


def test_prod_refuses_process_local_cache(prod_env):
    prod_env.delenv("REDIS_URL")
    with pytest.raises(ImproperlyConfigured, match="REDIS_URL"):
        load_prod_settings()


def test_prod_requires_secret_key(prod_env):
    prod_env.delenv("DJANGO_SECRET_KEY")
    with pytest.raises(ImproperlyConfigured, match="DJANGO_SECRET_KEY"):
        load_prod_settings()
