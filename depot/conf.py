"""
Depot configuration, read from the ``DEPOT`` dict in Django settings.

    DEPOT = {
        "SEARCH_LIMIT": 100,
        "REPORT_LIMIT": 500,
        "ALLOW_SAME_WAREHOUSE_TRANSFER": False,
    }

Values are validated on first access and cached until Django reports a
change to ``DEPOT`` (override_settings, pytest-django's ``settings``).
"""

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver
from pydantic import BaseModel, ConfigDict, PositiveInt, StrictBool, ValidationError


class DepotSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    SEARCH_LIMIT: PositiveInt = 100
    REPORT_LIMIT: PositiveInt = 500
    ALLOW_SAME_WAREHOUSE_TRANSFER: StrictBool = False


@lru_cache(maxsize=None)
def get_depot_settings() -> DepotSettings:
    try:
        return DepotSettings.model_validate(getattr(settings, 'DEPOT', {}))
    except ValidationError as exc:
        raise ImproperlyConfigured(f"Invalid DEPOT setting: {exc}") from exc


@receiver(setting_changed)
def _reload_depot_settings(*, setting, **kwargs):
    if setting == 'DEPOT':
        get_depot_settings.cache_clear()
