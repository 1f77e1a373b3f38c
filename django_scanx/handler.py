"""Scanner configuration from Django settings.

Mirrors Django's cache handler: each alias in the ``SCANX`` setting builds
one ScanService, created lazily per thread::

    SCANX = {
        "default": {
            "BACKEND": "django_scanx.client.RedisScanClient",
            "LOCATION": "redis://127.0.0.1:6379/0",
            "OPTIONS": {
                "key_codec": "string",
                "value_codec": "json",
                "itersize": 500,
            },
        },
    }

``LOCATION`` may list several servers separated by ``,`` or ``;``; the
first one is the write server. OPTIONS not consumed by the service or the
transport are passed to the connection pool.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from asgiref.local import Local
from django.conf import settings as django_settings
from django.core.signals import request_finished
from django.dispatch import receiver
from django.test.signals import setting_changed
from django.utils.connection import BaseConnectionHandler
from django.utils.module_loading import import_string

from django_scanx.exceptions import InvalidScannerError
from django_scanx.service import ScanService

DEFAULT_SCANNER_ALIAS = "default"
DEFAULT_BACKEND = "django_scanx.client.RedisScanClient"

_CODEC_OPTIONS = ("key_codec", "value_codec", "field_codec", "field_value_codec")

logger = logging.getLogger(__name__)


def parse_location(location: str | list[str]) -> list[str]:
    """Split a LOCATION setting into server URLs."""
    if isinstance(location, str):
        return [server for server in re.split("[;,]", location) if server]
    return list(location)


class ScannerHandler(BaseConnectionHandler):
    settings_name = "SCANX"
    exception_class = InvalidScannerError

    def configure_settings(self, settings: dict[str, Any] | None) -> dict[str, Any]:
        if settings is None:
            settings = getattr(django_settings, self.settings_name, {})
        return settings

    def create_connection(self, alias: str) -> ScanService:
        params = self.settings[alias].copy()
        backend = params.get("BACKEND", DEFAULT_BACKEND)
        servers = parse_location(params.get("LOCATION", ""))
        if not servers:
            msg = f"Scanner '{alias}' has no LOCATION"
            raise InvalidScannerError(msg)
        try:
            backend_cls = import_string(backend)
        except ImportError as e:
            msg = f"Could not find backend '{backend}': {e}"
            raise InvalidScannerError(msg) from e

        options = dict(params.get("OPTIONS", {}))
        codecs = {name: options.get(name) for name in _CODEC_OPTIONS}
        transport = backend_cls(servers, **options)
        logger.debug("Configured scanner %r with %s on %s", alias, backend_cls.__name__, servers)
        return ScanService(transport, **codecs)

    def close_all(self) -> None:
        for scanner in self.all(initialized_only=True):
            scanner.close()


scanners = ScannerHandler()


@receiver(request_finished)
def close_scanners(**kwargs: Any) -> None:
    # Disconnects only when the backend's close_connection option is set
    scanners.close_all()


@receiver(setting_changed)
def reset_scanners(*, setting: str, **kwargs: Any) -> None:
    if setting == ScannerHandler.settings_name:
        scanners.close_all()
        scanners._settings = scanners.settings = scanners.configure_settings(None)
        scanners._connections = Local(scanners.thread_critical)
