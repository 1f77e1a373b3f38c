# Transport clients (own pools and open scan cursors)
from django_scanx.client.default import (
    KeyValueScanClient,
    RedisScanClient,
    ValkeyScanClient,
)

__all__ = [
    "KeyValueScanClient",
    "RedisScanClient",
    "ValkeyScanClient",
]
