import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

from django_scanx.codecs.base import BaseCodec
from django_scanx.exceptions import CodecError


class JSONCodec(BaseCodec):
    """JSON codec using Django's DjangoJSONEncoder.

    Human-readable and interoperable, limited to JSON-compatible types plus
    what DjangoJSONEncoder adds (datetime, Decimal, UUID, lazy strings).

    JSON wraps strings in quotes, so a glob built from plain text never
    lines up with the stored bytes. ``can_render(str)`` is therefore False
    and pattern scans on a JSON-coded axis are refused.

    Attributes:
        encoder_class: The JSON encoder class to use. Defaults to DjangoJSONEncoder.

    Example:
        Configure in Django settings::

            SCANX = {
                "default": {
                    "LOCATION": "redis://localhost:6379/1",
                    "OPTIONS": {
                        "value_codec": "django_scanx.codecs.json.JSONCodec",
                    }
                }
            }
    """

    encoder_class = DjangoJSONEncoder

    def dumps(self, obj: Any) -> bytes:
        return json.dumps(obj, cls=self.encoder_class).encode()

    def loads(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode() if isinstance(data, bytes) else data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CodecError from e
