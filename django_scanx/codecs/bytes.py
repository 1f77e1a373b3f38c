from typing import Any

from django_scanx.codecs.base import BaseCodec
from django_scanx.exceptions import CodecError


class BytesCodec(BaseCodec):
    """Pass-through codec for raw ``bytes``."""

    def dumps(self, obj: Any) -> bytes:
        if isinstance(obj, bytes | bytearray | memoryview):
            return bytes(obj)
        raise CodecError(f"{type(self).__name__} cannot encode {type(obj).__name__}")

    def loads(self, data: bytes) -> Any:
        return data

    def can_render(self, type_: type) -> bool:
        return issubclass(type_, bytes)
