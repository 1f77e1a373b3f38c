from typing import Any

from django_scanx.codecs.base import BaseCodec
from django_scanx.exceptions import CodecError


class StringCodec(BaseCodec):
    """Plain text codec.

    Writes ``str`` values as encoded text, so match patterns apply to them
    verbatim. This is the only shipped codec that can render patterns.

    Attributes:
        encoding: Text encoding, ``utf-8`` unless configured.
    """

    def __init__(self, encoding: str = "utf-8", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.encoding = encoding

    def dumps(self, obj: Any) -> bytes:
        if isinstance(obj, bytes):
            return obj
        if not isinstance(obj, str):
            raise CodecError(f"{type(self).__name__} cannot encode {type(obj).__name__}")
        return obj.encode(self.encoding)

    def loads(self, data: bytes) -> Any:
        if isinstance(data, str):
            return data
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise CodecError from e

    def can_render(self, type_: type) -> bool:
        return issubclass(type_, str)
