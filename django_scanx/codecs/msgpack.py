from typing import Any

import msgpack

from django_scanx.codecs.base import BaseCodec
from django_scanx.exceptions import CodecError


class MessagePackCodec(BaseCodec):
    """MessagePack codec for compact binary values.

    Requires the ``msgpack`` package. Strings are length-prefixed on the
    wire, so pattern scans are refused on an axis bound to this codec.
    """

    def dumps(self, obj: Any) -> bytes:
        try:
            return msgpack.dumps(obj)
        except TypeError as e:
            raise CodecError from e

    def loads(self, data: bytes) -> Any:
        try:
            return msgpack.loads(data, raw=False)
        except Exception as e:
            raise CodecError from e
