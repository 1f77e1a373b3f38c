"""Axis codecs.

``CodecType`` names the shipped codecs so settings can refer to them by a
short name instead of an import path.
"""

from enum import StrEnum

from django_scanx.codecs.base import BaseCodec
from django_scanx.codecs.bytes import BytesCodec
from django_scanx.codecs.json import JSONCodec
from django_scanx.codecs.pickle import PickleCodec
from django_scanx.codecs.string import StringCodec


class CodecType(StrEnum):
    STRING = "string"
    BYTES = "bytes"
    JSON = "json"
    PICKLE = "pickle"
    MSGPACK = "msgpack"

    @property
    def path(self) -> str:
        return _CODEC_PATHS[self]


_CODEC_PATHS = {
    CodecType.STRING: "django_scanx.codecs.string.StringCodec",
    CodecType.BYTES: "django_scanx.codecs.bytes.BytesCodec",
    CodecType.JSON: "django_scanx.codecs.json.JSONCodec",
    CodecType.PICKLE: "django_scanx.codecs.pickle.PickleCodec",
    CodecType.MSGPACK: "django_scanx.codecs.msgpack.MessagePackCodec",
}

__all__ = [
    "BaseCodec",
    "BytesCodec",
    "CodecType",
    "JSONCodec",
    "PickleCodec",
    "StringCodec",
]
