"""Tests for axis codecs and codec creation."""

import datetime
import pickle

import pytest

from django_scanx.codecs import BytesCodec, CodecType, JSONCodec, PickleCodec, StringCodec
from django_scanx.codecs.base import BaseCodec
from django_scanx.codecs.msgpack import MessagePackCodec
from django_scanx.compat import create_codec, is_codec_instance
from django_scanx.exceptions import CodecError
from django_scanx.types import Codec


class TestStringCodec:
    def test_roundtrip(self):
        codec = StringCodec()
        assert codec.dumps("user:1") == b"user:1"
        assert codec.loads(b"user:1") == "user:1"

    def test_loads_passes_str_through(self):
        assert StringCodec().loads("already text") == "already text"

    def test_custom_encoding(self):
        codec = StringCodec(encoding="latin-1")
        assert codec.loads("café".encode("latin-1")) == "café"

    def test_invalid_bytes(self):
        with pytest.raises(CodecError):
            StringCodec().loads(b"\xff\xfe\xfa")

    def test_rejects_non_text(self):
        with pytest.raises(CodecError):
            StringCodec().dumps(42)

    def test_renders_strings(self):
        assert StringCodec().can_render(str) is True
        assert StringCodec().can_render(int) is False


class TestBytesCodec:
    def test_passthrough(self):
        codec = BytesCodec()
        assert codec.dumps(bytearray(b"raw")) == b"raw"
        assert codec.loads(b"raw") == b"raw"

    def test_rejects_text(self):
        with pytest.raises(CodecError):
            BytesCodec().dumps("text")

    def test_does_not_render_strings(self):
        assert BytesCodec().can_render(str) is False
        assert BytesCodec().can_render(bytes) is True


class TestJSONCodec:
    def test_roundtrip(self):
        codec = JSONCodec()
        assert codec.loads(codec.dumps({"name": "Alice", "age": 30})) == {"name": "Alice", "age": 30}

    def test_django_encoder(self):
        assert JSONCodec().dumps(datetime.date(2024, 1, 2)) == b'"2024-01-02"'

    def test_invalid(self):
        with pytest.raises(CodecError):
            JSONCodec().loads(b"{not json")

    def test_does_not_render_strings(self):
        assert JSONCodec().can_render(str) is False


class TestPickleCodec:
    def test_roundtrip(self):
        codec = PickleCodec()
        assert codec.loads(codec.dumps({"a", "b"})) == {"a", "b"}

    def test_protocol(self):
        assert PickleCodec().protocol == pickle.HIGHEST_PROTOCOL
        assert PickleCodec(protocol=2).protocol == 2

    def test_invalid(self):
        with pytest.raises(CodecError):
            PickleCodec().loads(b"not a pickle")

    def test_does_not_render_strings(self):
        assert PickleCodec().can_render(str) is False


class TestMessagePackCodec:
    def test_roundtrip(self):
        codec = MessagePackCodec()
        assert codec.loads(codec.dumps([1, "two", None])) == [1, "two", None]

    def test_invalid(self):
        with pytest.raises(CodecError):
            MessagePackCodec().loads(b"\xc1")

    def test_unencodable(self):
        with pytest.raises(CodecError):
            MessagePackCodec().dumps(object())


class TestBaseCodec:
    def test_abstract(self):
        codec = BaseCodec()
        with pytest.raises(NotImplementedError):
            codec.dumps("x")
        with pytest.raises(NotImplementedError):
            codec.loads(b"x")
        assert codec.can_render(str) is False


class TestCreateCodec:
    def test_none_is_string_codec(self):
        assert isinstance(create_codec(None), StringCodec)

    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("string", StringCodec),
            ("bytes", BytesCodec),
            ("json", JSONCodec),
            ("pickle", PickleCodec),
            ("msgpack", MessagePackCodec),
            (CodecType.JSON, JSONCodec),
        ],
    )
    def test_short_names(self, name, cls):
        assert isinstance(create_codec(name), cls)

    def test_dotted_path(self):
        assert isinstance(create_codec("django_scanx.codecs.json.JSONCodec"), JSONCodec)

    def test_class_with_kwargs(self):
        codec = create_codec(PickleCodec, protocol=3)
        assert codec.protocol == 3

    def test_instance_returned_as_is(self):
        codec = StringCodec()
        assert create_codec(codec) is codec

    def test_bad_path(self):
        with pytest.raises(ImportError):
            create_codec("django_scanx.codecs.nope.NopeCodec")

    def test_is_codec_instance(self):
        assert is_codec_instance(StringCodec())
        assert not is_codec_instance(StringCodec)
        assert not is_codec_instance(object())

    def test_duck_typed_codec(self):
        class UpperCodec:
            def dumps(self, obj):
                return obj.upper().encode()

            def loads(self, data):
                return data.decode()

            def can_render(self, type_):
                return False

        codec = UpperCodec()
        assert is_codec_instance(codec)
        assert isinstance(codec, Codec)
        assert create_codec(codec) is codec
