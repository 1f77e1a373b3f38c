from typing import Any


class BaseCodec:
    """Base class for axis codecs.

    A codec is bound to one scan axis (keys, values, hash fields or hash
    values). It turns domain objects into the bytes sent to the store and
    decodes what comes back from a cursor page. This interface is
    duck-type compatible with the serializers used by Django's cache
    backends, extended with a capability query.

    ``can_render`` answers whether a value of the given type is written as
    its plain text, which is what a server-side ``MATCH`` glob compares
    against. Pattern scans are refused on axes whose codec answers False
    for ``str``.

    Codecs accept ``**kwargs`` for configuration. ``create_codec()`` in
    ``django_scanx.compat`` passes the configured options as kwargs.
    """

    def __init__(self, **kwargs: Any) -> None:
        pass

    def dumps(self, obj: Any) -> bytes:
        raise NotImplementedError

    def loads(self, data: bytes) -> Any:
        raise NotImplementedError

    def can_render(self, type_: type) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
