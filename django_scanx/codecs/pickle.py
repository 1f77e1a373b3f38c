import pickle
from typing import Any

from django_scanx.codecs.base import BaseCodec
from django_scanx.exceptions import CodecError


class PickleCodec(BaseCodec):
    """Pickle codec for arbitrary Python objects.

    Attributes:
        protocol: Pickle protocol, highest available unless configured.
    """

    def __init__(self, protocol: int | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.protocol = pickle.HIGHEST_PROTOCOL if protocol is None else protocol

    def dumps(self, obj: Any) -> bytes:
        return pickle.dumps(obj, self.protocol)

    def loads(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)  # noqa: S301
        except (pickle.UnpicklingError, EOFError, ValueError) as e:
            raise CodecError from e
