"""
Serializers — bytes codec for stores that persist outside the process.
"""

from __future__ import annotations

import pickle
from typing import Any, Protocol


class Serializer(Protocol):
    """
    Bytes codec protocol.

    Example:
        class JsonSerializer:
            def dumps(self, value: Any) -> bytes:
                return json.dumps(value).encode()

            def loads(self, data: bytes) -> Any:
                return json.loads(data)
    """

    def dumps(self, value: Any) -> bytes: ...

    def loads(self, data: bytes) -> Any: ...


class PickleSerializer:
    """Default serializer — any picklable value."""

    __slots__ = ("protocol",)

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def dumps(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def loads(self, data: bytes) -> Any:
        return pickle.loads(data)


__all__ = ("Serializer", "PickleSerializer")
