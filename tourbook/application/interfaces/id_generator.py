"""Interface IdGenerator - Puerto para generación de identificadores."""

import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    @abstractmethod
    def generate_id(self) -> str:
        """Genera un identificador opaco para un registro nuevo."""
        raise NotImplementedError


class UUIDIdGenerator(IdGenerator):
    def generate_id(self) -> str:
        return uuid.uuid4().hex


class FakeIdGenerator(IdGenerator):
    """Genera valores predecibles para pruebas deterministas."""

    def __init__(self, prefix: str = "id"):
        self._prefix = prefix
        self._counter = 0

    def generate_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter:06d}"

    def reset(self) -> None:
        self._counter = 0
