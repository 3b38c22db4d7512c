"""Value Object PageRequest - parámetros de paginación normalizados."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    """
    Página 1-based y tamaño de página.

    Valores menores a 1 se ajustan a 1 y el tamaño se limita a ``max_limit``,
    de forma que la misma entrada siempre produce la misma página.
    """

    page: int = 1
    limit: int = 10

    @classmethod
    def clamped(cls, page: int | None, limit: int | None, max_limit: int = 100) -> "PageRequest":
        safe_page = max(1, int(page or 1))
        safe_limit = min(max(1, int(limit or 1)), max_limit)
        return cls(page=safe_page, limit=safe_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, items: list) -> list:
        return items[self.offset : self.offset + self.limit]

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)
