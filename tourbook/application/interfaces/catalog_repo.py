from typing import Iterable

from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User


class TourRepo:
    async def get_by_id(self, tour_id: str) -> Tour | None:
        raise NotImplementedError

    async def get_many(self, tour_ids: Iterable[str]) -> dict[str, Tour]:
        raise NotImplementedError


class UserRepo:
    async def get_by_id(self, user_id: str) -> User | None:
        raise NotImplementedError

    async def get_by_email(self, email: str) -> User | None:
        raise NotImplementedError

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        raise NotImplementedError

    async def create(self, user: User) -> User:
        raise NotImplementedError
