from typing import Any, Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.application.interfaces.catalog_repo import TourRepo, UserRepo
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User
from tourbook.infrastructure.db.datetimes import as_utc
from tourbook.infrastructure.db.tables import tours, users


def _tour_from_row(row: Any) -> Tour:
    return Tour(
        id=row["id"],
        title=row["title"],
        description=row["description"] or "",
        price=row["price"],
        duration=row["duration"],
        location_name=row["location_name"],
        guide_id=row["guide_id"],
        images=list(row["images"] or []),
        itinerary=list(row["itinerary"] or []),
    )


def _user_from_row(row: Any) -> User:
    return User(
        id=row["id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row["phone"],
        role=row["role"],
        is_verified=bool(row["is_verified"]),
        is_active=bool(row["is_active"]),
        is_guest=bool(row["is_guest"]),
        created_at=as_utc(row["created_at"]),
    )


class TourRepoSQL(TourRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, tour_id: str) -> Tour | None:
        result = await self._session.execute(select(tours).where(tours.c.id == tour_id).limit(1))
        row = result.mappings().first()
        return _tour_from_row(row) if row else None

    async def get_many(self, tour_ids: Iterable[str]) -> dict[str, Tour]:
        ids = list(tour_ids)
        if not ids:
            return {}
        result = await self._session.execute(select(tours).where(tours.c.id.in_(ids)))
        return {row["id"]: _tour_from_row(row) for row in result.mappings().all()}


class UserRepoSQL(UserRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.execute(select(users).where(users.c.id == user_id).limit(1))
        row = result.mappings().first()
        return _user_from_row(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(users).where(func.lower(users.c.email) == email.lower()).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _user_from_row(row) if row else None

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        ids = list(user_ids)
        if not ids:
            return {}
        result = await self._session.execute(select(users).where(users.c.id.in_(ids)))
        return {row["id"]: _user_from_row(row) for row in result.mappings().all()}

    async def create(self, user: User) -> User:
        await self._session.execute(
            insert(users).values(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone,
                role=user.role,
                is_verified=user.is_verified,
                is_active=user.is_active,
                is_guest=user.is_guest,
                created_at=user.created_at,
            )
        )
        return user
