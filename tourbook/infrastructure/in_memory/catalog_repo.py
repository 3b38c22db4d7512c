import copy
from typing import Iterable

from tourbook.application.interfaces.catalog_repo import TourRepo, UserRepo
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User


class InMemoryTourRepo(TourRepo):
    def __init__(self, tours: Iterable[Tour] = ()) -> None:
        self.tours: dict[str, Tour] = {t.id: t for t in tours}

    def add(self, tour: Tour) -> Tour:
        self.tours[tour.id] = tour
        return tour

    async def get_by_id(self, tour_id: str) -> Tour | None:
        tour = self.tours.get(tour_id)
        return copy.deepcopy(tour) if tour else None

    async def get_many(self, tour_ids: Iterable[str]) -> dict[str, Tour]:
        return {tid: copy.deepcopy(self.tours[tid]) for tid in tour_ids if tid in self.tours}


class InMemoryUserRepo(UserRepo):
    def __init__(self, users: Iterable[User] = ()) -> None:
        self.users: dict[str, User] = {u.id: u for u in users}

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> User | None:
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        for user in self.users.values():
            if user.email.lower() == email.lower():
                return copy.deepcopy(user)
        return None

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        return {uid: copy.deepcopy(self.users[uid]) for uid in user_ids if uid in self.users}

    async def create(self, user: User) -> User:
        if user.id in self.users:
            raise ValueError("User id already exists")
        self.users[user.id] = copy.deepcopy(user)
        return copy.deepcopy(user)
