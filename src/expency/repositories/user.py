"""User lookups for signup, login and token checks."""
from sqlalchemy import exists, select

from expency.models.user import User
from expency.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def email_taken(self, email: str) -> bool:
        return bool(
            await self.db.scalar(select(exists().where(User.email == email.lower())))
        )
