"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.errors import UserNotFound
from storefront.utils.storage import storage_errors

from .user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_id(self, user_id) -> User:
        """Load a user or raise UserNotFound."""
        if not user_id:
            raise UserNotFound(user_id)
        with storage_errors("User", user_id=str(user_id)):
            try:
                return self.get(str(user_id))
            except ObjectNotFoundError:
                raise UserNotFound(user_id) from None

    def find_by_email(self, email: str) -> User | None:
        with storage_errors("User", email=email):
            users = self._dao.query.filter(email=email.strip().lower()).limit(None).all().items
        return users[0] if users else None
