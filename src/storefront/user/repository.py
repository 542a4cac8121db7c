"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.shared.email import normalize_email
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    """Standard CRUD plus lookup by the unique, normalized email address."""

    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=normalize_email(email)).all().items
        return users[0] if users else None
