"""User aggregate root and the Role enumeration.

A user carries exactly one role. Authorization reads the role from the stored
user only; a user whose role is missing or unrecognized has no privileges at
all, so every role-gated check fails closed for them.
"""

from datetime import UTC, datetime
from enum import Enum

import bcrypt
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserRegistered, UserRoleChanged


class Role(Enum):
    USER = "User"
    ADMIN = "Admin"


def parse_role(value) -> Role:
    """Return the Role named by value, or raise ValidationError."""
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(
            {"role": [f"Unknown role '{value}'. Expected one of: {', '.join(r.value for r in Role)}"]}
        ) from None


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@storefront.aggregate
class User:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    telephone = String(max_length=30)
    password_hash = String(required=True, max_length=255)
    role = String(max_length=20, choices=Role, default=Role.USER.value)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, email, password, telephone=None, role=Role.USER.value, password_hash_rounds=12):
        """Create a user with a bcrypt-hashed credential."""
        if not password or len(password) < 8:
            raise ValidationError({"password": ["Password must be at least 8 characters"]})

        role = parse_role(role)
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            telephone=telephone,
            password_hash=hash_password(password, rounds=password_hash_rounds),
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def role_name(self) -> str | None:
        """The recognized role value, or None when the user has no usable role."""
        try:
            return Role(self.role).value
        except ValueError:
            return None

    @property
    def is_admin(self) -> bool:
        return self.is_active and self.role_name == Role.ADMIN.value

    def verify_password(self, password: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))

    def change_role(self, new_role, changed_by):
        role = parse_role(new_role)
        previous = self.role
        now = datetime.now(UTC)
        self.role = role.value
        self.updated_at = now

        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous,
                new_role=role.value,
                changed_by=str(changed_by),
                changed_at=now,
            )
        )
