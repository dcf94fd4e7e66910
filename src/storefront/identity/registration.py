"""User signup and role management — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import Forbidden
from storefront.identity.user import User
from storefront.utils.logging import get_logger
from storefront.utils.settings import custom_setting

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    telephone = String(max_length=30)
    password = String(required=True, max_length=128)
    role = String(max_length=20, default="User")


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id = Identifier(required=True)
    role = String(required=True, max_length=20)
    actor_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A user with this email already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password=command.password,
            telephone=command.telephone,
            role=command.role or "User",
            password_hash_rounds=custom_setting("password_hash_rounds", 12),
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(ChangeUserRole)
    def change_user_role(self, command):
        repo = current_domain.repository_for(User)
        actor = repo.find_by_id(command.actor_id)
        if not actor.is_admin:
            raise Forbidden("Only administrators can change user roles", actor_id=str(actor.id))

        user = repo.find_by_id(command.user_id)
        user.change_role(command.role, changed_by=actor.id)
        repo.add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=user.role, changed_by=str(actor.id))
