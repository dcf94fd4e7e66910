"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new user signed up."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserRoleChanged:
    """An administrator moved a user to a different role."""

    __version__ = 1

    user_id = Identifier(required=True)
    previous_role = String()
    new_role = String(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)
