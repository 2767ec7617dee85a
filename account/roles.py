from django.db import models


class Role(models.TextChoices):
    GUEST = "guest"
    CUSTOMER = "customer"
    STAFF = "staff"
    MANAGER = "manager"
    ADMIN = "admin"


ROLE_HIERARCHY = {
    Role.GUEST: 0,
    Role.CUSTOMER: 1,
    Role.STAFF: 2,
    Role.MANAGER: 3,
    Role.ADMIN: 4,
}


def role_of(actor) -> Role:
    """Resolve the effective role of an actor; anonymous callers are guests."""
    if actor is None or not getattr(actor, "is_authenticated", False):
        return Role.GUEST
    if getattr(actor, "is_superuser", False):
        return Role.ADMIN
    return Role(actor.role)


def role_at_least(actor, minimum: Role) -> bool:
    return ROLE_HIERARCHY[role_of(actor)] >= ROLE_HIERARCHY[Role(minimum)]


def require_role(actor, minimum: Role) -> None:
    from hotel_management_service.exceptions import InsufficientRole

    if not role_at_least(actor, minimum):
        raise InsufficientRole(
            f"Role '{minimum}' or higher is required for this operation."
        )
