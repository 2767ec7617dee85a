import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser

from account.roles import Role, require_role, role_at_least, role_of
from hotel_management_service.exceptions import InsufficientRole


def test_anonymous_actor_is_guest():
    assert role_of(None) == Role.GUEST
    assert role_of(AnonymousUser()) == Role.GUEST
    assert role_at_least(None, Role.GUEST)
    assert not role_at_least(AnonymousUser(), Role.CUSTOMER)


@pytest.mark.django_db
@pytest.mark.parametrize(
    "role, minimum, expected",
    [
        (Role.CUSTOMER, Role.STAFF, False),
        (Role.STAFF, Role.STAFF, True),
        (Role.MANAGER, Role.STAFF, True),
        (Role.STAFF, Role.MANAGER, False),
        (Role.ADMIN, Role.MANAGER, True),
        (Role.MANAGER, Role.ADMIN, False),
    ],
)
def test_role_hierarchy(role, minimum, expected):
    user = get_user_model().objects.create_user(
        email=f"{role}@test.com", password="testpass123", role=role
    )

    assert role_at_least(user, minimum) is expected


@pytest.mark.django_db
def test_superuser_counts_as_admin():
    admin = get_user_model().objects.create_superuser(
        email="root@test.com", password="testpass123", role=Role.CUSTOMER
    )

    assert role_of(admin) == Role.ADMIN


@pytest.mark.django_db
def test_require_role_raises_for_lower_role():
    user = get_user_model().objects.create_user(
        email="customer@test.com", password="testpass123"
    )

    with pytest.raises(InsufficientRole):
        require_role(user, Role.STAFF)
