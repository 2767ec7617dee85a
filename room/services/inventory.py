import logging

from django.db import transaction

from account.roles import Role, require_role
from audit.services import record_audit
from room.exceptions import InvalidDateRange, OverlappingOverride
from room.models import RoomBlock, RoomType, SeasonalPriceOverride

logger = logging.getLogger(__name__)


def overlapping_overrides(room_type, start_date, end_date, exclude_id=None):
    queryset = SeasonalPriceOverride.objects.filter(
        room_type=room_type,
        active=True,
        start_date__lte=end_date,
        end_date__gte=start_date,
    )
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return queryset


def lock_room_type(room_type) -> RoomType:
    """Serialize override writes for one room type until the transaction ends."""
    return RoomType.objects.select_for_update().get(pk=room_type.pk)


def add_seasonal_override(room_type, start_date, end_date, override_price, actor,
                          reason="Seasonal adjustment") -> SeasonalPriceOverride:
    require_role(actor, Role.MANAGER)
    if end_date < start_date:
        raise InvalidDateRange("end_date must not be before start_date.")

    with transaction.atomic():
        lock_room_type(room_type)
        if overlapping_overrides(room_type, start_date, end_date).exists():
            raise OverlappingOverride()
        override = SeasonalPriceOverride.objects.create(
            room_type=room_type,
            start_date=start_date,
            end_date=end_date,
            override_price=override_price,
            reason=reason,
            created_by=actor,
        )

    record_audit(
        "seasonal_pricing_added",
        entity="seasonal_price_override",
        entity_id=override.id,
        actor=actor,
        after_state={"override_price": str(override_price), "active": True},
        details={
            "room_type_id": room_type.id,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "reason": reason,
        },
    )
    logger.info(
        "Seasonal price %s added for room type %s (%s..%s)",
        override_price, room_type.id, start_date, end_date,
    )
    return override


def update_seasonal_override(override: SeasonalPriceOverride, actor, **changes):
    require_role(actor, Role.MANAGER)
    before = {"override_price": str(override.override_price), "active": override.active}

    for field, value in changes.items():
        setattr(override, field, value)

    with transaction.atomic():
        lock_room_type(override.room_type)
        if override.active and overlapping_overrides(
            override.room_type, override.start_date, override.end_date, exclude_id=override.pk
        ).exists():
            raise OverlappingOverride()
        override.save()

    record_audit(
        "seasonal_pricing_updated",
        entity="seasonal_price_override",
        entity_id=override.id,
        actor=actor,
        before_state=before,
        after_state={"override_price": str(override.override_price), "active": override.active},
    )
    return override


def deactivate_override(override: SeasonalPriceOverride, actor):
    return update_seasonal_override(override, actor, active=False)


def block_rooms(room_type, start_date, end_date, blocked_rooms, reason, actor,
                description="") -> RoomBlock:
    require_role(actor, Role.MANAGER)
    if end_date < start_date:
        raise InvalidDateRange("end_date must not be before start_date.")

    block = RoomBlock.objects.create(
        room_type=room_type,
        start_date=start_date,
        end_date=end_date,
        blocked_rooms=blocked_rooms,
        reason=reason,
        description=description,
        created_by=actor,
    )
    record_audit(
        "rooms_blocked",
        entity="room_block",
        entity_id=block.id,
        actor=actor,
        details={
            "room_type_id": room_type.id,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "reason": reason,
            "blocked_rooms": blocked_rooms,
        },
    )
    logger.info("%s %s rooms blocked (%s)", blocked_rooms, room_type, reason)
    return block


def release_block(block: RoomBlock, actor) -> RoomBlock:
    require_role(actor, Role.MANAGER)
    block.active = False
    block.save(update_fields=["active"])
    record_audit(
        "rooms_released",
        entity="room_block",
        entity_id=block.id,
        actor=actor,
        before_state={"active": True},
        after_state={"active": False},
    )
    return block
