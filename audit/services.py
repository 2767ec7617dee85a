import logging

from django.db import DatabaseError, transaction

from audit.models import AuditLog

logger = logging.getLogger(__name__)


def _user_or_none(actor):
    if actor is not None and getattr(actor, "is_authenticated", False):
        return actor
    return None


def record_audit(action, entity, entity_id, actor=None, before_state=None,
                 after_state=None, details=None):
    """
    Append an audit entry.

    Runs in its own savepoint so a failed write leaves the caller's
    transaction usable. Failures are logged and never raised.
    """
    try:
        with transaction.atomic():
            return AuditLog.objects.create(
                action=action,
                entity=entity,
                entity_id=str(entity_id),
                actor=_user_or_none(actor),
                before_state=before_state,
                after_state=after_state,
                details=details or {},
            )
    except DatabaseError as exc:
        logger.error("Audit entry %s for %s#%s not written: %s", action, entity, entity_id, exc)
        return None
