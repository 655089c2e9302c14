"""
Celery tasks for the audit trail.
"""
import logging

from celery import shared_task
from django.db import transaction
from django.db.models import JSONField, Value

logger = logging.getLogger(__name__)


def _json_or_null(value):
    # Value(None, JSONField()) stores JSON null rather than SQL NULL
    return value if value else Value(None, output_field=JSONField())


@shared_task
def record_audit_log(action, entity, entity_id=None, payload=None, previous_data=None,
                     user_id=None, ip=None, user_agent=None):
    """
    Persist one audit record. Failures are logged and never re-raised.
    """
    from audit.models import AuditLog

    try:
        with transaction.atomic():
            log = AuditLog.objects.create(
                action=action,
                entity=entity,
                entity_id=entity_id,
                payload=_json_or_null(payload),
                previous_data=_json_or_null(previous_data),
                user_id=user_id,
                ip=ip,
                user_agent=user_agent,
            )
    except Exception as e:
        logger.error(f"Failed to save audit log for {action} {entity} {entity_id}: {e}")
        return None

    logger.debug(f"Audit log {log.id} saved for {action} {entity}")
    return str(log.id)
