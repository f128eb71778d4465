"""Financial audit trail."""

import json
import logging
from typing import Any, Optional

from django.utils import timezone

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('apps.reconciliation.audit')


def record_audit_entry(*, operation: str, details: Any, user=None) -> Optional[str]:
    """
    Write one structured audit line.

    Failures are logged and swallowed so the audited operation always
    completes.

    Returns:
        The serialized entry, or None if it could not be written
    """
    try:
        entry = json.dumps({
            'timestamp': timezone.now().isoformat(),
            'operation': operation,
            'user': getattr(user, 'email', None),
            'details': details,
        }, default=str, sort_keys=True)
        audit_logger.info(entry)
        return entry
    except Exception:
        logger.exception("Failed to write audit entry for %s", operation)
        return None
