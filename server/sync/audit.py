"""
Audit trail writer.
"""
import logging

from docstore import DocumentStoreError

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Appends entries to the `activities` collection.

    A failed write is logged and dropped: it is never retried and never
    reaches the action it was recording.
    """

    def __init__(self, store):
        self.store = store

    def record(self, actor_id, role, action, details=''):
        if actor_id is None:
            return None
        try:
            return self.store.create('activities', {
                'user_id': actor_id,
                'role': role,
                'action': action,
                'details': details,
            })
        except DocumentStoreError:
            logger.exception("[AUDIT] Could not record %s for %s", action, actor_id)
            return None
