"""
Document store adapter.

Exposes the database tables as named collections of plain dict records,
with live subscriptions: every subscriber gets the full snapshot of its
collection when it subscribes and again after every committed write.

Pushes run synchronously on the writer's context, in commit order.
"""
import logging
from collections import defaultdict

from sqlalchemy import Integer
from sqlalchemy.exc import SQLAlchemyError

from database import db
from models import Activity, Admin, Chat, Station, Student, Supervisor

logger = logging.getLogger(__name__)

# name -> (model, insertion-order column)
COLLECTIONS = {
    'stations': (Station, Station.seq),
    'chats': (Chat, Chat.id),
    'activities': (Activity, Activity.id),
    'students': (Student, Student.seq),
    'admins': (Admin, Admin.id),
    'supervisors': (Supervisor, Supervisor.id),
}


class DocumentStoreError(Exception):
    """A read or write against the store failed."""


class Subscription:
    """Live handle on a collection feed. Call unsubscribe() to stop pushes."""

    def __init__(self, store, collection, callback, order_by=None):
        self.store = store
        self.collection = collection
        self.callback = callback
        self.order_by = order_by
        self.active = True

    def unsubscribe(self):
        if self.active:
            self.active = False
            self.store._remove(self)


class DocumentStore:
    def __init__(self):
        self._subscribers = defaultdict(list)

    # -------- Reads --------

    def snapshot(self, name, order_by=None):
        """Return every record in a collection, optionally ordered by (field, 'asc'|'desc')."""
        model, insertion = _collection(name)
        query = model.query
        if order_by:
            field, direction = order_by
            column = getattr(model, field, None)
            if column is None:
                raise DocumentStoreError(f"Unknown field '{field}' on {name}")
            if direction == 'desc':
                query = query.order_by(column.desc(), insertion.desc())
            else:
                query = query.order_by(column.asc(), insertion.asc())
        else:
            query = query.order_by(insertion.asc())
        try:
            return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError(f"Reading {name} failed") from exc

    def get(self, name, doc_id):
        """Point read by id. Returns None when the document does not exist."""
        try:
            row = self._find(name, doc_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError(f"Reading {name}/{doc_id} failed") from exc
        return row.to_dict() if row else None

    def query(self, name, field, value):
        """Equality filter on a single field."""
        model, insertion = _collection(name)
        if not hasattr(model, field):
            raise DocumentStoreError(f"Unknown field '{field}' on {name}")
        try:
            rows = model.query.filter_by(**{field: value}).order_by(insertion.asc()).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError(f"Querying {name} failed") from exc
        return [row.to_dict() for row in rows]

    # -------- Writes --------

    def create(self, name, fields):
        """Insert a document. The store assigns the id and write timestamp."""
        model, _ = _collection(name)
        try:
            row = model(**fields)
        except TypeError as exc:
            raise DocumentStoreError(f"Invalid fields for {name}: {exc}") from exc
        try:
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError(f"Writing to {name} failed") from exc
        record = row.to_dict()
        self._publish(name)
        return record

    def update(self, name, doc_id, fields):
        """Set fields on an existing document."""
        model, _ = _collection(name)
        unknown = [f for f in fields if f == 'id' or not hasattr(model, f)]
        if unknown:
            raise DocumentStoreError(f"Cannot update fields {unknown} on {name}")
        try:
            row = self._find(name, doc_id)
            if row is None:
                raise DocumentStoreError(f"No document {name}/{doc_id}")
            for field, value in fields.items():
                setattr(row, field, value)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError(f"Updating {name}/{doc_id} failed") from exc
        record = row.to_dict()
        self._publish(name)
        return record

    # -------- Subscriptions --------

    def subscribe(self, name, callback, order_by=None):
        """Register a listener and push it the current snapshot straight away."""
        records = self.snapshot(name, order_by)
        subscription = Subscription(self, name, callback, order_by)
        self._subscribers[name].append(subscription)
        self._deliver(subscription, records)
        return subscription

    def subscriber_count(self, name):
        return len(self._subscribers.get(name, []))

    def _remove(self, subscription):
        listeners = self._subscribers.get(subscription.collection, [])
        if subscription in listeners:
            listeners.remove(subscription)

    def _publish(self, name):
        snapshots = {}
        for subscription in list(self._subscribers.get(name, [])):
            if not subscription.active:
                continue
            if subscription.order_by not in snapshots:
                # The write is already committed; a failed read only skips this push.
                try:
                    snapshots[subscription.order_by] = self.snapshot(name, subscription.order_by)
                except DocumentStoreError:
                    logger.exception("[FEED] Could not read %s to push it", name)
                    snapshots[subscription.order_by] = None
            if snapshots[subscription.order_by] is None:
                continue
            # Each listener gets its own list so replacing one cache never aliases another.
            self._deliver(subscription, list(snapshots[subscription.order_by]))

    def _deliver(self, subscription, records):
        try:
            subscription.callback(records)
        except Exception:
            logger.exception("[FEED] Listener on %s failed", subscription.collection)

    def _find(self, name, doc_id):
        model, _ = _collection(name)
        if isinstance(model.id.type, Integer):
            try:
                doc_id = int(doc_id)
            except (TypeError, ValueError):
                return None
        return model.query.filter_by(id=doc_id).first()


def _collection(name):
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise DocumentStoreError(f"Unknown collection '{name}'") from None
