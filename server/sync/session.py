"""
Per-login dashboard state.

A DashboardSession is built when a user logs in and closed when they log
out. It follows the stations, chats and activities feeds, keeps the local
caches, and turns feed growth into alerts for the presentation layer.

Everything it shows the user goes through `publish(event, payload)`.
"""
import logging

from sync.audit import AuditLogger
from sync.cache import CacheStore
from sync.delta import DeltaDetector
from sync.notifications import ASSIGNMENT_ALERT, CHAT_ALERTS, NotificationEngine
from utils.charts import build_charts

logger = logging.getLogger(__name__)

FEED_ORDERING = {
    'stations': None,
    'chats': ('time', 'asc'),
    'activities': ('timestamp', 'desc'),
}


class DashboardSession:
    def __init__(self, user, store, publish, audit=None):
        self.user = user
        self.store = store
        self.publish = publish
        self.audit = audit or AuditLogger(store)
        self.cache = CacheStore()
        self.delta = DeltaDetector(self.cache)
        self.notifications = NotificationEngine(user.role)
        self._subscriptions = []
        self.closed = False

    @property
    def role(self):
        return self.user.role

    def start(self):
        handlers = {
            'stations': self.on_stations,
            'chats': self.on_chats,
            'activities': self.on_activities,
        }
        for name, handler in handlers.items():
            self._subscriptions.append(
                self.store.subscribe(name, handler, order_by=FEED_ORDERING[name])
            )
        logger.info("[SYNC] %s session started for %s", self.role, self.user.id)

    def close(self):
        if self.closed:
            return
        self.closed = True
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []
        self.cache.clear()
        self.notifications.reset()
        logger.info("[SYNC] %s session closed for %s", self.role, self.user.id)

    def log(self, action, details=''):
        return self.audit.record(self.user.id, self.role, action, details)

    # -------- Feed handlers --------

    def on_stations(self, records):
        if self.closed:
            return
        self.cache.replace('stations', records)
        self.publish('stations', self.cache.get('stations'))

    def on_chats(self, records):
        if self.closed:
            return
        grown = self.delta.has_grown('chats', len(records))
        self.cache.replace('chats', records)
        self.publish('chats', self.cache.get('chats'))
        if grown:
            self.check_notifications()

    def on_activities(self, records):
        if self.closed:
            return
        grown = self.delta.has_grown('activities', len(records))
        self.cache.replace('activities', records)
        activities = self.cache.get('activities')
        self.publish('activities', activities)
        if self.role == 'admin':
            self.publish('charts', build_charts(activities))
        if grown:
            self.check_notifications()

    # -------- Alerts --------

    def check_notifications(self):
        result = self.notifications.evaluate(self.cache.get('chats'), self.cache.get('activities'))
        if result.chat_alert:
            self.publish('toast', {'message': CHAT_ALERTS[self.role], 'is_error': False})
        self.publish('chat_badge', {'visible': result.chat_alert})
        if result.activity_alert:
            self.publish('toast', {'message': ASSIGNMENT_ALERT, 'is_error': False})
        return result
