"""
Local copies of the remote collections a dashboard follows.
"""

FEEDS = ('stations', 'chats', 'activities')


class CacheStore:
    """
    Latest snapshot of each followed collection.

    Every push replaces the stored sequence wholesale; nothing is merged
    with what was there before.
    """

    def __init__(self, collections=FEEDS):
        self._collections = tuple(collections)
        self._records = {name: [] for name in self._collections}

    def replace(self, name, records):
        if name not in self._records:
            raise KeyError(f"Unknown collection '{name}'")
        self._records[name] = list(records)

    def get(self, name):
        return list(self._records[name])

    def count(self, name):
        return len(self._records[name])

    def find(self, name, record_id):
        for record in self._records[name]:
            if record.get('id') == record_id:
                return record
        return None

    def clear(self):
        self._records = {name: [] for name in self._collections}
