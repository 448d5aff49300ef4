"""
Growth detection between consecutive snapshots.

Only counts are compared. A push that removes one record and adds another
reports no growth, and shrinking is not reported at all.
"""


def has_grown(previous_count, new_count):
    return new_count > previous_count


class DeltaDetector:
    """Compares an incoming snapshot size with what the cache currently holds."""

    def __init__(self, cache):
        self.cache = cache

    def has_grown(self, name, new_count):
        """Call before replacing the cache, while it still holds the previous push."""
        return has_grown(self.cache.count(name), new_count)
