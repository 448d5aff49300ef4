"""
Chart series derived from the activity feed.
"""
from collections import Counter
from datetime import datetime


def _assignment_times(activities):
    times = []
    for activity in activities:
        if activity.get('action') != 'station_assign' or not activity.get('timestamp'):
            continue
        stamp = activity['timestamp']
        times.append(datetime.fromisoformat(stamp) if isinstance(stamp, str) else stamp)
    return times


def daily_assignments(activities):
    """Station assignments per calendar date, dates ascending."""
    counts = Counter(t.date().isoformat() for t in _assignment_times(activities))
    labels = sorted(counts)
    return {'labels': labels, 'values': [counts[label] for label in labels]}


def peak_hours(activities):
    """Station assignments per hour of day, all 24 hours."""
    counts = Counter(t.hour for t in _assignment_times(activities))
    return {
        'labels': [f"{hour}:00" for hour in range(24)],
        'values': [counts.get(hour, 0) for hour in range(24)],
    }


def build_charts(activities):
    return {
        'daily_assignments': daily_assignments(activities),
        'peak_hours': peak_hours(activities),
    }
