from utils.charts import build_charts, daily_assignments, peak_hours


ACTIVITIES = [
    {'action': 'station_assign', 'timestamp': '2024-03-02T14:05:00'},
    {'action': 'station_assign', 'timestamp': '2024-03-01T09:15:00'},
    {'action': 'station_assign', 'timestamp': '2024-03-01T09:45:00'},
    {'action': 'login', 'timestamp': '2024-03-01T09:00:00'},
    {'action': 'station_assign', 'timestamp': None},
]


def test_daily_assignments_sorted_by_date():
    assert daily_assignments(ACTIVITIES) == {
        'labels': ['2024-03-01', '2024-03-02'],
        'values': [2, 1],
    }


def test_peak_hours_cover_whole_day():
    hours = peak_hours(ACTIVITIES)

    assert len(hours['labels']) == 24
    assert hours['labels'][0] == '0:00'
    assert hours['values'][9] == 2
    assert hours['values'][14] == 1
    assert sum(hours['values']) == 3


def test_empty_feed():
    charts = build_charts([])

    assert charts['daily_assignments'] == {'labels': [], 'values': []}
    assert charts['peak_hours']['values'] == [0] * 24
