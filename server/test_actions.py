from docstore import DocumentStoreError
from sync import actions
from sync.audit import AuditLogger
from sync.session import DashboardSession


class AuditOutageStore:
    """Real store whose activity writes fail."""

    def __init__(self, store):
        self.store = store

    def create(self, name, fields):
        if name == 'activities':
            raise DocumentStoreError('activities unavailable')
        return self.store.create(name, fields)

    def __getattr__(self, attr):
        return getattr(self.store, attr)


class RecordingStore:
    """Real store that remembers every write it is asked to make."""

    def __init__(self, store):
        self.store = store
        self.writes = []

    def create(self, name, fields):
        self.writes.append(('create', name))
        return self.store.create(name, fields)

    def update(self, name, doc_id, fields):
        self.writes.append(('update', name, doc_id))
        return self.store.update(name, doc_id, fields)

    def __getattr__(self, attr):
        return getattr(self.store, attr)


def audit_actions(store):
    return [a['action'] for a in store.snapshot('activities')]


def test_assign_refused_when_cache_shows_occupied(store, supervisor_user, published):
    # the database still says free; the session's cache already knows better
    store.create('stations', {'id': 'S1', 'name': 'Station 1'})
    recording = RecordingStore(store)
    session = DashboardSession(supervisor_user, recording, published)
    session.cache.replace('stations', [{'id': 'S1', 'is_occupied': True}])

    result = actions.assign_station(session, 'ST1', 'S1')

    assert result == {'success': False, 'error': 'This station is already occupied.'}
    assert recording.writes == []
    assert store.get('stations', 'S1')['key'] is None


def test_assign_station_seats_student(store, supervisor_user, published):
    store.create('stations', {'id': 'S1', 'name': 'Station 1'})
    session = DashboardSession(supervisor_user, store, published)
    session.start()

    result = actions.assign_station(session, 'ST1', 'S1')

    assert result['success'] is True
    assert result['message'] == 'Session key generated for student ST1.'
    key = result['key']
    assert len(key) == 6 and key.isalnum() and key.upper() == key
    assert result['qr_code'].startswith('data:image/png;base64,')

    station = store.get('stations', 'S1')
    assert (station['is_occupied'], station['occupied_by'], station['key']) == (True, 'ST1', key)

    entry = store.snapshot('activities')[0]
    assert entry['action'] == 'station_assign'
    assert entry['details'] == f'Assigned station Station 1 to student ST1 with key {key}'

    # the feed has refreshed the cache, so a second attempt is refused
    assert actions.assign_station(session, 'ST2', 'S1')['error'] == 'This station is already occupied.'


def test_assign_succeeds_when_audit_fails(store, supervisor_user, published):
    store.create('stations', {'id': 'S1', 'name': 'Station 1'})
    session = DashboardSession(supervisor_user, AuditOutageStore(store), published)

    result = actions.assign_station(session, 'ST1', 'S1')

    assert result['success'] is True
    assert store.get('stations', 'S1')['is_occupied'] is True
    assert audit_actions(store) == []


def test_assign_requires_student_and_station(store, supervisor_user, published):
    session = DashboardSession(supervisor_user, store, published)

    result = actions.assign_station(session, '', 'S1')

    assert result['error'] == 'Please fetch student details and select a station.'


def test_assign_unknown_station_reports_error(store, supervisor_user, published):
    session = DashboardSession(supervisor_user, store, published)

    result = actions.assign_station(session, 'ST1', 'S404')

    assert result == {'success': False, 'error': 'Error assigning station.'}
    assert audit_actions(store) == []


def test_admin_cannot_assign(store, admin_user, published):
    session = DashboardSession(admin_user, store, published)

    assert actions.assign_station(session, 'ST1', 'S1')['success'] is False


def test_lookup_found_and_missing(store, supervisor_user, published):
    store.create('students', {'id': 'CSC/2023/001', 'name': 'John Doe', 'program': 'CS',
                              'hostel': 'Hall 3', 'year': '2'})
    session = DashboardSession(supervisor_user, store, published)

    found = actions.lookup_student(session, 'CSC/2023/001')
    missing = actions.lookup_student(session, 'CSC/2023/999')

    assert found['found'] is True
    assert found['student']['hostel'] == 'Hall 3'
    assert missing == {'success': True, 'message': 'Student not found!', 'found': False}
    details = [a['details'] for a in store.snapshot('activities')]
    assert details == ['Looked up student ID: CSC/2023/001']


def test_send_chat_uses_session_role(store, supervisor_user, published):
    session = DashboardSession(supervisor_user, store, published)

    result = actions.send_chat(session, '  Station 4 needs a reboot  ')

    assert result['success'] is True
    assert store.snapshot('chats')[0]['sender'] == 'supervisor'
    assert store.snapshot('chats')[0]['message'] == 'Station 4 needs a reboot'
    assert store.snapshot('activities')[0]['details'] == 'Sent a message to admin'


def test_send_blank_chat_rejected(store, admin_user, published):
    session = DashboardSession(admin_user, store, published)

    assert actions.send_chat(session, '   ')['success'] is False
    assert store.snapshot('chats') == []


def test_report_download_not_implemented_but_audited(store, admin_user, published):
    session = DashboardSession(admin_user, store, published)

    pdf = actions.download_report(session, 'pdf')
    docx = actions.download_report(session, 'DOCX')

    assert pdf['message'] == 'PDF report download is not yet implemented.'
    assert docx['message'] == 'Word report download is not yet implemented.'
    assert audit_actions(store) == ['report_download', 'report_download']
    assert actions.download_report(session, 'csv')['success'] is False


def test_audit_logger_swallows_store_failures(store):
    audit = AuditLogger(AuditOutageStore(store))

    assert audit.record('u1', 'admin', 'login', 'Admin logged in successfully') is None


def test_audit_logger_skips_anonymous_actor(store):
    assert AuditLogger(store).record(None, 'admin', 'logout') is None
    assert audit_actions(store) == []


def test_numeric_ids_are_accepted(store, supervisor_user, published):
    store.create('students', {'id': '12345', 'name': 'Jane Roe'})
    store.create('stations', {'id': '7', 'name': 'Station 7'})
    session = DashboardSession(supervisor_user, store, published)

    lookup = actions.lookup_student(session, 12345)
    assigned = actions.assign_station(session, 12345, 7)

    assert lookup['student']['name'] == 'Jane Roe'
    assert assigned['success'] is True
    assert store.get('stations', '7')['occupied_by'] == '12345'


def test_non_text_chat_and_report_format(store, admin_user, published):
    session = DashboardSession(admin_user, store, published)

    assert actions.send_chat(session, 42)['success'] is True
    assert store.snapshot('chats')[0]['message'] == '42'
    assert actions.download_report(session, 7)['success'] is False
