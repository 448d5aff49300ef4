"""
User-triggered dashboard actions.

Each action returns a result dict shaped like the API responses:
    {'success': True, 'message': ...}  or  {'success': False, 'error': ...}
Failures of the primary write are reported in the result. Audit entries
are written only after the primary action succeeded, and their failure
never changes the result.
"""
import logging

from flask import current_app

from docstore import DocumentStoreError
from utils.qr import key_qr_data_uri
from utils.security import generate_session_key

logger = logging.getLogger(__name__)

REPORT_FORMATS = {
    'pdf': 'PDF',
    'docx': 'Word',
}


def _ok(message, **extra):
    return {'success': True, 'message': message, **extra}


def _fail(error, **extra):
    return {'success': False, 'error': error, **extra}


def send_chat(session, message):
    """Post a chat message as the session's role."""
    message = str(message or '').strip()
    if not message:
        return _fail('Message cannot be empty.')

    try:
        chat = session.store.create('chats', {'sender': session.role, 'message': message})
    except DocumentStoreError:
        logger.exception("[CHAT] Sending message failed for %s", session.user.id)
        return _fail('Error sending message.')

    counterpart = 'supervisor' if session.role == 'admin' else 'admin'
    session.log('chat_message_sent', f'Sent a message to {counterpart}')
    return _ok('Message sent.', chat=chat)


def lookup_student(session, student_id):
    """
    Fetch a student's details. A miss is a normal outcome, not a failure:
    the result succeeds with `found: False` and the details panel is hidden.
    """
    if session.role != 'supervisor':
        return _fail('Only supervisors can look up students.')

    student_id = str(student_id or '').strip()
    if not student_id:
        return _fail('Please enter a student ID.', found=False)

    try:
        student = session.store.get('students', student_id)
    except DocumentStoreError:
        logger.exception("[LOOKUP] Reading student %s failed", student_id)
        return _fail('Error looking up student.', found=False)

    if student is None:
        return _ok('Student not found!', found=False)

    session.log('student_lookup', f'Looked up student ID: {student_id}')
    return _ok('Student found.', found=True, student=student)


def assign_station(session, student_id, station_id):
    """
    Seat a student at a station and hand out a fresh session key.

    Occupancy is checked against the session's stations cache, so a
    station already shown as occupied there is refused without a write.
    """
    if session.role != 'supervisor':
        return _fail('Only supervisors can assign stations.')

    student_id = str(student_id or '').strip()
    station_id = str(station_id or '').strip()
    if not student_id or not station_id:
        return _fail('Please fetch student details and select a station.')

    station = session.cache.find('stations', station_id)
    if station and station.get('is_occupied'):
        return _fail('This station is already occupied.')

    key = generate_session_key(current_app.config.get('SESSION_KEY_LENGTH', 6))
    try:
        updated = session.store.update('stations', station_id, {
            'is_occupied': True,
            'occupied_by': student_id,
            'key': key,
        })
    except DocumentStoreError:
        logger.exception("[ASSIGN] Assigning station %s failed", station_id)
        return _fail('Error assigning station.')

    station_name = (station or updated).get('name')
    session.log(
        'station_assign',
        f'Assigned station {station_name} to student {student_id} with key {key}',
    )
    return _ok(
        f'Session key generated for student {student_id}.',
        key=key,
        qr_code=key_qr_data_uri(key),
        station=updated,
    )


def download_report(session, fmt):
    """Report export is not available yet; the attempt is still audited."""
    if session.role != 'admin':
        return _fail('Only the admin can download reports.')

    label = REPORT_FORMATS.get(str(fmt or '').lower())
    if label is None:
        return _fail(f"Unsupported report format: {fmt}")

    session.log('report_download', f'Attempted to download {label} report')
    return _ok(f'{label} report download is not yet implemented.')
