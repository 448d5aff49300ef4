"""
Student routes: registration and lookup.
"""
from flask import Blueprint, current_app, jsonify, request

from docstore import DocumentStoreError

students_bp = Blueprint('students', __name__)


@students_bp.route('/api/students', methods=['POST'])
def register_student():
    """
    Register a student supervisors can look up.

    Expects JSON:
    {
        "id": "CSC/2023/001",
        "name": "John Doe",
        "program": "Computer Science",
        "hostel": "Hall 3",
        "year": "2"
    }
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({'error': 'No data provided'}), 400

    student_id = str(data.get('id') or '').strip()
    name = str(data.get('name') or '').strip()
    if not student_id or not name:
        return jsonify({'error': 'id and name are required'}), 400

    store = current_app.extensions['docstore']
    if store.get('students', student_id):
        return jsonify({'error': 'Student already registered'}), 409

    try:
        student = store.create('students', {
            'id': student_id,
            'name': name,
            'program': str(data.get('program') or '').strip(),
            'hostel': str(data.get('hostel') or '').strip(),
            'year': str(data.get('year') or '').strip(),
        })
    except DocumentStoreError:
        return jsonify({'error': 'Error registering student'}), 500

    return jsonify({
        'message': 'Student registered',
        'student': student
    }), 201


@students_bp.route('/api/students/<path:student_id>', methods=['GET'])
def get_student(student_id):
    """Get a specific student by matric number."""
    student = current_app.extensions['docstore'].get('students', student_id)
    if not student:
        return jsonify({'error': 'Student not found'}), 404

    return jsonify({'student': student}), 200
