"""
SQLAlchemy models for the Station Hub.

Each table backs one document-store collection:
- Station: a physical station a student can occupy with a session key
- Chat: messages between the admin and supervisors
- Activity: audit trail of user actions
- Student: students supervisors can look up and seat
- Admin / Supervisor: role directories keyed by email
- Account: login credentials checked by the identity provider
"""
import uuid
from datetime import datetime

from database import db

ROLES = ('admin', 'supervisor')

ACTIONS = (
    'login',
    'logout',
    'chat_message_sent',
    'student_lookup',
    'station_assign',
    'report_download',
)


def _new_id():
    return uuid.uuid4().hex[:20]


def _iso(value):
    return value.isoformat() if value else None


class Station(db.Model):
    """A station that can be occupied by one student at a time."""
    __tablename__ = 'stations'

    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(64), unique=True, nullable=False, default=_new_id)
    name = db.Column(db.String(100), nullable=False)
    is_occupied = db.Column(db.Boolean, default=False, nullable=False)
    occupied_by = db.Column(db.String(50), nullable=True)  # student id
    key = db.Column(db.String(20), nullable=True)  # session key

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'is_occupied': bool(self.is_occupied),
            'occupied_by': self.occupied_by,
            'key': self.key,
        }


class Chat(db.Model):
    """A chat message sent by the admin or a supervisor."""
    __tablename__ = 'chats'

    id = db.Column(db.Integer, primary_key=True)
    sender = db.Column(db.String(20), nullable=False)  # admin / supervisor
    message = db.Column(db.Text, nullable=False)
    time = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': str(self.id),
            'sender': self.sender,
            'message': self.message,
            'time': _iso(self.time),
        }


class Activity(db.Model):
    """A single audit trail entry."""
    __tablename__ = 'activities'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False)
    role = db.Column(db.String(20), nullable=False)
    action = db.Column(db.String(40), nullable=False)
    details = db.Column(db.Text, default='')
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': str(self.id),
            'user_id': self.user_id,
            'role': self.role,
            'action': self.action,
            'details': self.details,
            'timestamp': _iso(self.timestamp),
        }


class Student(db.Model):
    """A student, keyed by matric number."""
    __tablename__ = 'students'

    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(150), nullable=False)
    program = db.Column(db.String(150), default='')
    hostel = db.Column(db.String(100), default='')
    year = db.Column(db.String(20), default='')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'program': self.program,
            'hostel': self.hostel,
            'year': self.year,
        }


class Admin(db.Model):
    """Directory entry granting the admin role to an email."""
    __tablename__ = 'admins'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(150), default='')

    def to_dict(self):
        return {'id': str(self.id), 'email': self.email, 'name': self.name}


class Supervisor(db.Model):
    """Directory entry granting the supervisor role to an email."""
    __tablename__ = 'supervisors'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(150), default='')

    def to_dict(self):
        return {'id': str(self.id), 'email': self.email, 'name': self.name}


class Account(db.Model):
    """Login credentials. Holds no role; roles come from the directories."""
    __tablename__ = 'accounts'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
