"""
WebSocket event handlers for the live dashboards.

Every connection gets a DashboardClient. Feed pushes, alerts and toasts
for that client are emitted to its sid only.
"""
import logging

from flask import current_app, request
from flask_socketio import emit

from sync.client import DashboardClient

logger = logging.getLogger(__name__)


def register_socket_events(socketio):
    """Register all WebSocket event handlers with the SocketIO instance."""
    clients = {}

    def client_for(sid):
        client = clients.get(sid)
        if client is None:
            store = current_app.extensions['docstore']

            def publish(event, payload):
                socketio.emit(event, payload, to=sid)

            client = clients[sid] = DashboardClient(store, publish)
        return client

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        client_for(request.sid)
        logger.info("[WS] Client connected: %s", request.sid)
        emit('connected', {'message': 'Connected to station hub', 'sid': request.sid})
        emit('health', {'status': 'OFFLINE'})
        emit('screen', {'screen': 'login-screen'})

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Tear down the dashboard session of a dropped client."""
        client = clients.pop(request.sid, None)
        if client is not None:
            client.close()
        logger.info("[WS] Client disconnected: %s", request.sid)

    @socketio.on('login')
    def handle_login(data):
        """
        Data: { "email": "...", "password": "..." }
        """
        data = data or {}
        result = client_for(request.sid).login(data.get('email', ''), data.get('password', ''))
        emit('login_response', result)

    @socketio.on('logout')
    def handle_logout(data=None):
        emit('logout_response', client_for(request.sid).logout())

    @socketio.on('send_chat')
    def handle_send_chat(data):
        """Data: { "message": "..." }"""
        data = data or {}
        result = client_for(request.sid).perform('send_chat', data.get('message', ''))
        emit('send_chat_response', result)

    @socketio.on('lookup_student')
    def handle_lookup_student(data):
        """Data: { "student_id": "..." }"""
        data = data or {}
        result = client_for(request.sid).perform('lookup_student', data.get('student_id', ''))
        emit('lookup_student_response', result)

    @socketio.on('assign_station')
    def handle_assign_station(data):
        """Data: { "student_id": "...", "station_id": "..." }"""
        data = data or {}
        result = client_for(request.sid).perform(
            'assign_station', data.get('student_id', ''), data.get('station_id', '')
        )
        emit('assign_station_response', result)

    @socketio.on('download_report')
    def handle_download_report(data):
        """Data: { "format": "pdf" | "docx" }"""
        data = data or {}
        result = client_for(request.sid).perform('download_report', data.get('format', ''))
        emit('download_report_response', result)

    return socketio
