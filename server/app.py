"""
Station Hub: Main Server Application

Flask + Socket.IO server behind the admin and supervisor dashboards.
Run with: python app.py
"""
import logging
import os
import sys

# Add server directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from commands import register_commands
from config import Config
from database import init_db
from docstore import DocumentStore

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Build the Flask app with its database, document store and Socket.IO server."""
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Enable CORS for LAN access
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    init_db(app)
    app.extensions['docstore'] = DocumentStore()

    socketio = SocketIO(
        app,
        cors_allowed_origins="*",
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
    )

    from routes.stations import stations_bp
    from routes.students import students_bp

    app.register_blueprint(stations_bp)
    app.register_blueprint(students_bp)

    from sockets.events import register_socket_events
    register_socket_events(socketio)

    register_commands(app)

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return {'status': 'ok', 'service': 'station-hub'}, 200

    return app


def main():
    app = create_app()
    socketio = app.extensions['socketio']
    port = app.config['PORT']

    logger.info("Station Hub listening on http://0.0.0.0:%s", port)
    logger.info("Health check: http://0.0.0.0:%s/api/health", port)

    socketio.run(app, host='0.0.0.0', port=port)


if __name__ == '__main__':
    main()
