"""
Station routes: list, create and release stations.

Writes go through the document store so live dashboards get the new
stations snapshot immediately.
"""
from flask import Blueprint, current_app, jsonify, request

from docstore import DocumentStoreError

stations_bp = Blueprint('stations', __name__)


def _store():
    return current_app.extensions['docstore']


@stations_bp.route('/api/stations', methods=['GET'])
def list_stations():
    """Get all stations in insertion order."""
    stations = _store().snapshot('stations')
    return jsonify({
        'stations': stations,
        'total': len(stations),
        'occupied': sum(1 for s in stations if s['is_occupied']),
    }), 200


@stations_bp.route('/api/stations', methods=['POST'])
def create_station():
    """
    Add a new, unoccupied station.

    Expects JSON:
    {
        "name": "Station 1",
        "id": "S1"  (optional)
    }
    """
    data = request.get_json(silent=True)

    if not data:
        return jsonify({'error': 'No data provided'}), 400

    name = str(data.get('name') or '').strip()
    station_id = str(data.get('id') or '').strip()
    if not name:
        return jsonify({'error': 'name is required'}), 400

    if station_id and _store().get('stations', station_id):
        return jsonify({'error': 'A station with this id already exists'}), 409

    fields = {'name': name, 'is_occupied': False}
    if station_id:
        fields['id'] = station_id

    try:
        station = _store().create('stations', fields)
    except DocumentStoreError:
        return jsonify({'error': 'Error creating station'}), 500
    return jsonify({
        'message': 'Station created',
        'station': station
    }), 201


@stations_bp.route('/api/stations/<station_id>/release', methods=['POST'])
def release_station(station_id):
    """Free a station. Occupant and key are cleared together."""
    store = _store()
    station = store.get('stations', station_id)
    if not station:
        return jsonify({'error': 'Station not found'}), 404

    if not station['is_occupied']:
        return jsonify({'error': 'Station is not occupied'}), 400

    try:
        station = store.update('stations', station_id, {
            'is_occupied': False,
            'occupied_by': None,
            'key': None,
        })
    except DocumentStoreError:
        return jsonify({'error': 'Error releasing station'}), 500

    return jsonify({
        'message': 'Station released',
        'station': station
    }), 200
