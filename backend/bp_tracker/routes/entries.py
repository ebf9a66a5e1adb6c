"""
Readings API routes.
"""
import logging
from flask import Blueprint, Response, current_app, request, jsonify
from bp_tracker import get_store
from bp_tracker.storage.csv_store import write_readings_csv
from bp_tracker.utils.audit_logger import audit_log, audited
from bp_tracker.utils.classification import classify_bp
from bp_tracker.utils.statistics import summarize
from bp_tracker.utils.validators import validate_reading

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def _entry_payload(reading):
    data = reading.to_dict()
    data['category'] = classify_bp(reading.systolic, reading.diastolic)
    return data


def _not_found():
    return jsonify({'success': False, 'error': 'Entry not found'}), 404


@api_bp.route('/entries', methods=['GET'])
def list_entries():
    """Return all stored entries."""
    readings = get_store().list_all()
    audit_log('READ', 'entries_list', details={'count': len(readings)})
    return jsonify({'success': True, 'data': [_entry_payload(r) for r in readings]}), 200


@api_bp.route('/entries/<int:entry_id>', methods=['GET'])
@audited('READ', 'entry')
def get_entry(entry_id):
    reading = get_store().get_by_id(entry_id)
    if reading is None:
        return _not_found()
    return jsonify({'success': True, 'data': _entry_payload(reading)}), 200


@api_bp.route('/entries', methods=['POST'])
def create_entry():
    """Validate and store a new entry."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body is required'}), 400

    result = validate_reading(data, current_app.config['ENTRY_DEFAULTS'])
    if not result.ok:
        rejection = result.rejection
        logger.info(f'Rejected entry: {rejection.reason.value} ({rejection.field})')
        return jsonify({
            'success': False,
            'error': rejection.message,
            'reason': rejection.reason.value,
        }), 400

    created = get_store().create(result.reading)
    audit_log('CREATE', 'entry', resource_id=str(created.id))
    return jsonify({'success': True, 'data': _entry_payload(created)}), 201


@api_bp.route('/entries/<int:entry_id>', methods=['DELETE'])
def delete_entry(entry_id):
    deleted = get_store().delete_by_id(entry_id)
    if deleted == 0:
        return _not_found()
    audit_log('DELETE', 'entry', resource_id=str(entry_id))
    return jsonify({'success': True, 'message': 'Entry deleted'}), 200


@api_bp.route('/stats', methods=['GET'])
@audited('READ', 'stats')
def get_stats():
    """Summary statistics over every stored entry."""
    summary = summarize(get_store().list_all())
    if summary is None:
        return jsonify({'success': True, 'data': None, 'message': 'No data available yet'}), 200
    return jsonify({'success': True, 'data': summary.to_dict()}), 200


@api_bp.route('/export', methods=['GET'])
def export_entries():
    """Download entries in the CSV data file layout."""
    readings = get_store().list_all()
    audit_log('EXPORT', 'entries_csv', details={'count': len(readings)})
    output = write_readings_csv(readings)
    return Response(
        output.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=bp_data.csv'},
    )
