"""
Flask routes for the Similar Image Scanner.

JSON endpoints to start a scan in the background, poll its progress,
cancel it, and fetch its result.
"""

from __future__ import annotations

import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from ..config import DEFAULT_WORKERS
from ..jobs import ScanRegistry
from ..models import ScanConfig
from ..utils import validators

# Create blueprint for routes
api = Blueprint('api', __name__)

# Module logger
_logger = logging.getLogger(__name__)

REGISTRY_KEY = 'simscan.registry'


def _registry() -> ScanRegistry:
    return current_app.extensions[REGISTRY_KEY]


def _job_or_404(scan_id: str):
    job = _registry().get(scan_id)
    if job is None:
        return None, (jsonify({'error': f'Unknown scan: {scan_id}'}), 404)
    return job, None


@api.route('/api/ping')
def api_ping():
    """Simple endpoint for connection monitoring."""
    return jsonify({'status': 'ok', 'time': datetime.now().isoformat()})


@api.route('/api/scan', methods=['POST'])
def api_scan():
    """Start a new scan in the background."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Request body required'}), 400
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    workers = data.get('workers', current_app.config.get('SIMSCAN_WORKERS', DEFAULT_WORKERS))
    is_valid, error = validators.validate_workers(workers)
    if not is_valid:
        return jsonify({'error': error}), 400

    try:
        config = ScanConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid scan configuration: {e}'}), 400

    is_valid, error = config.validate()
    if not is_valid:
        return jsonify({'error': error}), 400

    job = _registry().start(config, workers=workers)
    return jsonify({'status': 'started', 'scanId': job.id}), 202


@api.route('/api/scans')
def api_scans():
    """List all known scans."""
    return jsonify({'scans': [job.to_status_dict() for job in _registry().jobs()]})


@api.route('/api/scan/<scan_id>')
def api_scan_status(scan_id: str):
    """Return the latest progress of a scan."""
    job, error_response = _job_or_404(scan_id)
    if error_response:
        return error_response
    return jsonify(job.to_status_dict())


@api.route('/api/scan/<scan_id>/result')
def api_scan_result(scan_id: str):
    """Return the result of a completed scan."""
    job, error_response = _job_or_404(scan_id)
    if error_response:
        return error_response

    if not job.done:
        return jsonify({'error': 'Scan still running', 'progress': job.progress.to_dict()}), 409
    if job.result is None:
        return jsonify({
            'error': job.error or 'Scan was cancelled',
            'status': job.status.value,
        }), 409
    return jsonify(job.result.to_dict())


@api.route('/api/scan/<scan_id>/cancel', methods=['POST'])
def api_cancel(scan_id: str):
    """Cancel a running scan."""
    job, error_response = _job_or_404(scan_id)
    if error_response:
        return error_response

    if job.cancel():
        _logger.info(f"Cancel requested for scan {scan_id}")
        return jsonify({'status': 'cancel_requested'})
    return jsonify({'status': 'no_scan_running'})


@api.route('/api/scan/<scan_id>', methods=['DELETE'])
def api_forget(scan_id: str):
    """Cancel a scan if needed and drop it from the registry."""
    job = _registry().remove(scan_id)
    if job is None:
        return jsonify({'error': f'Unknown scan: {scan_id}'}), 404
    job.cancel()
    return jsonify({'status': 'removed'})


__all__ = ['api', 'REGISTRY_KEY']
