"""
AutoStudio - Monitoring Routes
Activity feed and scheduler status
"""
from flask import Blueprint, request, jsonify

from autostudio.routes.auth import token_required
from autostudio.services.state import get_state
from autostudio.utils import safe_int

monitoring_bp = Blueprint('monitoring', __name__)


@monitoring_bp.route('/logs', methods=['GET'])
@token_required
def get_logs(session):
    """
    Activity feed, newest first

    GET /api/logs?limit=50
    """
    limit = safe_int(request.args.get('limit'), default=50, min_val=1, max_val=500)
    entries = get_state().activity.entries(limit)
    return jsonify({'logs': entries, 'total': len(entries)})


@monitoring_bp.route('/logs', methods=['DELETE'])
@token_required
def clear_logs(session):
    """Wipe the activity history"""
    get_state().activity.clear()
    return jsonify({'success': True})


@monitoring_bp.route('/scheduler', methods=['GET'])
@token_required
def scheduler_status(session):
    """Scheduler state and registered jobs"""
    return jsonify(get_state().scheduler.get_status())
