"""
AutoStudio - Member Routes
Admin member management and per-member Gemini keys
"""
from flask import Blueprint, request, jsonify
import logging

from autostudio.routes.auth import token_required, admin_required
from autostudio.services.state import get_state
from autostudio.utils import clean_str

logger = logging.getLogger(__name__)

members_bp = Blueprint('members', __name__)


@members_bp.route('', methods=['GET'])
@admin_required
def list_members(session):
    """
    List all members

    GET /api/members
    """
    members = get_state().members.list()
    return jsonify({
        'members': [m.to_dict() for m in members],
        'total': len(members)
    })


@members_bp.route('', methods=['POST'])
@admin_required
def add_member(session):
    """
    Add a member

    POST /api/members
    {
        "name": "Jane",
        "email": "jane@example.com",
        "role": "Member"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    member = state.members.add(
        clean_str(data.get('name'), 200),
        clean_str(data.get('email'), 320),
        data.get('role') or 'Member'
    )
    state.activity.success(f"Member {member.name} added.")
    return jsonify({'success': True, 'member': member.to_dict()}), 201


@members_bp.route('/<member_id>', methods=['DELETE'])
@admin_required
def delete_member(session, member_id):
    """
    Delete a member (the master admin cannot be deleted)

    DELETE /api/members/<id>
    """
    if not get_state().members.delete(member_id):
        return jsonify({'error': 'This member is protected and cannot be deleted'}), 403
    return jsonify({'success': True})


@members_bp.route('/<member_id>/toggle', methods=['POST'])
@admin_required
def toggle_member(session, member_id):
    """
    Suspend or re-activate a member

    POST /api/members/<id>/toggle
    """
    store = get_state().members
    member = store.toggle_status(member_id)
    if member is None:
        if store.get(member_id):
            return jsonify({'error': 'This member is protected and cannot be suspended'}), 403
        return jsonify({'error': 'Member not found'}), 404
    return jsonify({'success': True, 'member': member.to_dict()})


@members_bp.route('/<member_id>/magic-link', methods=['GET'])
@admin_required
def magic_link(session, member_id):
    """
    Shareable one-click login URL

    GET /api/members/<id>/magic-link?base=https://studio.example.com/
    """
    member = get_state().members.get(member_id)
    if not member:
        return jsonify({'error': 'Member not found'}), 404

    base = request.args.get('base') or request.host_url
    return jsonify({'link': f"{base}?key={member.access_key}"})


@members_bp.route('/me/gemini-key', methods=['PUT'])
@token_required
def update_gemini_key(session):
    """
    Save the caller's personal Gemini API key

    PUT /api/members/me/gemini-key
    {
        "apiKey": "AIza..."
    }
    """
    state = get_state()
    if session.is_anonymous:
        return jsonify({'error': 'Only members can store a personal API key'}), 400

    data = request.get_json(silent=True) or {}
    if not state.members.set_api_key(session.member_id, clean_str(data.get('apiKey'), 200)):
        state.activity.error("Failed to update Gemini API Key.")
        return jsonify({'error': 'Member not found'}), 404

    state.activity.success("Gemini API Key updated successfully.")
    return jsonify({'success': True})
