"""
AutoStudio - Access Routes
Private-mode access keys, magic links, the admin gate and session tokens
"""
from flask import Blueprint, request, jsonify, current_app
from functools import wraps
from datetime import datetime
from typing import Optional
import jwt
import logging

from autostudio.models.member import Member
from autostudio.services.state import get_state

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


class Session:
    """Caller identity decoded from a session token"""

    def __init__(self, member: Optional[Member] = None, is_admin: bool = False):
        self.member = member
        self.is_admin = is_admin

    @property
    def member_id(self) -> Optional[str]:
        return self.member.id if self.member else None

    @property
    def is_anonymous(self) -> bool:
        return self.member is None

    def to_dict(self) -> dict:
        return {
            'anonymous': self.is_anonymous,
            'is_admin': self.is_admin,
            'member': self.member.to_dict(include_sensitive=False) if self.member else None
        }


def generate_token(member: Optional[Member] = None, is_admin: bool = False) -> str:
    """Generate JWT session token; member None means an anonymous public-mode session"""
    payload = {
        'member_id': member.id if member else None,
        'admin': bool(is_admin),
        'exp': datetime.utcnow() + current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm='HS256'
    )


def token_required(f):
    """Decorator to require valid JWT session token"""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None

        if 'Authorization' in request.headers:
            auth_header = request.headers['Authorization']
            if auth_header.startswith('Bearer '):
                token = auth_header.split(' ')[1]

        if not token:
            return jsonify({'error': 'Token is missing'}), 401

        try:
            payload = jwt.decode(
                token,
                current_app.config['JWT_SECRET_KEY'],
                algorithms=['HS256']
            )
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except jwt.InvalidTokenError:
            return jsonify({'error': 'Invalid token'}), 401

        state = get_state()
        is_admin = bool(payload.get('admin'))
        member = None
        member_id = payload.get('member_id')
        if member_id:
            member = state.members.get(member_id)
            if not member:
                return jsonify({'error': 'Member not found'}), 401
            if not member.is_active:
                return jsonify({'error': 'Account suspended'}), 401
        elif not is_admin and state.system_config.is_private_mode:
            # Anonymous sessions were granted while private mode was off
            return jsonify({'error': 'Private mode is enabled. Access key required.'}), 401

        return f(Session(member, is_admin), *args, **kwargs)

    return decorated


def admin_required(f):
    """Decorator to require an admin-scoped session"""
    @wraps(f)
    @token_required
    def decorated(session, *args, **kwargs):
        if not session.is_admin:
            return jsonify({'error': 'Admin access required'}), 403
        return f(session, *args, **kwargs)
    return decorated


def request_api_key(session: Session) -> Optional[str]:
    """Gemini key for this request: X-Gemini-Key header, then the member's own key"""
    return get_state().resolve_api_key(request.headers.get('X-Gemini-Key'), session.member)


def _grant(member: Optional[Member], message: str = None):
    state = get_state()
    if member:
        state.members.touch(member.id)
    if message:
        state.activity.success(message)
    session = Session(member, is_admin=bool(member and member.is_admin))
    return jsonify({
        'success': True,
        'token': generate_token(member, session.is_admin),
        'session': session.to_dict()
    })


@auth_bp.route('/access', methods=['POST'])
def access():
    """
    Exchange an access key for a session

    POST /api/auth/access
    {
        "accessKey": "K3Y..."
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    if not state.system_config.is_private_mode:
        return _grant(None)

    member = state.members.find_by_access_key(str(data.get('accessKey') or '').strip())
    if not member:
        logger.warning("Access denied: invalid or suspended key")
        return jsonify({'error': 'Invalid Access Key or Account Suspended.'}), 401

    return _grant(member, f"Access granted to {member.name} ({member.role.value})")


@auth_bp.route('/magic', methods=['GET'])
def magic_link():
    """
    Magic link login

    GET /api/auth/magic?key=K3Y...
    """
    key = request.args.get('key', '').strip()
    member = get_state().members.find_by_access_key(key)
    if not member:
        return jsonify({'error': 'Invalid Access Key or Account Suspended.'}), 401
    return _grant(member, f"Magic Link detected. Welcome back, {member.name}!")


@auth_bp.route('/admin', methods=['POST'])
@token_required
def admin_unlock(session):
    """
    Unlock the admin console

    POST /api/auth/admin
    {
        "password": "..."
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    if not state.system_config.check_admin_password(data.get('password', '')):
        return jsonify({'error': 'Invalid Admin Password.'}), 401

    state.activity.success("Admin console unlocked.")
    upgraded = Session(session.member, is_admin=True)
    return jsonify({
        'success': True,
        'token': generate_token(session.member, is_admin=True),
        'session': upgraded.to_dict()
    })


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(session):
    """Current session"""
    return jsonify(session.to_dict())
