"""
AutoStudio - Settings Routes
System configuration, WordPress credentials and application reset
"""
from flask import Blueprint, request, jsonify
import logging

from autostudio.models.settings import SystemConfig, WordPressConfig
from autostudio.routes.auth import token_required, admin_required
from autostudio.services.state import get_state
from autostudio.utils import clean_str, safe_bool

logger = logging.getLogger(__name__)

settings_bp = Blueprint('settings', __name__)


# ==========================================
# SYSTEM CONFIG
# ==========================================

@settings_bp.route('/system', methods=['GET'])
@admin_required
def get_system_config(session):
    """
    GET /api/settings/system
    """
    return jsonify(get_state().system_config.to_dict(include_secret=False))


@settings_bp.route('/system', methods=['PUT'])
@admin_required
def update_system_config(session):
    """
    Update system configuration (fields omitted are kept)

    PUT /api/settings/system
    {
        "isPrivateMode": true,
        "adminPasswordHash": "new-password",
        "defaultNiche": "fitness"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}
    current = state.system_config

    password = clean_str(data.get('adminPasswordHash'), 200) if 'adminPasswordHash' in data else current.admin_password_hash
    if not password:
        return jsonify({'error': 'Admin password cannot be empty'}), 400

    updated = SystemConfig(
        is_private_mode=safe_bool(data.get('isPrivateMode'), current.is_private_mode),
        admin_password_hash=password,
        default_niche=clean_str(data.get('defaultNiche'), 200) if 'defaultNiche' in data else current.default_niche
    )
    state.save_system_config(updated)
    state.activity.success("Settings saved.")
    return jsonify({'success': True, 'config': updated.to_dict(include_secret=False)})


# ==========================================
# WORDPRESS
# ==========================================

@settings_bp.route('/wordpress', methods=['GET'])
@token_required
def get_wordpress_config(session):
    """
    GET /api/settings/wordpress
    """
    return jsonify(get_state().wp_config.to_dict(include_secret=False))


@settings_bp.route('/wordpress', methods=['PUT'])
@token_required
def update_wordpress_config(session):
    """
    Save WordPress credentials

    PUT /api/settings/wordpress
    {
        "url": "https://example.com",
        "username": "editor",
        "appPassword": "abcd efgh ijkl mnop"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}
    current = state.wp_config

    updated = WordPressConfig(
        url=clean_str(data.get('url')) if 'url' in data else current.url,
        username=clean_str(data.get('username'), 200) if 'username' in data else current.username,
        app_password=clean_str(data.get('appPassword'), 200) if 'appPassword' in data else current.app_password
    )
    state.save_wp_config(updated)
    return jsonify({'success': True, 'config': updated.to_dict(include_secret=False)})


@settings_bp.route('/wordpress/test', methods=['POST'])
@token_required
def test_wordpress(session):
    """
    Test the saved WordPress credentials

    POST /api/settings/wordpress/test
    """
    state = get_state()
    if not state.wp_config.is_configured:
        return jsonify({'success': False, 'message': 'WP Error: Configuration missing!'}), 400

    result = state.wordpress().test_connection()
    return jsonify(result), (200 if result.get('success') else 502)


# ==========================================
# RESET
# ==========================================

@settings_bp.route('/reset', methods=['POST'])
@admin_required
def reset_application(session):
    """
    Clear all stored data, including articles and settings

    POST /api/settings/reset
    """
    get_state().reset()
    return jsonify({'success': True, 'message': 'Application reset'})
