"""
AutoStudio - Generate Proxy
Server-side Gemini text completion so browsers never hold the API key
"""
from flask import Blueprint, request, jsonify
import logging

from autostudio.services.state import get_state

logger = logging.getLogger(__name__)

proxy_bp = Blueprint('proxy', __name__)


@proxy_bp.route('/generate', methods=['GET', 'PUT', 'PATCH', 'DELETE', 'POST'])
def generate():
    """
    POST /api/generate
    {
        "prompt": "Write a tagline for a bakery"
    }
    """
    if request.method != 'POST':
        return jsonify({'error': 'Method not allowed'}), 405

    data = request.get_json(silent=True) or {}
    try:
        text = get_state().ai.generate_text(str(data.get('prompt') or ''))
    except Exception as e:
        logger.error(f"Generate proxy error: {e}")
        return jsonify({'error': 'Server error'}), 500

    return jsonify({'text': text})
