"""
AutoStudio - Research Routes
Trend discovery, keyword expansion, topic suggestions and auto-refresh
"""
from flask import Blueprint, request, jsonify
import logging

from autostudio.routes.auth import token_required, request_api_key
from autostudio.services.errors import format_ai_error
from autostudio.services.state import get_state
from autostudio.utils import clean_str, safe_bool

logger = logging.getLogger(__name__)

research_bp = Blueprint('research', __name__)


@research_bp.route('/trends', methods=['POST'])
@token_required
def fetch_trends(session):
    """
    Manual trend scan

    POST /api/research/trends
    {
        "niche": "fitness",
        "country": "US",
        "category": "all"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    niche = clean_str(data.get('niche'), 200) or state.system_config.default_niche
    if not niche:
        return jsonify({'error': 'Niche is required'}), 400
    country = clean_str(data.get('country'), 20) or 'GLOBAL'
    category = clean_str(data.get('category'), 100) or 'all'

    state.activity.info(f"Initiating Manual Scan: {niche} | {country} | {category}")
    try:
        trends = state.ai.fetch_trending_topics(niche, country, category, api_key=request_api_key(session))
    except Exception as e:
        state.activity.error(f"Sync Error: {format_ai_error(e)}")
        raise

    state.set_latest_trends(trends, niche=niche, country=country, category=category)
    if trends:
        state.activity.success(f"Success: Found {len(trends)} breakout topics.")
    return jsonify({'trends': [t.to_dict() for t in trends], 'total': len(trends)})


@research_bp.route('/trends/latest', methods=['GET'])
@token_required
def latest_trends(session):
    """
    Most recent trend snapshot (manual scan or auto-refresh)

    GET /api/research/trends/latest
    """
    return jsonify(get_state().latest_trends_snapshot())


@research_bp.route('/keywords', methods=['POST'])
@token_required
def find_keywords(session):
    """
    Keyword research

    POST /api/research/keywords
    {
        "seed": "home workouts",
        "startDate": "2024-01-01",
        "endDate": "2024-03-01"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    seed = clean_str(data.get('seed'), 200)
    if not seed:
        return jsonify({'error': 'Seed keyword is required'}), 400
    start_date = clean_str(data.get('startDate'), 20) or None
    end_date = clean_str(data.get('endDate'), 20) or None

    state.activity.info(f'Keyword Research: Analyzing "{seed}"...')
    try:
        keywords = state.ai.find_keywords(seed, start_date, end_date, api_key=request_api_key(session))
    except Exception as e:
        state.activity.error(f"Error: {format_ai_error(e)}")
        raise

    state.activity.success(f"Success: Found {len(keywords)} actionable keywords.")
    if session.member_id:
        state.members.record_usage(session.member_id, 'keywords')

    return jsonify({'keywords': [k.to_dict() for k in keywords], 'total': len(keywords)})


@research_bp.route('/suggestions', methods=['POST'])
@token_required
def fetch_suggestions(session):
    """
    Rising low-competition topic ideas

    POST /api/research/suggestions
    {
        "category": "Health",
        "country": "GLOBAL"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    category = clean_str(data.get('category'), 100) or 'all'
    country = clean_str(data.get('country'), 20) or 'GLOBAL'

    state.activity.info(f'AI Engine: Fetching rising low-competition topics for "{category}" in {country}...')
    try:
        suggestions = state.ai.fetch_smart_suggestions(category, country, api_key=request_api_key(session))
    except Exception as e:
        state.activity.error(f"Suggestion Error: {format_ai_error(e)}")
        raise

    state.activity.success(f"AI suggested {len(suggestions)} high-potential topics.")
    return jsonify({'suggestions': [s.to_dict() for s in suggestions], 'total': len(suggestions)})


@research_bp.route('/auto-refresh', methods=['POST'])
@token_required
def auto_refresh(session):
    """
    Turn the 5-minute trend auto-refresh on or off

    POST /api/research/auto-refresh
    {
        "enabled": true,
        "niche": "fitness",
        "country": "US",
        "category": "all"
    }
    """
    state = get_state()
    data = request.get_json(silent=True) or {}

    if not safe_bool(data.get('enabled'), False):
        return jsonify(state.scheduler.disable_auto_refresh())

    niche = clean_str(data.get('niche'), 200) or state.system_config.default_niche
    if not niche:
        return jsonify({'error': 'Niche is required'}), 400

    status = state.scheduler.enable_auto_refresh(
        niche,
        clean_str(data.get('country'), 20) or 'GLOBAL',
        clean_str(data.get('category'), 100) or 'all',
        api_key=request_api_key(session)
    )
    return jsonify(status)
