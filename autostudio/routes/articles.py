"""
AutoStudio - Article Routes
Generate, edit, publish and export articles
"""
from flask import Blueprint, request, jsonify, Response
import logging

from autostudio.routes.auth import token_required, request_api_key
from autostudio.services.state import get_state
from autostudio.utils import clean_str

logger = logging.getLogger(__name__)

articles_bp = Blueprint('articles', __name__)


def _not_found():
    return jsonify({'error': 'Article not found'}), 404


@articles_bp.route('', methods=['GET'])
@token_required
def list_articles(session):
    """
    GET /api/articles?status=ready
    """
    articles = get_state().article_service.list()
    status = request.args.get('status')
    if status:
        articles = [a for a in articles if a.status.value == status]
    return jsonify({
        'articles': [a.to_dict() for a in articles],
        'total': len(articles)
    })


@articles_bp.route('/generate', methods=['POST'])
@token_required
def generate_article(session):
    """
    Run the full pipeline: draft, humanization audit, featured image

    POST /api/articles/generate
    {
        "topic": "Best home workouts for beginners",
        "intent": "Informational"
    }
    """
    data = request.get_json(silent=True) or {}
    article = get_state().article_service.write_article(
        clean_str(data.get('topic'), 300),
        intent=clean_str(data.get('intent'), 50) or 'Informational',
        api_key=request_api_key(session),
        member_id=session.member_id
    )
    return jsonify({'success': True, 'article': article.to_dict()}), 201


@articles_bp.route('/<article_id>', methods=['GET'])
@token_required
def get_article(session, article_id):
    article = get_state().article_service.get(article_id)
    if not article:
        return _not_found()
    return jsonify(article.to_dict())


@articles_bp.route('/<article_id>', methods=['PUT'])
@token_required
def update_article(session, article_id):
    """
    Save editor changes

    PUT /api/articles/<id>
    {
        "content": "...",
        "metaDescription": "...",
        "scheduledAt": "2025-01-01T09:00:00"
    }
    """
    data = request.get_json(silent=True) or {}
    article = get_state().article_service.update(article_id, data)
    if not article:
        return _not_found()
    return jsonify({'success': True, 'article': article.to_dict()})


@articles_bp.route('/<article_id>', methods=['DELETE'])
@token_required
def delete_article(session, article_id):
    if not get_state().article_service.delete(article_id):
        return _not_found()
    return jsonify({'success': True})


@articles_bp.route('/<article_id>/publish', methods=['POST'])
@token_required
def publish_article(session, article_id):
    """
    Publish now, or schedule when the article has scheduledAt

    POST /api/articles/<id>/publish
    """
    article = get_state().article_service.publish(article_id)
    if not article:
        return _not_found()
    return jsonify({
        'success': True,
        'url': article.published_url,
        'article': article.to_dict()
    })


@articles_bp.route('/<article_id>/export', methods=['GET'])
@token_required
def export_article(session, article_id):
    """
    Download as HTML, Markdown or plain text

    GET /api/articles/<id>/export?format=html
    """
    result = get_state().article_service.export(article_id, request.args.get('format', 'md'))
    if not result:
        return _not_found()

    filename, mimetype, body = result
    return Response(
        body,
        mimetype=mimetype,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )
