"""
AutoStudio - Routes
API endpoint registration
"""
from flask import Flask


def register_routes(app: Flask):
    """Register all API blueprints"""

    from autostudio.routes.auth import auth_bp
    from autostudio.routes.members import members_bp
    from autostudio.routes.settings import settings_bp
    from autostudio.routes.research import research_bp
    from autostudio.routes.articles import articles_bp
    from autostudio.routes.proxy import proxy_bp
    from autostudio.routes.monitoring import monitoring_bp

    # Register with /api prefix
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(members_bp, url_prefix='/api/members')
    app.register_blueprint(settings_bp, url_prefix='/api/settings')
    app.register_blueprint(research_bp, url_prefix='/api/research')
    app.register_blueprint(articles_bp, url_prefix='/api/articles')
    app.register_blueprint(proxy_bp, url_prefix='/api')
    app.register_blueprint(monitoring_bp, url_prefix='/api')
