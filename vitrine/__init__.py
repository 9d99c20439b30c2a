"""
Vitrine - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the listings site.
"""

from flask import Flask, render_template, session

from vitrine.config import Config
from vitrine.extensions import login_manager, remote


def create_app(config_class=Config, backend=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        backend: RemoteBackend to use instead of building one from config

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    remote.init_app(app, backend)
    login_manager.init_app(app)
    login_manager.login_view = 'admin.console'

    # Register blueprints
    from vitrine.storefront import storefront_bp
    from vitrine.admin import admin_bp

    app.register_blueprint(storefront_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from vitrine.admin.decorators import STATE_KEY
        from vitrine.models import AdminUser
        from vitrine.services.remote import AuthSession

        stored = AuthSession.from_dict((session.get(STATE_KEY) or {}).get('session'))
        if stored is None or stored.user_id != user_id:
            return None
        return AdminUser.from_session(stored)

    @app.context_processor
    def inject_service_flag():
        """Inject `service_configured` into templates."""
        return dict(service_configured=remote.configured)

    @app.template_filter('price')
    def price_filter(value):
        from vitrine.site import format_price
        return format_price(value)

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html'), 404

    return app
