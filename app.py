import logging
import os
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from config import Config

# Set up logging - use INFO in production, DEBUG only when DEV_MODE is set
log_level = logging.DEBUG if os.environ.get('DEV_MODE', '').lower() == 'true' else logging.INFO
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

def create_app(testing: bool = False):
    """Application factory.

    The benchmark service is built once per app from the configured rules file.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if testing:
        app.config['TESTING'] = True

    # Refresh env-dependent config at runtime.
    app.config.update({
        'DEV_MODE': os.environ.get('DEV_MODE', '').lower() == 'true',
        'SECRET_KEY': os.environ.get('SECRET_KEY'),
        'BENCHMARK_MAX_PRODUCTS': int(os.environ.get('BENCHMARK_MAX_PRODUCTS') or Config.BENCHMARK_MAX_PRODUCTS),
        'BENCHMARK_RULES_PATH': os.environ.get('BENCHMARK_RULES_PATH') or Config.BENCHMARK_RULES_PATH,
    })

    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    from services.benchmark.benchmark_service import BenchmarkService
    from services.benchmark.config_manager import BenchmarkConfigManager
    app.extensions['benchmark'] = BenchmarkService(BenchmarkConfigManager(app.config['BENCHMARK_RULES_PATH']))

    # Import and register routes
    from routes.api_routes import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')

    logger.info("Application initialized successfully")

    return app

__all__ = ["create_app"]
