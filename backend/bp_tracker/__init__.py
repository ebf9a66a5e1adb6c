import os
import logging
import click
from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)

STORE_EXTENSION = 'bp_tracker.store'


def create_app(config=None, store=None):
    """Build the API application.

    ``config`` overrides values read from the environment. ``store`` is the
    reading storage collaborator; when omitted one is built from
    ``BP_STORAGE``.
    """
    app = Flask(__name__)

    is_production = os.getenv('FLASK_ENV') == 'production'

    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///bp_tracker.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }
    app.config['BP_STORAGE'] = os.getenv('BP_STORAGE', 'sql')
    app.config['BP_DATA_FILE'] = os.getenv('BP_DATA_FILE', 'bp_data.csv')
    app.config['BP_DEFAULT_LOCATION'] = os.getenv('BP_DEFAULT_LOCATION', 'Unknown')
    app.config['AUDIT_LOG_FILE'] = os.getenv('AUDIT_LOG_FILE', 'logs/audit.log')
    app.config['ALLOWED_ORIGINS'] = os.getenv('ALLOWED_ORIGINS', '')
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    if config:
        app.config.update(config)

    logging.basicConfig(
        level=str(app.config['LOG_LEVEL']).upper(),
        format='%(asctime)s %(levelname)s %(name)s - %(message)s',
    )

    if not app.config['SECRET_KEY']:
        if is_production:
            raise RuntimeError('SECRET_KEY environment variable is required')
        logger.warning('SECRET_KEY not set, using development key')
        app.config['SECRET_KEY'] = 'dev-only-secret'

    from bp_tracker.utils.validators import EntryDefaults
    app.config.setdefault('ENTRY_DEFAULTS', EntryDefaults(location=app.config['BP_DEFAULT_LOCATION']))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Storage collaborator
    from bp_tracker.storage import build_store
    from bp_tracker.storage.sql_store import SqlEntryStore
    if store is None:
        store = build_store(app.config)
    app.extensions[STORE_EXTENSION] = store
    if isinstance(store, SqlEntryStore):
        from bp_tracker.models.entry import Entry  # noqa: F401
        with app.app_context():
            db.create_all()

    # CORS restricted to configured origins
    allowed_origins = app.config['ALLOWED_ORIGINS']
    if allowed_origins:
        origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()]
    elif is_production:
        raise RuntimeError(
            'ALLOWED_ORIGINS environment variable is required in production'
        )
    else:
        # Development: allow localhost variants
        origins_list = [
            'http://localhost:*',
            'http://127.0.0.1:*',
        ]

    CORS(app, resources={r"/api/*": {"origins": origins_list}})

    # Security headers
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Referrer-Policy'] = 'no-referrer'
        return response

    # Validate Content-Type on POST requests
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PUT'):
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'success': False, 'error': 'Content-Type must be application/json'}), 415

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        message = 'Not found' if e.code == 404 else e.description
        return jsonify({'success': False, 'error': message}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify({'success': False, 'error': str(e) or 'Internal server error'}), 500

    # Setup audit logging
    from bp_tracker.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    # Register blueprints
    from bp_tracker.routes.entries import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        return jsonify({
            'message': 'Blood Pressure Tracker API',
            'version': '2.0',
            'endpoints': {
                'GET /api/entries': 'Get all entries',
                'GET /api/entries/:id': 'Get entry by ID',
                'POST /api/entries': 'Add new entry',
                'DELETE /api/entries/:id': 'Delete entry',
                'GET /api/stats': 'Get statistics',
                'GET /api/export': 'Download entries as CSV',
            }
        }), 200

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    # CLI commands
    @app.cli.command('import-csv')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_csv(path):
        """Import readings from a CSV data file into the configured store."""
        from bp_tracker.storage.csv_store import CsvEntryStore
        imported, skipped = 0, 0
        for position, reading in CsvEntryStore(path).scan():
            if reading is None:
                logger.warning(f'Skipping invalid row {position} in {path}')
                skipped += 1
                continue
            store.create(reading.with_id(None))
            imported += 1
        print(f'Imported {imported} reading(s), skipped {skipped}.')

    return app


def get_store():
    """Return the storage collaborator of the current app."""
    from flask import current_app
    return current_app.extensions[STORE_EXTENSION]
