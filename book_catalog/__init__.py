from flask import Flask, jsonify
from sqlalchemy import event
from werkzeug.exceptions import HTTPException

from book_catalog.config import Config
from book_catalog.extensions import db
from book_catalog.utils.responses import error_response


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(engine):
    """
    SQLite'in yerleşik lower() fonksiyonu sadece ASCII harfleri küçültür.
    Aynı isimle Python'un str.lower'ını kaydediyoruz; "GARCÍA" -> "garcía".
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.create_function("lower", 1, _unicode_lower)


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # 404 (route yok), 405 vb. aynı gövde formatıyla dönsün
        return error_response(e.code, e.description or e.name)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        app.logger.exception(f"[error] Unexpected error: {e}")
        return error_response(500, "Internal server error")


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)

    # Model import'u create_all'dan önce olmalı
    from book_catalog.models import book  # noqa: F401
    with app.app_context():
        register_sqlite_functions(db.engine)
        db.create_all()

    from book_catalog.controllers.book_controller import book_bp
    app.register_blueprint(book_bp)

    register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    app.logger.info(f"[app] Book catalog ready (db={app.config['SQLALCHEMY_DATABASE_URI']})")
    return app
