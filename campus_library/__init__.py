from flask import Flask, jsonify
from campus_library.config import Config
from campus_library.extensions import db, migrate, jwt, mail
from campus_library.clock import init_clock
from campus_library.bootstrap import ensure_schema


def create_app(config_object=Config, clock=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    init_clock(app, clock)

    # models must be imported before create_all
    from campus_library import models  # noqa: F401

    if app.config.get("AUTO_BOOTSTRAP"):
        ensure_schema(app)

    from campus_library.controllers.auth_controller import auth_bp
    from campus_library.controllers.admin_controller import admin_bp
    from campus_library.controllers.staff_controller import staff_bp
    from campus_library.controllers.member_controller import member_bp
    from campus_library.controllers.report_controller import report_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(staff_bp, url_prefix="/staff")
    app.register_blueprint(member_bp, url_prefix="/member")
    app.register_blueprint(report_bp, url_prefix="/reports")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
