from flask import Flask, jsonify, redirect, url_for

from srs_audit.config import Config, configure_logging
from srs_audit.field import PairingEngine
from srs_audit.store import TranscriptStore

from audit_routes import audit_bp, init_audit_bp


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    # 보고서의 검사 순서를 유지한다
    app.json.sort_keys = False

    configure_logging(app.config["LOG_LEVEL"])

    # DB_PATH = None 이면 메모리 DB (MemoryStorage)
    engine = PairingEngine.from_name(app.config["CURVE"])
    store = TranscriptStore.open(app.config["DB_PATH"], engine)

    init_audit_bp(app, store)
    app.register_blueprint(audit_bp)

    @app.route("/")
    def main():
        return redirect(url_for("audit.audit_page"))

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "curve": engine.name})

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
