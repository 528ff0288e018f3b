"""
SRS 감사 Flask Blueprint
==========================

GET  /audit              저장된 manifest와 마지막 보고서
POST /audit/transcript   JSON 트랜스크립트 업로드
POST /audit/verify       저장된 트랜스크립트 검증 ({"degree": n} 선택)
POST /audit/clear        저장된 데이터 삭제
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from srs_audit.errors import SRSAuditError
from srs_audit.serializers import (
    deserialize_transcript,
    serialize_manifest,
    serialize_report,
)
from srs_audit.transcript import check_degree
from srs_audit.verifier import verify_transcript

logger = logging.getLogger(__name__)

audit_bp = Blueprint('audit', __name__, url_prefix='/audit')


def init_audit_bp(app, store):
    """app.py에서 TranscriptStore를 주입받는다."""
    app.extensions["srs_audit.store"] = store


def get_store():
    return current_app.extensions["srs_audit.store"]


@audit_bp.errorhandler(SRSAuditError)
def handle_audit_error(exc):
    logger.warning("%s: %s", type(exc).__name__, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


# ──────────────────────────────────────────────────────────────
# 조회
# ──────────────────────────────────────────────────────────────

@audit_bp.route("")
def audit_page():
    """저장된 manifest와 마지막 보고서를 반환한다."""
    store = get_store()
    manifest = store.manifest()
    report = store.last_report()
    return jsonify({
        "curve": store.engine.name,
        "manifest": serialize_manifest(manifest) if manifest else None,
        "report": serialize_report(report) if report else None,
    })


# ──────────────────────────────────────────────────────────────
# 업로드 / 검증
# ──────────────────────────────────────────────────────────────

@audit_bp.route("/transcript", methods=["POST"])
def upload_transcript():
    """serialize_transcript 형식의 JSON을 저장한다."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "BadRequest", "message": "JSON 객체가 필요합니다"}), 400
    store = get_store()
    try:
        transcript = deserialize_transcript(store.engine, data)
    except SRSAuditError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        return jsonify({"error": "BadRequest", "message": f"잘못된 트랜스크립트: {exc}"}), 400

    manifest = store.save(transcript, provenance=request.args.get("provenance", ""))
    return jsonify({"manifest": serialize_manifest(manifest)}), 201


@audit_bp.route("/verify", methods=["POST"])
def verify():
    """저장된 트랜스크립트를 검증하고 보고서를 저장한다."""
    body = request.get_json(silent=True)
    degree = body.get("degree") if isinstance(body, dict) else None
    if degree is not None:
        check_degree(degree)

    store = get_store()
    transcript = store.load_transcript(degree)
    report = verify_transcript(transcript, store.engine)
    store.save_report(report)
    return jsonify(serialize_report(report))


@audit_bp.route("/clear", methods=["POST"])
def clear():
    """저장된 트랜스크립트와 보고서를 삭제한다."""
    get_store().clear()
    return jsonify({"cleared": True})
