"""
설정과 로깅
=============

환경 변수로 기본값을 덮어쓸 수 있다.

  SRS_AUDIT_CURVE       곡선 이름 (bn128 | bls12_381)
  SRS_AUDIT_DB          TinyDB 파일 경로
  SRS_AUDIT_LOG_LEVEL   로그 레벨
  SECRET_KEY            Flask 세션 키
"""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Config:
    CURVE = os.environ.get("SRS_AUDIT_CURVE", "bn128")
    DB_PATH = os.environ.get("SRS_AUDIT_DB", "db.json")
    LOG_LEVEL = os.environ.get("SRS_AUDIT_LOG_LEVEL", "INFO")
    SECRET_KEY = os.environ.get("SECRET_KEY", "key")


def configure_logging(level=None):
    logging.basicConfig(level=level or Config.LOG_LEVEL, format=LOG_FORMAT)
