"""
트랜스크립트 저장소 (TinyDB)
==============================

감사 대상 트랜스크립트와 마지막 검사 보고서를 TinyDB 문서로 보관한다.
검증기 입장에서는 외부 로더이며, 필요한 인터페이스는

    load(degree) -> (g1_x, g1_alpha_x, g2_x, g2_alpha_x)

뿐이다. 각 원소열은 앞쪽 degree개로 잘라서 반환한다.

사용 예시:
    >>> store = TranscriptStore.open("db.json", engine)
    >>> store.save(transcript, provenance="participant-07")
    >>> g1_x, g1_alpha_x, g2_x, g2_alpha_x = store.load(degree=64)
"""

import logging

from tinydb import Query, TinyDB
from tinydb.storages import MemoryStorage

from srs_audit.errors import ArithmeticFailure, InsufficientDataError
from srs_audit.serializers import (
    deserialize_manifest,
    deserialize_report,
    deserialize_transcript,
    serialize_manifest,
    serialize_report,
    serialize_transcript,
)
from srs_audit.transcript import Manifest

logger = logging.getLogger(__name__)

DATA = Query()

TRANSCRIPT_KEY = "srs.transcript"
REPORT_KEY = "srs.report"


class TranscriptStore:
    """TinyDB 테이블 하나에 트랜스크립트와 보고서를 저장한다."""

    def __init__(self, db, engine, table="srs"):
        self.db = db
        self.table = db.table(table)
        self.engine = engine

    @classmethod
    def open(cls, path, engine):
        """path가 None이면 메모리 DB를 사용한다."""
        if path is None:
            return cls(TinyDB(storage=MemoryStorage), engine)
        return cls(TinyDB(path), engine)

    # ─── DB 헬퍼 ───

    def _get(self, key):
        result = self.table.search(DATA.type == key)
        if not result:
            return None
        return result[0].get("data")

    def _set(self, key, data):
        self.table.upsert({"type": key, "data": data}, DATA.type == key)

    def clear(self):
        self.table.remove(DATA.type.test(lambda t: t.startswith("srs.")))

    # ─── 트랜스크립트 ───

    def save(self, transcript, provenance=""):
        """트랜스크립트를 저장하고 Manifest를 반환한다.

        이전 보고서는 새 트랜스크립트와 맞지 않으므로 함께 지운다.
        """
        manifest = Manifest(
            degree=transcript.degree,
            curve=self.engine.name,
            provenance=provenance,
            counts={n: len(s) for n, s in transcript.sequences().items()},
        )
        data = serialize_transcript(transcript)
        data["manifest"] = serialize_manifest(manifest)
        self._set(TRANSCRIPT_KEY, data)
        self.table.remove(DATA.type == REPORT_KEY)
        logger.info("stored transcript (curve=%s, degree=%d, provenance=%r)",
                    manifest.curve, manifest.degree, provenance)
        return manifest

    def manifest(self):
        data = self._get(TRANSCRIPT_KEY)
        if data is None or data.get("manifest") is None:
            return None
        return deserialize_manifest(data["manifest"])

    def _stored(self, degree):
        data = self._get(TRANSCRIPT_KEY)
        if data is None:
            raise InsufficientDataError("transcript", 1, 0)
        curve = (data.get("manifest") or {}).get("curve", self.engine.name)
        if curve != self.engine.name:
            raise ArithmeticFailure(
                f"{curve} 곡선으로 기록된 트랜스크립트를 {self.engine.name} 엔진으로 읽을 수 없습니다"
            )
        if degree is not None:
            for name in ("g1_x", "g1_alpha_x", "g2_x", "g2_alpha_x"):
                count = len(data[name]["elements"])
                if count < degree:
                    raise InsufficientDataError(name, degree, count)
        return data

    def load_transcript(self, degree=None):
        """저장된 Transcript를 복원한다. degree가 없으면 저장된 차수를 사용한다."""
        return deserialize_transcript(self.engine, self._stored(degree), degree)

    def load(self, degree):
        """(g1_x, g1_alpha_x, g2_x, g2_alpha_x) 를 앞쪽 degree개씩 반환한다."""
        transcript = self.load_transcript(degree)
        return (transcript.g1_x, transcript.g1_alpha_x,
                transcript.g2_x, transcript.g2_alpha_x)

    # ─── 보고서 ───

    def save_report(self, report):
        self._set(REPORT_KEY, serialize_report(report))

    def last_report(self):
        data = self._get(REPORT_KEY)
        if data is None:
            return None
        return deserialize_report(data)
