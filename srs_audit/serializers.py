"""
SRS 데이터 직렬화/역직렬화 헬퍼
=================================

TinyDB / JSON 에 저장 가능한 형태로 SRS 객체를 변환한다.
정수는 모두 10진 문자열로 저장한다. 무한원점은 None.
"""

from srs_audit.errors import ArithmeticFailure
from srs_audit.field import GroupKind
from srs_audit.transcript import Manifest, Sequence, Transcript, check_degree
from srs_audit.verifier import TranscriptReport


def _pair(data, what):
    """길이 2의 list/tuple 인지 확인한다."""
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise ArithmeticFailure(f"{what}는 원소 2개짜리 배열이어야 합니다: {data!r}")
    return data


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(engine, s):
    """str(int) → FR"""
    return engine.scalar(int(s))


# ─── G1 / G2 point ───

def serialize_g1(element):
    """G1 point → [str, str] or None"""
    coords = element.engine.point_to_ints(element)
    if coords is None:
        return None
    return [str(coords[0]), str(coords[1])]


def deserialize_g1(engine, data):
    """[str, str] or None → G1 point"""
    if data is None:
        return engine.identity(GroupKind.G1)
    x, y = _pair(data, "G1 점")
    return engine.point_from_ints(GroupKind.G1, (int(x), int(y)))


def serialize_g2(element):
    """G2 point → [[str,str],[str,str]] or None"""
    coords = element.engine.point_to_ints(element)
    if coords is None:
        return None
    x, y = coords
    return [[str(x[0]), str(x[1])], [str(y[0]), str(y[1])]]


def deserialize_g2(engine, data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return engine.identity(GroupKind.G2)
    x, y = _pair(data, "G2 점")
    x = tuple(int(c) for c in _pair(x, "G2 x 좌표"))
    y = tuple(int(c) for c in _pair(y, "G2 y 좌표"))
    return engine.point_from_ints(GroupKind.G2, (x, y))


def serialize_element(element):
    if element.kind is GroupKind.G1:
        return serialize_g1(element)
    return serialize_g2(element)


def deserialize_element(engine, kind, data):
    if kind is GroupKind.G1:
        return deserialize_g1(engine, data)
    return deserialize_g2(engine, data)


# ─── Sequence ───

def serialize_sequence(sequence):
    """Sequence → {"kind": "G1", "elements": [...]}"""
    return {
        "kind": sequence.kind.value,
        "elements": [serialize_element(e) for e in sequence],
    }


def deserialize_sequence(engine, data, limit=None):
    """dict → Sequence (limit가 주어지면 앞쪽 limit개만 복원)"""
    kind = GroupKind(data["kind"])
    raw = data["elements"] if limit is None else data["elements"][:limit]
    return Sequence(kind, [deserialize_element(engine, kind, e) for e in raw])


# ─── Manifest ───

def serialize_manifest(manifest):
    """Manifest → dict"""
    return {
        "degree": manifest.degree,
        "curve": manifest.curve,
        "provenance": manifest.provenance,
        "counts": dict(manifest.counts),
    }


def deserialize_manifest(data):
    """dict → Manifest"""
    return Manifest(
        degree=data["degree"],
        curve=data["curve"],
        provenance=data.get("provenance", ""),
        counts=data.get("counts", {}),
    )


# ─── Transcript ───

def serialize_transcript(transcript):
    """Transcript → dict"""
    data = {
        "degree": transcript.degree,
        "manifest": (serialize_manifest(transcript.manifest)
                     if transcript.manifest is not None else None),
    }
    for name, sequence in transcript.sequences().items():
        data[name] = serialize_sequence(sequence)
    return data


def deserialize_transcript(engine, data, degree=None):
    """dict → Transcript

    degree가 주어지면 각 원소열의 앞쪽 degree개만 복원하고
    트랜스크립트 차수도 degree로 둔다.
    """
    stored_degree = data["degree"]
    check_degree(stored_degree)
    manifest = data.get("manifest")
    sequences = {
        name: deserialize_sequence(engine, data[name], limit=degree)
        for name in ("g1_x", "g1_alpha_x", "g2_x", "g2_alpha_x")
    }
    return Transcript(
        degree=stored_degree if degree is None else degree,
        manifest=deserialize_manifest(manifest) if manifest is not None else None,
        **sequences,
    )


# ─── TranscriptReport ───

def serialize_report(report):
    """TranscriptReport → dict"""
    return {
        "curve": report.curve,
        "degree": report.degree,
        "passed": report.passed,
        "failed": report.failed,
        "checks": dict(report.checks),
    }


def deserialize_report(data):
    """dict → TranscriptReport"""
    return TranscriptReport(data["checks"], data["degree"], data["curve"])
