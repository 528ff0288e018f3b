"""
고정 길이 바이너리 레코드 입출력
==================================

전처리(prep) 단계가 읽고 쓰는 원시 바이너리 덤프 형식.

  - 헤더 없음, 길이 접두어 없음: N개의 고정 크기 레코드가 연달아 저장된다.
  - 스칼라 (FR):  빅엔디안 scalar_size 바이트
  - G1 점:        x ‖ y                      (각 coordinate_size 바이트)
  - G2 점:        x.c0 ‖ x.c1 ‖ y.c0 ‖ y.c1  (각 coordinate_size 바이트)
  - 무한원점:     모든 바이트가 0

bn128: scalar 32, coordinate 32 → G1 64바이트, G2 128바이트
bls12_381: scalar 32, coordinate 48 → G1 96바이트, G2 192바이트
"""

from srs_audit.errors import ArithmeticFailure, InsufficientDataError
from srs_audit.field import GroupKind


def point_size(engine, kind):
    words = 2 if kind is GroupKind.G1 else 4
    return words * engine.coordinate_size


# ─── 스칼라 ───

def encode_scalar(engine, value):
    return int(value).to_bytes(engine.scalar_size, "big")


def decode_scalar(engine, raw):
    value = int.from_bytes(raw, "big")
    if value >= engine.curve_order:
        raise ArithmeticFailure(f"스칼라 필드 범위를 벗어난 값입니다: {value}")
    return engine.scalar(value)


# ─── 점 ───

def encode_point(element):
    engine = element.engine
    size = engine.coordinate_size
    coords = engine.point_to_ints(element)
    if coords is None:
        return b"\x00" * point_size(engine, element.kind)
    x, y = coords
    if element.kind is GroupKind.G1:
        words = [x, y]
    else:
        words = [x[0], x[1], y[0], y[1]]
    return b"".join(w.to_bytes(size, "big") for w in words)


def decode_point(engine, kind, raw):
    if not any(raw):
        return engine.identity(kind)
    size = engine.coordinate_size
    words = [int.from_bytes(raw[i:i + size], "big") for i in range(0, len(raw), size)]
    if kind is GroupKind.G1:
        coords = (words[0], words[1])
    else:
        coords = ((words[0], words[1]), (words[2], words[3]))
    return engine.point_from_ints(kind, coords)


# ─── 파일 ───

def _read_records(path, record_size, count):
    with open(path, "rb") as f:
        data = f.read(record_size * count)
    available = len(data) // record_size
    if available < count:
        raise InsufficientDataError(str(path), count, available)
    return [data[i * record_size:(i + 1) * record_size] for i in range(count)]


def write_field_elements(path, engine, elements):
    """스칼라 리스트를 레코드 파일로 쓴다. 쓴 바이트 수를 반환한다."""
    payload = b"".join(encode_scalar(engine, e) for e in elements)
    with open(path, "wb") as f:
        f.write(payload)
    return len(payload)


def read_field_elements(path, engine, count):
    """파일 앞쪽에서 count개의 스칼라를 읽는다.

    Raises:
        InsufficientDataError: 파일에 count개보다 적은 레코드가 있을 때
        ArithmeticFailure: 필드 범위를 벗어난 값
    """
    records = _read_records(path, engine.scalar_size, count)
    return [decode_scalar(engine, r) for r in records]


def write_points(path, elements):
    """같은 그룹의 점들을 레코드 파일로 쓴다. 쓴 바이트 수를 반환한다."""
    payload = b"".join(encode_point(e) for e in elements)
    with open(path, "wb") as f:
        f.write(payload)
    return len(payload)


def read_points(path, engine, kind, count):
    """파일 앞쪽에서 count개의 kind 그룹 점을 읽는다.

    Raises:
        InsufficientDataError: 레코드 부족
        ArithmeticFailure: 필드 범위를 벗어난 좌표, 곡선 밖의 점
    """
    records = _read_records(path, point_size(engine, kind), count)
    return [decode_point(engine, kind, r) for r in records]
