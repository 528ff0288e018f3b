"""
페어링 엔진: 스칼라 필드, 소스 그룹 G1/G2, 쌍선형 페어링
==========================================================

SRS 감사 전체에서 사용하는 대수적 도구를 정의한다.

**스칼라 필드 FR**:
  곡선 위수 r 위의 소수체. 챌린지 z, 비밀 값 s, α 모두 이 필드의 원소이다.

**소스 그룹 (GroupKind)**:
  비대칭 페어링 e: G1 × G2 → GT 의 두 입력 그룹.
  - G1 (A 그룹): 페어링의 첫 번째 인자
  - G2 (B 그룹): 페어링의 두 번째 인자
  두 그룹의 역할은 서로 바꿀 수 없으므로, 모든 원소는 자신이 속한
  그룹을 GroupKind 태그로 명시적으로 가진다.

**PairingEngine**:
  곡선 하나에 대한 컨텍스트 값. 전역 상태가 아니므로 bn128과 bls12_381
  엔진을 한 프로세스 안에서 독립적으로 사용할 수 있다.
  py_ecc의 optimized 백엔드(사영 좌표)를 감싼다.

사용 예시:
    >>> from srs_audit.field import PairingEngine, GroupKind
    >>> engine = PairingEngine.bn128()
    >>> P = engine.generator(GroupKind.G1) * 5   # 5·G1
    >>> Q = engine.generator(GroupKind.G2) * 7   # 7·G2
    >>> engine.pairing(P, Q) == engine.pairing(P * 7, Q * 5)  # True
"""

import secrets
from enum import Enum

from py_ecc import optimized_bls12_381, optimized_bn128
from py_ecc.fields import bls12_381_FQ, bn128_FQ

from srs_audit.errors import ArithmeticFailure, GroupKindMismatch


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드 (Scalar Field)
# ─────────────────────────────────────────────────────────────────────

class BN128_FR(bn128_FQ):
    """bn128 스칼라 필드 위의 원소 (위수 ≈ 2^254)."""
    field_modulus = optimized_bn128.curve_order


class BLS12_381_FR(bls12_381_FQ):
    """bls12_381 스칼라 필드 위의 원소 (위수 ≈ 2^255)."""
    field_modulus = optimized_bls12_381.curve_order


# ─────────────────────────────────────────────────────────────────────
# 그룹 태그
# ─────────────────────────────────────────────────────────────────────

class GroupKind(Enum):
    """페어링의 두 소스 그룹. G1이 첫 번째 인자, G2가 두 번째 인자이다."""

    G1 = "G1"
    G2 = "G2"

    @property
    def other(self):
        return GroupKind.G2 if self is GroupKind.G1 else GroupKind.G1


class GroupElement:
    """GroupKind 태그를 가진 타원곡선 점.

    속성:
        engine: 이 점이 속한 PairingEngine
        kind: GroupKind.G1 또는 GroupKind.G2
        point: py_ecc optimized 사영 좌표 (x, y, z)

    연산:
        P + Q, P - Q, -P
        P * k (k는 int 또는 FR), k * P (k는 int만 가능. FR은 TypeError)
        P == Q (사영 좌표를 고려한 비교)
    """

    __slots__ = ("engine", "kind", "point")

    def __init__(self, engine, kind, point):
        self.engine = engine
        self.kind = kind
        self.point = point

    def _require_compatible(self, other):
        if not isinstance(other, GroupElement):
            raise TypeError(f"GroupElement가 아닙니다: {type(other).__name__}")
        if other.engine.name != self.engine.name:
            raise GroupKindMismatch(
                f"서로 다른 곡선의 점입니다: {self.engine.name} / {other.engine.name}"
            )
        if other.kind is not self.kind:
            raise GroupKindMismatch(
                f"{self.kind.value} 점과 {other.kind.value} 점은 더할 수 없습니다"
            )

    def __add__(self, other):
        self._require_compatible(other)
        return GroupElement(
            self.engine, self.kind, self.engine.curve.add(self.point, other.point)
        )

    def __neg__(self):
        return GroupElement(self.engine, self.kind, self.engine.curve.neg(self.point))

    def __sub__(self, other):
        return self + (-other)

    def __mul__(self, scalar):
        if isinstance(scalar, GroupElement):
            return NotImplemented
        n = int(scalar) % self.engine.curve_order
        return GroupElement(
            self.engine, self.kind, self.engine.curve.multiply(self.point, n)
        )

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, GroupElement):
            return NotImplemented
        if other.engine.name != self.engine.name or other.kind is not self.kind:
            return False
        return self.engine.curve.eq(self.point, other.point)

    def __hash__(self):
        return hash((self.engine.name, self.kind, self.engine.point_to_ints(self)))

    def is_identity(self):
        """무한원점(항등원) 여부."""
        return self.engine.curve.is_inf(self.point)

    def to_affine(self):
        """아핀 좌표 (x, y)를 반환한다. 무한원점은 None."""
        if self.is_identity():
            return None
        return self.engine.curve.normalize(self.point)

    def __repr__(self):
        affine = self.engine.point_to_ints(self)
        return f"GroupElement({self.engine.name}, {self.kind.value}, {affine})"


# ─────────────────────────────────────────────────────────────────────
# 페어링 엔진
# ─────────────────────────────────────────────────────────────────────

class PairingEngine:
    """한 곡선에 대한 페어링 컨텍스트.

    속성:
        name: 곡선 이름 ("bn128", "bls12_381")
        curve: py_ecc optimized 곡선 모듈
        FR: 스칼라 필드 클래스
        curve_order: 스칼라 필드 위수 r
        field_modulus: 기저 필드 위수 q
        scalar_size: 스칼라 직렬화 바이트 수
        coordinate_size: 기저 필드 좌표 직렬화 바이트 수
    """

    def __init__(self, name, curve, scalar_field, scalar_size, coordinate_size):
        self.name = name
        self.curve = curve
        self.FR = scalar_field
        self.curve_order = curve.curve_order
        self.field_modulus = curve.field_modulus
        self.scalar_size = scalar_size
        self.coordinate_size = coordinate_size

    @classmethod
    def bn128(cls):
        return cls("bn128", optimized_bn128, BN128_FR, 32, 32)

    @classmethod
    def bls12_381(cls):
        return cls("bls12_381", optimized_bls12_381, BLS12_381_FR, 32, 48)

    @classmethod
    def from_name(cls, name):
        """곡선 이름으로 엔진을 만든다.

        Raises:
            ValueError: 지원하지 않는 곡선 이름
        """
        factories = {"bn128": cls.bn128, "bls12_381": cls.bls12_381}
        try:
            return factories[name]()
        except KeyError:
            raise ValueError(
                f"지원하지 않는 곡선입니다: {name} (지원: {', '.join(factories)})"
            ) from None

    def __repr__(self):
        return f"PairingEngine({self.name})"

    # ── 스칼라 ──

    def scalar(self, value):
        return self.FR(int(value))

    def random_scalar(self, rng=None):
        """[1, r) 에서 균일하게 스칼라를 뽑는다.

        Args:
            rng: random.Random 호환 난수원. None이면 secrets.SystemRandom 사용.
                 테스트는 random.Random(seed)를 넘겨 결정론적으로 재현한다.
        """
        if rng is None:
            rng = secrets.SystemRandom()
        return self.FR(rng.randrange(1, self.curve_order))

    # ── 그룹 원소 ──

    def generator(self, kind):
        point = self.curve.G1 if kind is GroupKind.G1 else self.curve.G2
        return GroupElement(self, kind, point)

    def identity(self, kind):
        point = self.curve.Z1 if kind is GroupKind.G1 else self.curve.Z2
        return GroupElement(self, kind, point)

    def _curve_b(self, kind):
        return self.curve.b if kind is GroupKind.G1 else self.curve.b2

    def element(self, kind, point):
        """외부에서 받은 점을 검증하여 GroupElement로 감싼다.

        Args:
            kind: GroupKind
            point: None (무한원점), 아핀 (x, y), 또는 사영 (x, y, z)

        Raises:
            ArithmeticFailure: 곡선 위의 점이 아니거나 위수 r 부분군 밖의 점일 때
        """
        if point is None:
            return self.identity(kind)
        if len(point) == 2:
            x, y = point
            point = (x, y, x.one())
        if not self.curve.is_on_curve(point, self._curve_b(kind)):
            raise ArithmeticFailure(f"{self.name} {kind.value} 곡선 위의 점이 아닙니다")
        # GroupElement.__mul__은 스칼라를 r로 줄이므로 곡선 모듈을 직접 호출한다
        if not self.curve.is_inf(self.curve.multiply(point, self.curve_order)):
            raise ArithmeticFailure(
                f"{self.name} {kind.value} 위수 r 부분군의 점이 아닙니다"
            )
        return GroupElement(self, kind, point)

    def _coordinate(self, value):
        value = int(value)
        if not 0 <= value < self.field_modulus:
            raise ArithmeticFailure(f"필드 범위를 벗어난 좌표입니다: {value}")
        return value

    def point_from_ints(self, kind, coords):
        """정수 좌표로부터 점을 만든다.

        G1: (x, y)
        G2: ((x_c0, x_c1), (y_c0, y_c1))
        None은 무한원점.
        """
        if coords is None:
            return self.identity(kind)
        x, y = coords
        if kind is GroupKind.G1:
            point = (self.curve.FQ(self._coordinate(x)),
                     self.curve.FQ(self._coordinate(y)))
        else:
            point = (self.curve.FQ2([self._coordinate(c) for c in x]),
                     self.curve.FQ2([self._coordinate(c) for c in y]))
        return self.element(kind, point)

    def point_to_ints(self, element):
        """point_from_ints의 역. 무한원점은 None."""
        affine = element.to_affine()
        if affine is None:
            return None
        x, y = affine
        if element.kind is GroupKind.G1:
            return (int(x), int(y))
        return (tuple(int(c) for c in x.coeffs), tuple(int(c) for c in y.coeffs))

    # ── 페어링 ──

    def _require_kind(self, element, kind):
        if not isinstance(element, GroupElement) or element.kind is not kind:
            if isinstance(element, GroupElement):
                found = element.kind.value
            else:
                found = type(element).__name__
            raise GroupKindMismatch(f"{kind.value} 원소가 필요하지만 {found}를 받았습니다")
        if element.engine.name != self.name:
            raise GroupKindMismatch(
                f"{self.name} 엔진에 {element.engine.name} 원소가 전달되었습니다"
            )

    def pairing(self, g1_point, g2_point):
        """e(g1_point, g2_point) ∈ GT.

        주의:
            py_ecc의 pairing 인자 순서는 (G2, G1)이다. 여기서는 수학 표기 순서인
            (G1, G2)로 받는다.
        """
        self._require_kind(g1_point, GroupKind.G1)
        self._require_kind(g2_point, GroupKind.G2)
        try:
            return self.curve.pairing(g2_point.point, g1_point.point)
        except AssertionError as exc:
            raise ArithmeticFailure(f"{self.name} 페어링 계산 실패") from exc

    def pairing_product_is_one(self, pairs):
        """Π e(Pᵢ, Qᵢ) == 1 인지 확인한다.

        Miller loop를 쌍마다 한 번씩 돌린 뒤 곱하고, 최종 거듭제곱
        (final exponentiation)은 한 번만 수행한다.

        Args:
            pairs: [(G1 원소, G2 원소), ...]

        Returns:
            bool
        """
        result = self.curve.FQ12.one()
        try:
            for g1_point, g2_point in pairs:
                self._require_kind(g1_point, GroupKind.G1)
                self._require_kind(g2_point, GroupKind.G2)
                result = result * self.curve.pairing(
                    g2_point.point, g1_point.point, final_exponentiate=False
                )
            result = self.curve.final_exponentiate(result)
        except AssertionError as exc:
            raise ArithmeticFailure(f"{self.name} 페어링 계산 실패") from exc
        return result == self.curve.FQ12.one()
