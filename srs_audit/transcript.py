"""
SRS 트랜스크립트 데이터 모델
==============================

감사 대상이 되는 SRS를 표현한다.

**Powers-of-tau 형태**:
  비밀 값 s ("toxic waste")와 이동(shift) 값 α에 대해

  g1_x        = [s·G1,  s²·G1,  ..., sⁿ·G1]
  g1_alpha_x  = [αs·G1, αs²·G1, ..., αsⁿ·G1]
  g2_x        = [s·G2,  s²·G2,  ..., sⁿ·G2]
  g2_alpha_x  = [αs·G2, αs²·G2, ..., αsⁿ·G2]

  여기서 n = degree. 각 원소열은 자신이 속한 그룹(GroupKind)을 명시적으로
  가지며, 같은 그룹의 원소만 담을 수 있다.

**전제조건**:
  - degree ≥ 2 (그렇지 않으면 DegenerateDegreeError)
  - 각 원소열의 길이 ≥ degree (그렇지 않으면 InsufficientDataError)
  이 검사는 페어링 계산 이전에, 인덱싱 이전에 수행된다.
"""

from srs_audit.errors import (
    DegenerateDegreeError,
    GroupKindMismatch,
    InsufficientDataError,
)
from srs_audit.field import GroupElement, GroupKind


def check_degree(degree):
    """degree ≥ 2 인지 확인한다."""
    if isinstance(degree, bool) or not isinstance(degree, int) or degree < 2:
        raise DegenerateDegreeError(degree)


def check_length(sequence, degree, name="sequence"):
    """원소열이 최소 degree개의 원소를 가지는지 확인한다."""
    if len(sequence) < degree:
        raise InsufficientDataError(name, degree, len(sequence))


class Sequence:
    """같은 그룹 원소들의 순서 있는 열.

    위치 i (0부터)의 원소는 s^(i+1)·G 로 해석된다.

    속성:
        kind: 원소들이 속한 GroupKind (빈 열이어도 유지됨)
        elements: GroupElement 튜플
    """

    def __init__(self, kind, elements=()):
        self.kind = kind
        self.elements = tuple(elements)
        for i, element in enumerate(self.elements):
            if not isinstance(element, GroupElement):
                raise TypeError(f"{i}번째 원소가 GroupElement가 아닙니다")
            if element.kind is not kind:
                raise GroupKindMismatch(
                    f"{kind.value} 원소열의 {i}번째 원소가 {element.kind.value}입니다"
                )

    def __len__(self):
        return len(self.elements)

    def __getitem__(self, index):
        return self.elements[index]

    def __iter__(self):
        return iter(self.elements)

    def __eq__(self, other):
        if not isinstance(other, Sequence):
            return NotImplemented
        return self.kind is other.kind and self.elements == other.elements

    def __repr__(self):
        return f"Sequence({self.kind.value}, len={len(self.elements)})"

    def head(self, count):
        """앞쪽 count개의 원소만 담은 새 원소열."""
        return Sequence(self.kind, self.elements[:count])

    def replace(self, index, element):
        """index 위치의 원소만 바꾼 새 원소열."""
        elements = list(self.elements)
        elements[index] = element
        return Sequence(self.kind, elements)


class Manifest:
    """세레모니 메타데이터.

    속성:
        degree: 다항식 차수 n
        curve: 곡선 이름
        provenance: 출처 설명 (참여자, 파일명 등)
        counts: 원소열 이름 → 저장된 원소 개수
    """

    def __init__(self, degree, curve, provenance="", counts=None):
        self.degree = degree
        self.curve = curve
        self.provenance = provenance
        self.counts = dict(counts or {})

    def __eq__(self, other):
        if not isinstance(other, Manifest):
            return NotImplemented
        return (self.degree, self.curve, self.provenance, self.counts) == (
            other.degree, other.curve, other.provenance, other.counts
        )

    def __repr__(self):
        return (f"Manifest(degree={self.degree}, curve={self.curve!r}, "
                f"provenance={self.provenance!r})")


# 원소열 이름 → 그룹
SEQUENCE_KINDS = {
    "g1_x": GroupKind.G1,
    "g1_alpha_x": GroupKind.G1,
    "g2_x": GroupKind.G2,
    "g2_alpha_x": GroupKind.G2,
}


class Transcript:
    """감사 대상 SRS 전체.

    속성:
        g1_x, g1_alpha_x: G1 원소열
        g2_x, g2_alpha_x: G2 원소열
        degree: 다항식 차수 n
        manifest: Manifest 또는 None
    """

    def __init__(self, g1_x, g1_alpha_x, g2_x, g2_alpha_x, degree, manifest=None):
        self.g1_x = g1_x
        self.g1_alpha_x = g1_alpha_x
        self.g2_x = g2_x
        self.g2_alpha_x = g2_alpha_x
        self.degree = degree
        self.manifest = manifest
        for name, sequence in self.sequences().items():
            if sequence.kind is not SEQUENCE_KINDS[name]:
                raise GroupKindMismatch(
                    f"{name}은 {SEQUENCE_KINDS[name].value} 원소열이어야 합니다"
                )

    def sequences(self):
        """이름 → 원소열 (고정된 순서)."""
        return {
            "g1_x": self.g1_x,
            "g1_alpha_x": self.g1_alpha_x,
            "g2_x": self.g2_x,
            "g2_alpha_x": self.g2_alpha_x,
        }

    def validate(self):
        """페어링 검사 전에 차수와 길이 전제조건을 확인한다."""
        check_degree(self.degree)
        for name, sequence in self.sequences().items():
            check_length(sequence, self.degree, name)

    def with_sequence(self, name, sequence):
        """원소열 하나를 바꾼 새 트랜스크립트."""
        sequences = self.sequences()
        sequences[name] = sequence
        return Transcript(degree=self.degree, manifest=self.manifest, **sequences)
