"""
SRS 트랜스크립트 검증기 (Same-Ratio 논증)
==========================================

비밀 값을 모르는 상태에서, 주어진 원소열이 정말 하나의 비밀 s의
연속 거듭제곱 [s, s², ..., sⁿ]을 인코딩하는지 페어링으로 확인한다.

**Same-ratio 검사**:
  G1 쌍 (P, P')와 G2 쌍 (Q, Q')에 대해
      e(P, Q) == e(P', Q')
  이면 P'/P 와 Q/Q' 의 이산로그 비율이 같다. 비율 자체는 드러나지 않는다.

**일괄 처리 (batching)**:
  원소열 [x, x², ..., xⁿ] 의 인접 원소 비율을 하나씩 검사하면 n번의 페어링이
  필요하다. 대신 랜덤 챌린지 z로 두 개의 선형결합을 만든다:

      lhs = z·x + z²·x² + ... + z^(n-1)·x^(n-1)
      rhs = z·x² + z²·x³ + ... + z^(n-1)·xⁿ

  정직한 원소열이면 rhs = s·lhs 이다. 각 항에 독립적인 z의 거듭제곱이
  곱해지므로, 한 원소라도 틀리면 무시할 수 있는 확률로만 관계가 성립한다.
  그 후 페어링 한 번으로 rhs = s·lhs 를 확인한다.

**전체 트랜스크립트 (5개 검사)**:
  1. g1_x 가 거듭제곱열인지 (기준: g2_x[0] = s·G2)
  2. g1_alpha_x 가 거듭제곱열인지 (기준: g2_x[0])
  3. g2_x 가 거듭제곱열인지 (기준: g1_x[0] = s·G1)
  4. g2_alpha_x 가 거듭제곱열인지 (기준: g1_x[0])
  5. α 이동이 두 그룹에서 같은지:
       e(g1_x[0], g2_alpha_x[0]) == e(g1_alpha_x[0], g2_x[0])

  다섯 검사는 모두 실행되며(단락 평가 없음), 결과는 이름별로 보고된다.

사용 예시:
    >>> from srs_audit.verifier import verify_transcript
    >>> report = verify_transcript(transcript, engine)
    >>> report.passed, report.failed   # (True, [])
"""

import logging

from srs_audit.errors import GroupKindMismatch, PairingMismatch
from srs_audit.field import GroupKind
from srs_audit.transcript import check_degree, check_length

logger = logging.getLogger(__name__)


CHECK_NAMES = (
    "g1_x_powers",
    "g1_alpha_x_powers",
    "g2_x_powers",
    "g2_alpha_x_powers",
    "alpha_shift",
)


class VerificationKey:
    """한 그룹 안의 (lhs, rhs) 쌍. 한 번의 검사 동안만 사용된다."""

    def __init__(self, lhs, rhs):
        if lhs.kind is not rhs.kind:
            raise GroupKindMismatch(
                f"lhs({lhs.kind.value})와 rhs({rhs.kind.value})의 그룹이 다릅니다"
            )
        self.lhs = lhs
        self.rhs = rhs

    @property
    def kind(self):
        return self.lhs.kind


def same_ratio_preprocess(sequence, degree, engine, rng=None):
    """원소열을 랜덤 챌린지로 일괄 처리하여 VerificationKey를 만든다.

    챌린지 z를 한 번 뽑고, z, z², z³, ... 를 가중치로 사용한다:

        key.lhs = Σ_{i=0}^{n-2} z^(i+1) · seq[i]
        key.rhs = Σ_{i=1}^{n-1} z^i     · seq[i]

    seq[i] = s^(i+1)·G 이면 key.rhs = s · key.lhs 가 된다.

    Args:
        sequence: Sequence (길이 ≥ degree)
        degree: 사용할 원소 개수 n (≥ 2)
        engine: PairingEngine
        rng: 챌린지 난수원 (None이면 암호학적 난수)

    Returns:
        VerificationKey (sequence와 같은 그룹)

    예시 (n = 3):
        lhs = z·seq[0] + z²·seq[1]
        rhs = z·seq[1] + z²·seq[2]
    """
    check_degree(degree)
    check_length(sequence, degree, "sequence")

    challenge = engine.random_scalar(rng)
    multiplier = challenge

    lhs = sequence[0] * challenge
    rhs = engine.identity(sequence.kind)

    # degree == 2 이면 루프를 돌지 않는다
    for i in range(1, degree - 1):
        rhs = rhs + sequence[i] * multiplier   # z^i
        multiplier = multiplier * challenge
        lhs = lhs + sequence[i] * multiplier   # z^(i+1)

    rhs = rhs + sequence[degree - 1] * multiplier  # z^(n-1)

    return VerificationKey(lhs, rhs)


def same_ratio(g1_lhs, g1_rhs, g2_lhs, g2_rhs):
    """e(g1_lhs, g2_lhs) == e(g1_rhs, g2_rhs) 를 확인한다.

    두 페어링을 따로 계산하지 않고
        ML(g1_lhs, g2_lhs) · ML(-g1_rhs, g2_rhs)
    를 최종 거듭제곱한 결과가 GT의 항등원인지 본다.

    Args:
        g1_lhs, g1_rhs: G1 원소
        g2_lhs, g2_rhs: G2 원소

    Returns:
        bool

    Raises:
        GroupKindMismatch: 인자의 그룹이 자리와 맞지 않을 때
    """
    for name, element, kind in (
        ("g1_lhs", g1_lhs, GroupKind.G1),
        ("g1_rhs", g1_rhs, GroupKind.G1),
        ("g2_lhs", g2_lhs, GroupKind.G2),
        ("g2_rhs", g2_rhs, GroupKind.G2),
    ):
        if getattr(element, "kind", None) is not kind:
            raise GroupKindMismatch(f"{name}은 {kind.value} 원소여야 합니다")

    engine = g1_lhs.engine
    return engine.pairing_product_is_one([
        (g1_lhs, g2_lhs),
        (-g1_rhs, g2_rhs),
    ])


def same_ratio_keys(g1_key, g2_key):
    """VerificationKey 두 개로 same_ratio 를 호출한다."""
    return same_ratio(g1_key.lhs, g1_key.rhs, g2_key.lhs, g2_key.rhs)


def validate_polynomial_evaluation(evaluation, comparator, degree, engine, rng=None):
    """evaluation 이 comparator 가 가리키는 비밀 값의 거듭제곱열인지 확인한다.

    comparator = s·H (H는 반대 그룹의 생성자) 일 때,
        key   = same_ratio_preprocess(evaluation)   → (L, s·L)
        delta = (comparator, H)                      → (s·H, H)
    이고 e(L, s·H) == e(s·L, H) 를 검사한다.

    페어링의 첫 인자는 항상 G1 이므로, evaluation 의 GroupKind 로
    key 와 delta 중 어느 쪽이 G1 자리에 올지 결정한다.

    Args:
        evaluation: Sequence
        comparator: evaluation 과 반대 그룹의 GroupElement
        degree: 다항식 차수 (≥ 2)
        engine: PairingEngine
        rng: 챌린지 난수원

    Returns:
        bool
    """
    check_degree(degree)
    check_length(evaluation, degree, "evaluation")
    if comparator.kind is evaluation.kind:
        raise GroupKindMismatch(
            f"comparator는 {evaluation.kind.other.value} 원소여야 합니다"
        )

    key = same_ratio_preprocess(evaluation, degree, engine, rng)
    delta = VerificationKey(comparator, engine.generator(comparator.kind))

    if evaluation.kind is GroupKind.G1:
        return same_ratio_keys(key, delta)
    if evaluation.kind is GroupKind.G2:
        return same_ratio_keys(delta, key)
    raise GroupKindMismatch(f"알 수 없는 그룹입니다: {evaluation.kind!r}")


verify_power_sequence = validate_polynomial_evaluation


class TranscriptReport:
    """트랜스크립트 검사 결과.

    속성:
        checks: 검사 이름 → bool (CHECK_NAMES 순서)
        degree: 검사한 차수
        curve: 곡선 이름
    """

    def __init__(self, checks, degree, curve):
        self.checks = {name: bool(checks[name]) for name in CHECK_NAMES}
        self.degree = degree
        self.curve = curve

    @property
    def passed(self):
        return all(self.checks.values())

    @property
    def failed(self):
        return [name for name, ok in self.checks.items() if not ok]

    def __bool__(self):
        return self.passed

    def __repr__(self):
        return f"TranscriptReport(passed={self.passed}, failed={self.failed})"

    def raise_for_failure(self):
        """실패한 검사가 있으면 PairingMismatch 를 던진다."""
        if not self.passed:
            raise PairingMismatch(self.failed)


def validate_transcript(transcript, engine, rng=None):
    """SRS 트랜스크립트의 다섯 가지 검사를 모두 수행한다.

    Args:
        transcript: Transcript
        engine: PairingEngine
        rng: 챌린지 난수원 (네 번의 거듭제곱열 검사가 공유)

    Returns:
        TranscriptReport

    Raises:
        DegenerateDegreeError, InsufficientDataError: 페어링 계산 이전에
        GroupKindMismatch, ArithmeticFailure: 잘못된 입력
    """
    transcript.validate()
    degree = transcript.degree
    t = transcript

    checks = {}
    checks["g1_x_powers"] = validate_polynomial_evaluation(
        t.g1_x, t.g2_x[0], degree, engine, rng)
    checks["g1_alpha_x_powers"] = validate_polynomial_evaluation(
        t.g1_alpha_x, t.g2_x[0], degree, engine, rng)
    checks["g2_x_powers"] = validate_polynomial_evaluation(
        t.g2_x, t.g1_x[0], degree, engine, rng)
    checks["g2_alpha_x_powers"] = validate_polynomial_evaluation(
        t.g2_alpha_x, t.g1_x[0], degree, engine, rng)

    # e(g1_x[0], g2_alpha_x[0]) == e(g1_alpha_x[0], g2_x[0])
    checks["alpha_shift"] = same_ratio(
        g1_lhs=t.g1_x[0],
        g1_rhs=t.g1_alpha_x[0],
        g2_lhs=t.g2_alpha_x[0],
        g2_rhs=t.g2_x[0],
    )

    for name in CHECK_NAMES:
        logger.debug("%s: %s", name, "ok" if checks[name] else "FAILED")

    report = TranscriptReport(checks, degree, engine.name)
    if report.passed:
        logger.info("transcript verified (curve=%s, degree=%d)", engine.name, degree)
    else:
        logger.warning("transcript rejected (curve=%s, degree=%d): %s",
                       engine.name, degree, ", ".join(report.failed))
    return report


verify_transcript = validate_transcript
