"""
SRS Verifier Tests
====================

same-ratio 논증과 트랜스크립트 검증기를 테스트한다.

테스트 범위:
  - VerificationKey 구성: 선형 챌린지 체인 z, z², z³, ... (제곱 체인이면 실패)
  - same_ratio: 네 개의 이름 있는 피연산자, 자리 바꿈 탐지
  - 거듭제곱열 검증: 완전성(completeness), 건전성(soundness), degree = 2 경계
  - 트랜스크립트 검증: 다섯 검사의 이름별 보고
"""

import random

import pytest

from srs_audit.errors import (
    DegenerateDegreeError,
    GroupKindMismatch,
    InsufficientDataError,
    PairingMismatch,
)
from srs_audit.field import GroupKind, PairingEngine
from srs_audit.transcript import Sequence, Transcript
from srs_audit.verifier import (
    CHECK_NAMES,
    TranscriptReport,
    VerificationKey,
    same_ratio,
    same_ratio_keys,
    same_ratio_preprocess,
    validate_polynomial_evaluation,
    verify_power_sequence,
    verify_transcript,
)

from builders import DEGREE, TOXIC_ALPHA, TOXIC_X_VAL, power_sequence


def random_element(engine, kind, seed):
    return engine.generator(kind) * random.Random(seed).randrange(1, engine.curve_order)


@pytest.fixture(scope="module")
def g1_x(engine):
    return power_sequence(engine, GroupKind.G1, TOXIC_X_VAL, DEGREE)


@pytest.fixture(scope="module")
def g2_x(engine):
    return power_sequence(engine, GroupKind.G2, TOXIC_X_VAL, DEGREE)


# ─────────────────────────────────────────────────────────────────────
# VerificationKey
# ─────────────────────────────────────────────────────────────────────

class TestVerificationKey:
    def test_kind(self, engine):
        g = engine.generator(GroupKind.G2)
        assert VerificationKey(g, g * 2).kind is GroupKind.G2

    def test_mixed_kinds_rejected(self, engine):
        with pytest.raises(GroupKindMismatch):
            VerificationKey(engine.generator(GroupKind.G1), engine.generator(GroupKind.G2))


class TestSameRatioPreprocess:
    @pytest.mark.parametrize("degree", [2, 3, 4, 5])
    def test_linear_challenge_chain(self, engine, g1_x, degree):
        """lhs = Σ z^(i+1)·seq[i], rhs = Σ z^i·seq[i] 를 독립적으로 재계산하여 비교.

        z, z², z⁴, z⁸ 처럼 제곱으로 갱신하는 구현이면 degree ≥ 3 에서 실패한다.
        """
        z = engine.random_scalar(random.Random(7))
        key = same_ratio_preprocess(g1_x, degree, engine, random.Random(7))

        expected_lhs = engine.identity(GroupKind.G1)
        for i in range(0, degree - 1):
            expected_lhs = expected_lhs + g1_x[i] * (z ** (i + 1))
        expected_rhs = engine.identity(GroupKind.G1)
        for i in range(1, degree):
            expected_rhs = expected_rhs + g1_x[i] * (z ** i)

        assert key.lhs == expected_lhs
        assert key.rhs == expected_rhs

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_honest_rhs_is_secret_times_lhs(self, engine, g1_x, seed):
        """정직한 원소열이면 어떤 챌린지에서도 rhs = s·lhs"""
        key = same_ratio_preprocess(g1_x, DEGREE, engine, random.Random(seed))
        assert key.rhs == key.lhs * TOXIC_X_VAL

    def test_honest_g2_sequence(self, engine, g2_x):
        key = same_ratio_preprocess(g2_x, DEGREE, engine, random.Random(11))
        assert key.kind is GroupKind.G2
        assert key.rhs == key.lhs * TOXIC_X_VAL

    def test_degree_two_skips_loop(self, engine, g1_x):
        z = engine.random_scalar(random.Random(3))
        key = same_ratio_preprocess(g1_x, 2, engine, random.Random(3))
        assert key.lhs == g1_x[0] * z
        assert key.rhs == g1_x[1] * z

    def test_tampered_breaks_relation(self, engine, g1_x):
        tampered = g1_x.replace(3, random_element(engine, GroupKind.G1, 42))
        key = same_ratio_preprocess(tampered, DEGREE, engine, random.Random(5))
        assert key.rhs != key.lhs * TOXIC_X_VAL

    def test_only_first_degree_elements_used(self, engine, g1_x):
        junk_tail = Sequence(GroupKind.G1, list(g1_x.head(3)) + [engine.generator(GroupKind.G1)] * 4)
        a = same_ratio_preprocess(g1_x, 3, engine, random.Random(8))
        b = same_ratio_preprocess(junk_tail, 3, engine, random.Random(8))
        assert a.lhs == b.lhs
        assert a.rhs == b.rhs

    def test_sequence_not_mutated(self, engine, g1_x):
        before = list(g1_x)
        same_ratio_preprocess(g1_x, DEGREE, engine, random.Random(1))
        assert list(g1_x) == before

    @pytest.mark.parametrize("degree", [0, 1])
    def test_degenerate_degree(self, engine, g1_x, degree):
        with pytest.raises(DegenerateDegreeError):
            same_ratio_preprocess(g1_x, degree, engine)

    def test_short_sequence(self, engine, g1_x):
        with pytest.raises(InsufficientDataError):
            same_ratio_preprocess(g1_x, DEGREE + 1, engine)


# ─────────────────────────────────────────────────────────────────────
# same_ratio
# ─────────────────────────────────────────────────────────────────────

class TestSameRatio:
    def test_same_ratio_holds(self, engine):
        """e(P, s·Q) == e(s·P, Q)"""
        p = engine.generator(GroupKind.G1) * 17
        q = engine.generator(GroupKind.G2) * 23
        assert same_ratio(g1_lhs=p, g1_rhs=p * 5, g2_lhs=q * 5, g2_rhs=q) is True

    def test_swapped_g2_operands_detected(self, engine):
        """g2_lhs 와 g2_rhs 를 바꾸면 관계가 깨진다"""
        p = engine.generator(GroupKind.G1) * 17
        q = engine.generator(GroupKind.G2) * 23
        assert same_ratio(g1_lhs=p, g1_rhs=p * 5, g2_lhs=q, g2_rhs=q * 5) is False

    def test_g1_operand_in_g2_slot_rejected(self, engine):
        """G1 rhs 를 G2 rhs 자리에 넣는 실수는 그룹 태그로 잡힌다"""
        p = engine.generator(GroupKind.G1)
        q = engine.generator(GroupKind.G2)
        with pytest.raises(GroupKindMismatch):
            same_ratio(p, p * 2, q * 2, p * 2)

    def test_keys_form(self, engine):
        p = engine.generator(GroupKind.G1) * 3
        q = engine.generator(GroupKind.G2) * 4
        g1_key = VerificationKey(p, p * 9)
        g2_key = VerificationKey(q * 9, q)
        assert same_ratio_keys(g1_key, g2_key) is True


# ─────────────────────────────────────────────────────────────────────
# 거듭제곱열 검증
# ─────────────────────────────────────────────────────────────────────

class TestValidatePolynomialEvaluation:
    def test_end_to_end_positive(self, engine, g1_x, g2_x, rng):
        """g1_x[i] = s^(i+1)·G1, comparator = s·G2, degree = 5"""
        assert validate_polynomial_evaluation(g1_x, g2_x[0], DEGREE, engine, rng) is True

    def test_g2_sequence_with_g1_comparator(self, engine, g1_x, g2_x, rng):
        assert verify_power_sequence(g2_x, g1_x[0], DEGREE, engine, rng) is True

    @pytest.mark.parametrize("seed", [10, 20, 30])
    def test_end_to_end_negative(self, engine, g1_x, g2_x, seed):
        """g1_x[3] 을 독립적인 랜덤 원소로 바꾸면 어떤 챌린지에서도 실패"""
        tampered = g1_x.replace(3, random_element(engine, GroupKind.G1, 1000 + seed))
        result = validate_polynomial_evaluation(
            tampered, g2_x[0], DEGREE, engine, random.Random(seed))
        assert result is False

    def test_degree_two_honest(self, engine, g1_x, g2_x, rng):
        assert validate_polynomial_evaluation(g1_x, g2_x[0], 2, engine, rng) is True

    def test_degree_two_tampered(self, engine, g1_x, g2_x, rng):
        tampered = g1_x.replace(1, random_element(engine, GroupKind.G1, 77))
        assert validate_polynomial_evaluation(tampered, g2_x[0], 2, engine, rng) is False

    def test_wrong_comparator(self, engine, g1_x, rng):
        other = engine.generator(GroupKind.G2) * (TOXIC_X_VAL + 1)
        assert validate_polynomial_evaluation(g1_x, other, DEGREE, engine, rng) is False

    @pytest.mark.parametrize("degree", [0, 1])
    def test_degenerate_degree(self, engine, g1_x, g2_x, degree):
        with pytest.raises(DegenerateDegreeError):
            validate_polynomial_evaluation(g1_x, g2_x[0], degree, engine)

    def test_short_sequence(self, engine, g1_x, g2_x):
        with pytest.raises(InsufficientDataError):
            validate_polynomial_evaluation(g1_x.head(3), g2_x[0], 4, engine)

    def test_comparator_same_group_rejected(self, engine, g1_x):
        with pytest.raises(GroupKindMismatch):
            validate_polynomial_evaluation(g1_x, g1_x[0], DEGREE, engine)


class TestIndependentCurveContext:
    def test_bls12_381_power_sequence(self):
        bls = PairingEngine.bls12_381()
        seq = power_sequence(bls, GroupKind.G1, TOXIC_X_VAL, 3)
        comparator = bls.generator(GroupKind.G2) * TOXIC_X_VAL
        assert verify_power_sequence(seq, comparator, 3, bls, random.Random(2)) is True


# ─────────────────────────────────────────────────────────────────────
# 트랜스크립트 검증
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def honest_report(engine, honest_transcript):
    return verify_transcript(honest_transcript, engine, random.Random(2024))


@pytest.fixture(scope="module")
def wrong_alpha_report(engine, wrong_alpha_transcript):
    return verify_transcript(wrong_alpha_transcript, engine, random.Random(2024))


class TestValidateTranscript:
    def test_honest_passes(self, honest_report):
        assert honest_report.passed is True
        assert honest_report.failed == []
        assert bool(honest_report) is True

    def test_all_checks_reported(self, honest_report):
        assert list(honest_report.checks) == list(CHECK_NAMES)
        assert all(honest_report.checks.values())

    def test_report_metadata(self, honest_report):
        assert honest_report.degree == DEGREE
        assert honest_report.curve == "bn128"

    def test_honest_raise_for_failure_is_noop(self, honest_report):
        honest_report.raise_for_failure()

    def test_wrong_alpha_identified(self, wrong_alpha_report):
        """g1_alpha_x 의 이동 값만 틀리면 alpha_shift 만 실패한다.

        틀린 이동 값이라도 g1_alpha_x 자체는 여전히 s의 거듭제곱열이므로
        나머지 네 검사는 통과한다.
        """
        assert wrong_alpha_report.passed is False
        assert wrong_alpha_report.failed == ["alpha_shift"]
        for name in CHECK_NAMES[:4]:
            assert wrong_alpha_report.checks[name] is True

    def test_wrong_alpha_raise_for_failure(self, wrong_alpha_report):
        with pytest.raises(PairingMismatch) as info:
            wrong_alpha_report.raise_for_failure()
        assert info.value.failed == ["alpha_shift"]

    def test_tampered_g2_element_identified(self, engine, honest_transcript):
        t = honest_transcript
        tampered = t.with_sequence(
            "g2_x", t.g2_x.replace(2, random_element(engine, GroupKind.G2, 5)))
        report = verify_transcript(tampered, engine, random.Random(1))
        assert report.failed == ["g2_x_powers"]

    def test_degenerate_degree_before_pairing(self, engine, honest_transcript):
        t = honest_transcript
        bad = Transcript(t.g1_x, t.g1_alpha_x, t.g2_x, t.g2_alpha_x, 1)
        with pytest.raises(DegenerateDegreeError):
            verify_transcript(bad, engine)

    def test_short_sequence_before_pairing(self, engine, honest_transcript):
        t = honest_transcript
        short = t.with_sequence("g1_alpha_x", t.g1_alpha_x.head(2))
        with pytest.raises(InsufficientDataError):
            verify_transcript(short, engine)


class TestTranscriptReport:
    def test_failed_in_check_order(self):
        checks = {name: True for name in CHECK_NAMES}
        checks["alpha_shift"] = False
        checks["g1_x_powers"] = False
        report = TranscriptReport(checks, 4, "bn128")
        assert report.failed == ["g1_x_powers", "alpha_shift"]
        assert not report
