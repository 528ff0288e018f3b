"""
SRS 감사 (Structured Reference String audit)
===============================================

페어링 기반 영지식 증명 시스템의 공개 파라미터(SRS)가 하나의 비밀 값의
연속 거듭제곱을 G1, G2 양쪽에서 일관되게 인코딩하는지, 비밀을 모른 채로
검증한다.

사용 예시:
    >>> from srs_audit import PairingEngine, verify_transcript
    >>> engine = PairingEngine.bn128()
    >>> report = verify_transcript(transcript, engine)
    >>> report.passed
"""

from srs_audit.errors import (
    ArithmeticFailure,
    DegenerateDegreeError,
    GroupKindMismatch,
    InsufficientDataError,
    PairingMismatch,
    SRSAuditError,
)
from srs_audit.field import GroupElement, GroupKind, PairingEngine
from srs_audit.transcript import Manifest, Sequence, Transcript
from srs_audit.verifier import (
    CHECK_NAMES,
    TranscriptReport,
    VerificationKey,
    same_ratio,
    same_ratio_keys,
    same_ratio_preprocess,
    validate_polynomial_evaluation,
    validate_transcript,
    verify_power_sequence,
    verify_transcript,
)
