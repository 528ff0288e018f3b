"""
SRS 감사 예외 계층
====================

구조적 전제조건 위반, 산술 오류, 암호학적 검사 실패를 서로 구별한다.

  SRSAuditError
  ├── DegenerateDegreeError   차수 < 2
  ├── InsufficientDataError   원소열/파일이 요구 길이보다 짧음
  ├── ArithmeticFailure       곡선 밖의 점, 필드 범위를 벗어난 좌표 등
  ├── GroupKindMismatch       G1/G2 자리에 다른 그룹의 원소가 들어옴
  └── PairingMismatch         same-ratio 관계 불성립 (정직하지 않은 SRS)

검증 함수들은 PairingMismatch를 던지지 않고 False(또는 보고서)를 반환한다.
PairingMismatch는 TranscriptReport.raise_for_failure()에서만 발생한다.
"""


class SRSAuditError(Exception):
    """srs_audit 패키지의 모든 예외의 기반 클래스."""


class DegenerateDegreeError(SRSAuditError, ValueError):
    def __init__(self, degree):
        super().__init__(f"다항식 차수는 2 이상이어야 합니다: {degree}")
        self.degree = degree


class InsufficientDataError(SRSAuditError, ValueError):
    def __init__(self, name, required, actual):
        super().__init__(
            f"{name}: 최소 {required}개의 원소가 필요하지만 {actual}개만 있습니다"
        )
        self.name = name
        self.required = required
        self.actual = actual


class ArithmeticFailure(SRSAuditError):
    """잘못된 형식의 그룹/필드 원소, 또는 페어링 엔진 내부 산술 실패."""


class GroupKindMismatch(SRSAuditError, TypeError):
    """G1 자리에 G2 원소가 오는 등 소스 그룹이 맞지 않을 때."""


class PairingMismatch(SRSAuditError):
    """구조 검사는 통과했으나 same-ratio 페어링 관계가 성립하지 않음."""

    def __init__(self, failed):
        super().__init__("실패한 검사: " + ", ".join(failed))
        self.failed = list(failed)
