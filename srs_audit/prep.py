"""
전처리 단계: 검증이 끝난 데이터를 증명기용 덤프로 변환
========================================================

검증된 트랜스크립트와 생성 다항식(generator polynomial)을 읽어서
두 개의 원시 바이너리 파일로 다시 쓴다. 암호학적 검사는 하지 않는다.

  generator_prep.dat   degree+1 개의 스칼라
  g1_x_prep.dat        degree+1 개의 G1 점 [G1, s·G1, ..., sⁿ·G1]
                       (0번 원소로 x⁰·G1 = G1 생성자를 앞에 붙인다)

명령행:
    $ srs-prep 64 --setup-dir setup_db --db setup_db/transcript.json
    인자가 없거나 오류가 나면 종료 코드 1, 성공하면 0.
"""

import argparse
import logging
import os
import sys
import time

from srs_audit import streaming
from srs_audit.config import Config, configure_logging
from srs_audit.errors import SRSAuditError
from srs_audit.field import GroupKind, PairingEngine
from srs_audit.store import TranscriptStore
from srs_audit.transcript import check_degree

logger = logging.getLogger(__name__)

GENERATOR_FILE = "generator.dat"
GENERATOR_PREP_FILE = "generator_prep.dat"
G1_X_PREP_FILE = "g1_x_prep.dat"


def transform(degree, setup_dir, engine, store):
    """생성 다항식과 g1_x 를 전처리 파일로 쓴다.

    Args:
        degree: 다항식 차수 n
        setup_dir: generator.dat 가 있고 결과 파일을 쓸 디렉터리
        engine: PairingEngine
        store: g1_x 를 제공하는 TranscriptStore

    Returns:
        (generator_prep 경로, g1_x_prep 경로)
    """
    check_degree(degree)
    logger.info("Loading data...")

    generator_polynomial = streaming.read_field_elements(
        os.path.join(setup_dir, GENERATOR_FILE), engine, degree + 1)
    g1_x = store.load(degree)[0]
    g1_x_prep = [engine.generator(GroupKind.G1)] + list(g1_x)

    logger.info("Transforming...")
    start = time.perf_counter()

    generator_path = os.path.join(setup_dir, GENERATOR_PREP_FILE)
    g1_x_path = os.path.join(setup_dir, G1_X_PREP_FILE)
    streaming.write_field_elements(generator_path, engine, generator_polynomial)
    streaming.write_points(g1_x_path, g1_x_prep)

    logger.info("Transformed and written in %.3fs", time.perf_counter() - start)
    return generator_path, g1_x_path


class StrictArgumentParser(argparse.ArgumentParser):
    """인자 오류 시 종료 코드 2 대신 1을 사용한다."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = StrictArgumentParser(
        prog="srs-prep",
        description="Copy a verified transcript and generator polynomial into prover dumps",
    )
    parser.add_argument("degree", type=int, help="polynomial degree")
    parser.add_argument("--setup-dir", default="setup_db",
                        help="directory holding generator.dat and receiving the dumps")
    parser.add_argument("--db", default=None,
                        help="TinyDB transcript store (default: <setup-dir>/transcript.json)")
    parser.add_argument("--curve", default=Config.CURVE, choices=["bn128", "bls12_381"],
                        help="pairing curve the transcript was recorded on")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    db_path = args.db or os.path.join(args.setup_dir, "transcript.json")
    try:
        engine = PairingEngine.from_name(args.curve)
        store = TranscriptStore.open(db_path, engine)
        transform(args.degree, args.setup_dir, engine, store)
    except (SRSAuditError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
