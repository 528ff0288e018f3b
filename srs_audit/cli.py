"""
저장된 트랜스크립트를 감사하는 명령행 도구.

    $ srs-audit 64 --db setup_db/transcript.json
    g1_x_powers        ok
    g1_alpha_x_powers  ok
    ...

모든 검사를 통과하면 종료 코드 0, 실패하거나 오류가 나면 1.
"""

import logging
import random
import sys

from srs_audit.config import Config, configure_logging
from srs_audit.errors import SRSAuditError
from srs_audit.field import PairingEngine
from srs_audit.prep import StrictArgumentParser
from srs_audit.store import TranscriptStore
from srs_audit.verifier import verify_transcript

logger = logging.getLogger(__name__)


def build_parser():
    parser = StrictArgumentParser(prog="srs-audit", description="Verify a stored SRS transcript")
    parser.add_argument("degree", type=int, nargs="?", default=None,
                        help="polynomial degree (default: the stored degree)")
    parser.add_argument("--db", default=Config.DB_PATH, help="TinyDB transcript store")
    parser.add_argument("--curve", default=Config.CURVE, choices=["bn128", "bls12_381"])
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the challenge source (reproducible runs only)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    # 재현용 시드가 없으면 암호학적 난수원을 사용한다
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        engine = PairingEngine.from_name(args.curve)
        store = TranscriptStore.open(args.db, engine)
        transcript = store.load_transcript(args.degree)
        report = verify_transcript(transcript, engine, rng)
        store.save_report(report)
    except (SRSAuditError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    width = max(len(name) for name in report.checks)
    for name, ok in report.checks.items():
        print(f"{name:<{width}}  {'ok' if ok else 'FAILED'}")
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
