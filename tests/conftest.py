import random

import pytest

from srs_audit.field import PairingEngine
from srs_audit.store import TranscriptStore

from builders import DEGREE, TOXIC_ALPHA, TOXIC_X_VAL, WRONG_ALPHA, build_transcript


@pytest.fixture(scope="session")
def engine():
    return PairingEngine.bn128()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(scope="session")
def honest_transcript(engine):
    return build_transcript(engine, TOXIC_X_VAL, TOXIC_ALPHA, DEGREE)


@pytest.fixture(scope="session")
def wrong_alpha_transcript(engine):
    """g1_alpha_x 만 다른 이동 값으로 만든 트랜스크립트."""
    return build_transcript(engine, TOXIC_X_VAL, TOXIC_ALPHA, DEGREE, g1_alpha=WRONG_ALPHA)


@pytest.fixture
def memory_store(engine):
    return TranscriptStore.open(None, engine)
