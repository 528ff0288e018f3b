import json

import pytest

from srs_audit.errors import ArithmeticFailure, DegenerateDegreeError
from srs_audit.field import GroupKind
from srs_audit.serializers import (
    deserialize_fr,
    deserialize_g1,
    deserialize_g2,
    deserialize_manifest,
    deserialize_report,
    deserialize_sequence,
    deserialize_transcript,
    serialize_fr,
    serialize_g1,
    serialize_g2,
    serialize_manifest,
    serialize_report,
    serialize_sequence,
    serialize_transcript,
)
from srs_audit.transcript import Manifest
from srs_audit.verifier import CHECK_NAMES, TranscriptReport

from builders import DEGREE


class TestScalars:
    def test_fr(self, engine):
        assert serialize_fr(engine.scalar(42)) == "42"
        assert deserialize_fr(engine, "42") == engine.scalar(42)


class TestPoints:
    def test_g1_generator(self, engine):
        assert serialize_g1(engine.generator(GroupKind.G1)) == ["1", "2"]

    def test_g1_identity_is_none(self, engine):
        assert serialize_g1(engine.identity(GroupKind.G1)) is None
        assert deserialize_g1(engine, None).is_identity()

    def test_g2_round_trip(self, engine):
        q = engine.generator(GroupKind.G2) * 99
        data = serialize_g2(q)
        assert len(data) == 2 and len(data[0]) == 2
        assert deserialize_g2(engine, data) == q

    def test_off_curve_rejected(self, engine):
        with pytest.raises(ArithmeticFailure):
            deserialize_g1(engine, ["1", "3"])

    @pytest.mark.parametrize("data", [["1"], ["1", "2", "3"], "12", {"x": "1"}])
    def test_malformed_g1_rejected(self, engine, data):
        with pytest.raises(ArithmeticFailure):
            deserialize_g1(engine, data)

    @pytest.mark.parametrize("data", [
        [["1", "2"]],
        [["1"], ["2", "3"]],
        [["1", "2"], "3"],
    ])
    def test_malformed_g2_rejected(self, engine, data):
        with pytest.raises(ArithmeticFailure):
            deserialize_g2(engine, data)


class TestSequence:
    def test_kind_preserved(self, honest_transcript, engine):
        data = serialize_sequence(honest_transcript.g2_alpha_x)
        assert data["kind"] == "G2"
        seq = deserialize_sequence(engine, data)
        assert seq == honest_transcript.g2_alpha_x

    def test_limit(self, honest_transcript, engine):
        data = serialize_sequence(honest_transcript.g1_x)
        assert len(deserialize_sequence(engine, data, limit=2)) == 2


class TestTranscript:
    def test_json_safe(self, honest_transcript):
        data = serialize_transcript(honest_transcript)
        assert json.loads(json.dumps(data)) == data

    def test_round_trip(self, honest_transcript, engine):
        restored = deserialize_transcript(engine, serialize_transcript(honest_transcript))
        assert restored.degree == DEGREE
        assert restored.manifest is None
        for name, seq in honest_transcript.sequences().items():
            assert restored.sequences()[name] == seq

    def test_truncate_to_degree(self, honest_transcript, engine):
        restored = deserialize_transcript(
            engine, serialize_transcript(honest_transcript), degree=3)
        assert restored.degree == 3
        assert all(len(s) == 3 for s in restored.sequences().values())

    @pytest.mark.parametrize("degree", ["5", 1, None, 2.0])
    def test_invalid_stored_degree_rejected(self, honest_transcript, engine, degree):
        data = serialize_transcript(honest_transcript)
        data["degree"] = degree
        with pytest.raises(DegenerateDegreeError):
            deserialize_transcript(engine, data)


class TestManifestAndReport:
    def test_manifest(self):
        manifest = Manifest(8, "bn128", "participant-07", {"g1_x": 8})
        assert deserialize_manifest(serialize_manifest(manifest)) == manifest

    def test_report(self):
        checks = {name: True for name in CHECK_NAMES}
        checks["g2_x_powers"] = False
        data = serialize_report(TranscriptReport(checks, 6, "bn128"))
        assert data["passed"] is False
        assert data["failed"] == ["g2_x_powers"]
        restored = deserialize_report(data)
        assert restored.checks == checks
        assert restored.degree == 6
