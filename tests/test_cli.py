import pytest

from srs_audit import cli
from srs_audit.store import TranscriptStore
from srs_audit.verifier import CHECK_NAMES


@pytest.fixture
def db_path(tmp_path, engine, honest_transcript):
    path = tmp_path / "transcript.json"
    TranscriptStore.open(str(path), engine).save(honest_transcript)
    return str(path)


class TestAuditCli:
    def test_honest_transcript(self, db_path, engine, capsys):
        assert cli.main(["--db", db_path, "--seed", "3"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert [line.split()[0] for line in out] == list(CHECK_NAMES)
        assert all(line.split()[1] == "ok" for line in out)
        # 보고서가 저장소에 남는다
        assert TranscriptStore.open(db_path, engine).last_report().passed is True

    def test_empty_store(self, tmp_path):
        assert cli.main(["--db", str(tmp_path / "empty.json")]) == 1

    def test_degenerate_degree(self, db_path):
        assert cli.main(["1", "--db", db_path]) == 1

    def test_unknown_curve_exits_one(self, db_path):
        with pytest.raises(SystemExit) as info:
            cli.main(["--db", db_path, "--curve", "secp256k1"])
        assert info.value.code == 1
