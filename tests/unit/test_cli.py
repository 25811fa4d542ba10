"""
CLI Unit Tests
Tests for merkle_cli (root, prove, verify, demo, config)
"""
import json

import pytest

from core.crypto.hashing import get_hash_function, to_hex
from core.merkle import build_merkle_root
from merkle_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from merkle_cli.main import main


EMAILS = ["marco@example.com", "jenna@example.com", "tanay@example.com"]


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory so no merkle.json is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def _expected_root(items, algorithm="sha256"):
    hash_fn = get_hash_function(algorithm)
    return to_hex(build_merkle_root([hash_fn(i.encode()) for i in items], hash_fn))


class TestRootCommand:
    """Tests for `merkle root`."""

    def test_json_summary(self, capsys):
        assert main(["root", *EMAILS, "--json"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == _expected_root(EMAILS)
        assert data["leaf_count"] == 3
        assert data["depth"] == 3
        assert "levels" not in data

    def test_levels(self, capsys):
        assert main(["root", *EMAILS, "--json", "--levels"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [len(level) for level in data["levels"]] == [3, 2, 1]

    def test_items_file(self, tmp_path, capsys):
        path = tmp_path / "emails.txt"
        path.write_text("\n".join(EMAILS) + "\n\n")
        assert main(["root", "--items-file", str(path), "--json"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["root"] == _expected_root(EMAILS)

    def test_algorithm_flag(self, capsys):
        assert main(["--algorithm", "sha512", "root", *EMAILS, "--json"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["algorithm"] == "sha512"
        assert data["root"] == _expected_root(EMAILS, "sha512")

    def test_human_output(self, capsys):
        assert main(["root", *EMAILS]) == EXIT_SUCCESS
        assert f"root: {_expected_root(EMAILS)}" in capsys.readouterr().out

    def test_no_items(self, capsys):
        assert main(["root"]) == EXIT_RUNTIME_ERROR
        assert "No items given" in capsys.readouterr().err


class TestProveVerifyCommands:
    """Tests for `merkle prove` followed by `merkle verify`."""

    def _prove(self, tmp_path, target="marco@example.com"):
        out = tmp_path / "proof.json"
        assert main(["prove", target, *EMAILS, "--out", str(out)]) == EXIT_SUCCESS
        return out

    def test_prove_writes_document(self, tmp_path, capsys):
        out = self._prove(tmp_path)
        data = json.loads(out.read_text())
        assert data["root"] == _expected_root(EMAILS)
        assert len(data["steps"]) == 2
        assert data["leaf_count"] == 3
        assert "Wrote proof" in capsys.readouterr().out

    def test_prove_to_stdout(self, capsys):
        assert main(["prove", "tanay@example.com", *EMAILS]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [s["side"] for s in data["steps"]] == ["left", "left"]

    def test_prove_missing_target(self, capsys):
        assert main(["prove", "nobody@example.com", *EMAILS]) == EXIT_VERIFICATION_FAILED
        assert "Not found" in capsys.readouterr().err

    def test_verify_valid(self, tmp_path, capsys):
        out = self._prove(tmp_path)
        capsys.readouterr()
        code = main([
            "verify", "marco@example.com",
            "--proof", str(out), "--root", _expected_root(EMAILS), "--json",
        ])
        assert code == EXIT_SUCCESS
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert "warnings" not in report

    def test_verify_wrong_root(self, tmp_path, capsys):
        out = self._prove(tmp_path)
        capsys.readouterr()
        bogus = _expected_root(["someone@else.com"])
        code = main(["verify", "marco@example.com", "--proof", str(out), "--root", bogus])
        assert code == EXIT_VERIFICATION_FAILED
        assert "valid: false" in capsys.readouterr().out

    def test_verify_wrong_item(self, tmp_path, capsys):
        out = self._prove(tmp_path)
        capsys.readouterr()
        code = main([
            "verify", "jenna@example.com",
            "--proof", str(out), "--root", _expected_root(EMAILS), "--json",
        ])
        assert code == EXIT_VERIFICATION_FAILED
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert report["warnings"]

    def test_hyphenated_algorithm_name_gives_no_warning(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "SHA3-256")
        out = self._prove(tmp_path)
        assert json.loads(out.read_text())["algorithm"] == "sha3_256"
        capsys.readouterr()
        code = main([
            "verify", "marco@example.com",
            "--proof", str(out), "--root", _expected_root(EMAILS, "sha3_256"), "--json",
        ])
        assert code == EXIT_SUCCESS
        assert "warnings" not in json.loads(capsys.readouterr().out)

    def test_verify_malformed_document(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"root": "0x00", "item_digest": "0x00", "steps": [{"side": "up"}]}))
        code = main(["verify", "marco@example.com", "--proof", str(bad), "--root", "0x00"])
        assert code == EXIT_RUNTIME_ERROR
        assert "Malformed proof document" in capsys.readouterr().err

    def test_verify_bad_root_hex(self, tmp_path, capsys):
        out = self._prove(tmp_path)
        code = main(["verify", "marco@example.com", "--proof", str(out), "--root", "abc"])
        assert code == EXIT_RUNTIME_ERROR


class TestDemoCommand:
    """Tests for `merkle demo`."""

    def test_default_demo(self, capsys):
        assert main(["demo"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "level sizes: 3 -> 2 -> 1" in out
        assert "marco@example.com is valid: true" in out
        assert "unrelated root rejected: true" in out

    def test_custom_target(self, capsys):
        assert main(["demo", "--target", "tanay@example.com"]) == EXIT_SUCCESS
        assert "tanay@example.com is valid: true" in capsys.readouterr().out

    def test_missing_target(self, capsys):
        assert main(["demo", "--target", "nobody@example.com"]) == EXIT_VERIFICATION_FAILED
        assert "not found" in capsys.readouterr().out


class TestConfigCommand:
    """Tests for `merkle config` and global option handling."""

    def test_init_creates_file(self, tmp_path, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert json.loads((tmp_path / "merkle.json").read_text())["hash_algorithm"] == "sha256"

    def test_init_refuses_overwrite(self, tmp_path):
        (tmp_path / "merkle.json").write_text("{}")
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_show_reflects_env(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_LEAF_ENCODING", "canonical_json")
        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["leaf_encoding"] == "canonical_json"
        assert set(shown) == {"hash_algorithm", "leaf_encoding", "log_level", "log_file"}

    def test_missing_explicit_config(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "missing.json"), "config", "--show"])
        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
