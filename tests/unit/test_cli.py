"""
CLI Tests
Tests for merkledrop_cli (build, proof, verify, export, template, config)

Each test runs main() in a temporary working directory so the default
data file and config search never touch the repository.
"""
import csv
import json

import pytest

from merkledrop_cli.main import create_parser, main

from fixtures.common import ADDRESSES, make_csv


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in (
        "MERKLEDROP_DATA_FILE", "MERKLEDROP_PERSIST", "MERKLEDROP_LOG_FILE", "MERKLEDROP_LOG_LEVEL",
        "MERKLEDROP_HOST", "MERKLEDROP_PORT", "PORT", "MERKLEDROP_MAX_UPLOAD_BYTES",
    ):
        monkeypatch.delenv(var, raising=False)
    (tmp_path / "allocations.csv").write_text(make_csv())
    return tmp_path


def run_json(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestParser:

    def test_subcommands(self):
        parser = create_parser()

        args = parser.parse_args(["build", "a.csv", "--out", "x.json", "--json"])
        assert args.command == "build"
        assert args.csv_path == "a.csv"
        assert args.out == "x.json"
        assert args.json is True

        args = parser.parse_args(["verify", ADDRESSES[0], "1.5", "--proof", "0x01|0x02"])
        assert args.amount == "1.5"
        assert args.proof == "0x01|0x02"

    def test_no_command(self, workdir):
        assert main([]) == 1


class TestBuildCommand:

    def test_build_writes_snapshot(self, workdir, capsys):
        code, summary = run_json(capsys, ["build", "allocations.csv", "--json"])

        assert code == 0
        assert summary["count"] == 3
        assert summary["totalAllocated"] == str(6 * 10**18)
        assert (workdir / "merkle.json").exists()

    def test_build_custom_out(self, workdir, capsys):
        code = main(["build", "allocations.csv", "--out", "out/tree.json"])

        assert code == 0
        assert (workdir / "out" / "tree.json").exists()
        assert "root: 0x" in capsys.readouterr().out

    def test_build_missing_csv(self, workdir, capsys):
        assert main(["build", "missing.csv"]) == 1
        assert "CSV not found" in capsys.readouterr().err

    def test_build_no_valid_rows(self, workdir, capsys):
        (workdir / "bad.csv").write_text("address,amount\n0xbad,1\n")

        assert main(["build", "bad.csv"]) == 1
        assert "No valid rows" in capsys.readouterr().err
        assert not (workdir / "merkle.json").exists()

    def test_build_undecodable_row(self, workdir, capsys):
        """Invalid UTF-8 in one row is reported and skipped."""
        (workdir / "mixed.csv").write_bytes(make_csv().encode("utf-8") + b"\xff,4.0\n")

        code, summary = run_json(capsys, ["build", "mixed.csv", "--json"])

        assert code == 0
        assert summary["count"] == 3
        assert summary["skipped"] == 1

    def test_build_malformed_csv(self, workdir, capsys):
        """A CSV the parser cannot read exits 1 with a message."""
        old = csv.field_size_limit(10)
        try:
            code = main(["build", "allocations.csv"])
        finally:
            csv.field_size_limit(old)

        assert code == 1
        assert "Malformed CSV" in capsys.readouterr().err
        assert not (workdir / "merkle.json").exists()


class TestProofAndVerify:

    @pytest.fixture(autouse=True)
    def built(self, workdir, capsys):
        assert main(["build", "allocations.csv"]) == 0
        capsys.readouterr()

    def test_proof(self, capsys):
        code, data = run_json(capsys, ["proof", ADDRESSES[1].lower()])

        assert code == 0
        assert data["amount"] == str(2 * 10**18)
        assert data["root"].startswith("0x")

    def test_proof_unknown(self, capsys):
        assert main(["proof", ADDRESSES[3]]) == 2

    def test_proof_missing_data(self, capsys):
        assert main(["proof", ADDRESSES[0], "--data", "nowhere.json"]) == 1

    def test_verify_ether_amount(self, capsys):
        code, report = run_json(capsys, ["verify", ADDRESSES[0], "1.0", "--json"])

        assert code == 0
        assert report["ok"] is True
        assert "error" not in report

    def test_verify_wei_amount(self, capsys):
        code, report = run_json(capsys, ["verify", ADDRESSES[2], str(3 * 10**18), "--json"])

        assert code == 0
        assert report["ok"] is True

    def test_verify_wrong_amount(self, capsys):
        code, report = run_json(capsys, ["verify", ADDRESSES[0], "1", "--json"])

        assert code == 2
        assert report["ok"] is False
        assert "MERKLE_PROOF_INVALID" in report["error"]

    def test_verify_explicit_proof(self, capsys):
        _, proof = run_json(capsys, ["proof", ADDRESSES[1]])
        joined = "|".join(proof["proof"])

        code, report = run_json(capsys, ["verify", ADDRESSES[1], "2.0", "--proof", joined, "--json"])

        assert code == 0
        assert report["proof"] == proof["proof"]

    def test_verify_unknown_address(self, capsys):
        code, report = run_json(capsys, ["verify", ADDRESSES[3], "1.0", "--json"])

        assert code == 2
        assert report["error"] == "Address not found in tree"

    def test_verify_malformed_amount(self, capsys):
        code, report = run_json(capsys, ["verify", ADDRESSES[0], "lots", "--json"])

        assert code == 2
        assert "Invalid amount" in report["error"]

    def test_export_stdout(self, capsys):
        assert main(["export"]) == 0

        lines = capsys.readouterr().out.strip().split("\n")
        assert lines[0] == "merkle_root,address,amount,proof"
        assert len(lines) == 4

    def test_export_file(self, workdir, capsys):
        assert main(["export", "--out", "results.csv"]) == 0
        assert (workdir / "results.csv").read_text().startswith("merkle_root,")


class TestTemplateAndConfig:

    def test_template(self, workdir, capsys):
        assert main(["template"]) == 0
        assert capsys.readouterr().out.startswith("address,amount\n")

    def test_template_file(self, workdir):
        assert main(["template", "--out", "t.csv"]) == 0
        assert (workdir / "t.csv").exists()

    def test_config_init_and_show(self, workdir, capsys):
        assert main(["config", "--init"]) == 0
        assert (workdir / "merkledrop.json").exists()
        assert main(["config", "--init"]) == 1
        capsys.readouterr()

        code, shown = run_json(capsys, ["config", "--show"])
        assert code == 0
        assert shown["storage"]["data_file"] == "merkle.json"
        assert shown["server"]["port"] == 4000

    def test_config_file_sets_data_file(self, workdir, capsys):
        (workdir / "merkledrop.json").write_text(json.dumps({"storage": {"data_file": "custom.json"}}))

        assert main(["build", "allocations.csv"]) == 0
        assert (workdir / "custom.json").exists()
