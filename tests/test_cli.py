"""CLI tests for the report and verify subcommands."""

import hashlib
import json
import sys

import pytest

from omreport import cli

pytestmark = pytest.mark.skipif(
    sys.platform == "win32",
    reason="fake omcliproxy is a POSIX shell script",
)


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["omreport-py"] + args)
    return cli.main()


def test_report_prints_json(monkeypatch, capsys, fake_omcliproxy, fixture_bytes):
    script = fake_omcliproxy(fixture_bytes("storage-vdisk"))
    _run_cli(["report", "vdisk", "--path", str(script)], monkeypatch)
    out = json.loads(capsys.readouterr().out)
    assert [vdisk["name"] for vdisk in out["vdisks"]] == ["OS", "CASS"]
    assert out["vdisks"][0]["layout"] == 4
    assert out["vdisks"][0]["status"] == 2


def test_report_pdisk_requires_controller(monkeypatch, capsys, fake_omcliproxy, fixture_bytes):
    script = fake_omcliproxy(fixture_bytes("storage-pdisk"))
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["report", "pdisk", "--path", str(script)], monkeypatch)
    assert excinfo.value.code == cli.EXIT_ERROR
    assert "--controller" in capsys.readouterr().err


def test_report_pdisk(monkeypatch, capsys, fake_omcliproxy, fixture_bytes):
    script = fake_omcliproxy(fixture_bytes("storage-pdisk"))
    _run_cli(["report", "pdisk", "--controller", "0", "--path", str(script)], monkeypatch)
    out = json.loads(capsys.readouterr().out)
    assert out["pdisks"][2]["attributes"] == (1 << 11) | (1 << 7)
    assert out["pdisks"][2]["state"] == {"kind": "state", "code": 16}


def test_report_wrong_binary_name(monkeypatch, capsys, fake_omcliproxy):
    script = fake_omcliproxy(name="proxybinary")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["report", "chassis", "--path", str(script)], monkeypatch)
    assert excinfo.value.code == cli.EXIT_ERROR
    assert "Error [BINARY_NAME_MISMATCH]" in capsys.readouterr().err


def test_report_invocation_failure(monkeypatch, capsys, fake_omcliproxy):
    script = fake_omcliproxy(b"Error! Invalid command\n", exit_code=1)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["report", "chassis", "--path", str(script)], monkeypatch)
    assert excinfo.value.code == cli.EXIT_ERROR
    assert "Error [INVOCATION_FAILED]" in capsys.readouterr().err


def test_verify_prints_fingerprint(monkeypatch, capsys, fake_omcliproxy):
    script = fake_omcliproxy()
    _run_cli(["verify", "--path", str(script)], monkeypatch)
    out = capsys.readouterr().out
    assert "[OK] Binary accepted" in out
    assert hashlib.sha256(script.read_bytes()).hexdigest() in out


def test_verify_quiet(monkeypatch, capsys, fake_omcliproxy):
    script = fake_omcliproxy()
    _run_cli(["verify", "--quiet", "--path", str(script)], monkeypatch)
    assert capsys.readouterr().out == ""


def test_verify_missing_binary(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["verify", "--path", str(tmp_path / "omcliproxy")], monkeypatch)
    assert excinfo.value.code == cli.EXIT_ERROR
    assert "Error [EXECUTABLE_NOT_FOUND]" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == cli.EXIT_ERROR
    assert "omreport-py" in capsys.readouterr().out


def test_tamper_exit_code(capsys):
    from omreport.errors import TamperDetectedError

    err = TamperDetectedError("/opt/dell/srvadmin/sbin/omcliproxy", b"\x01" * 32, b"\x02" * 32)
    assert cli._fail(err) == cli.EXIT_TAMPERED
    assert "Error [TAMPER_DETECTED]" in capsys.readouterr().err


def test_report_quiet(monkeypatch, capsys, fake_omcliproxy, fixture_bytes):
    script = fake_omcliproxy(fixture_bytes("about"))
    _run_cli(["report", "about", "--quiet", "--path", str(script)], monkeypatch)
    assert capsys.readouterr().out == ""
    assert (script.parent / "args.log").exists()


def test_base_error_is_reported_with_default_code(capsys):
    from omreport.errors import OMReportError

    assert cli._fail(OMReportError("boom")) == cli.EXIT_ERROR
    assert "Error [OMREPORT_ERROR]: boom" in capsys.readouterr().err
