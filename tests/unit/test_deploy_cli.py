from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest


class _RecordingRunner:
    instances: List["_RecordingRunner"] = []

    def __init__(self, cwd=None) -> None:
        self.cwd = cwd
        self.calls: List[List[str]] = []
        _RecordingRunner.instances.append(self)

    def run(self, argv, *, stream: bool = False) -> str:
        self.calls.append(list(argv))
        return ""


def _patch(monkeypatch: pytest.MonkeyPatch, *, credentials_ok: bool = True) -> Dict[str, Any]:
    from deploy import cli
    from deploy import runner as deploy_runner
    from deploy.errors import CredentialsError

    seen: Dict[str, Any] = {"credential_calls": 0}
    _RecordingRunner.instances = []

    def fake_check(profile: str, *, region=None):
        seen["credential_calls"] += 1
        if not credentials_ok:
            raise CredentialsError(f"AWS credentials not configured for profile: {profile}")
        return {"Arn": "arn:aws:iam::1:user/test"}

    monkeypatch.setattr(cli, "configure_logging", lambda **_kw: None)
    monkeypatch.setattr(deploy_runner, "check_credentials", fake_check)
    monkeypatch.setattr(deploy_runner, "CommandRunner", _RecordingRunner)
    return seen


def _site(root: Path) -> Path:
    for name in ("index.html", "about.html", "features.html", "css/marine-theme.css", "js/marine-app.js"):
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("<!DOCTYPE html><title>Waves</title>Flowbite", encoding="utf-8")
    return root


def _all_calls() -> List[List[str]]:
    return [c for r in _RecordingRunner.instances for c in r.calls]


def test_parse_defaults():
    from deploy.cli import parse_options

    options, verbose = parse_options([])
    assert options.environment == "dev"
    assert options.region == "us-east-1"
    assert options.profile == "default"
    assert (options.force, options.validate_content, options.dry_run) == (False, False, False)
    assert verbose is False


def test_parse_equals_style_flags():
    from deploy.cli import parse_options

    options, _ = parse_options(
        ["--env=production", "--region=eu-west-1", "--profile=waves-prod", "--force", "--validate", "--dry-run"]
    )
    assert options.environment == "production"
    assert options.region == "eu-west-1"
    assert options.profile == "waves-prod"
    assert options.force and options.validate_content and options.dry_run


def test_unknown_environment_is_rejected():
    from deploy.cli import parse_options

    with pytest.raises(SystemExit) as ei:
        parse_options(["--env=qa"])
    assert ei.value.code == 2


def test_help_exits_zero(capsys: pytest.CaptureFixture[str]):
    from deploy.cli import main

    with pytest.raises(SystemExit) as ei:
        main(["--help"])
    assert ei.value.code == 0
    out = capsys.readouterr().out
    assert "--dry-run" in out
    assert "Examples:" in out


def test_dry_run_exits_zero_and_only_previews(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    seen = _patch(monkeypatch)
    code = main(["--dry-run", f"--root={_site(tmp_path)}"])

    assert code == 0
    assert seen["credential_calls"] == 1
    calls = _all_calls()
    assert len(calls) == 1
    assert "--dryrun" in calls[0]


def test_production_without_force_exits_nonzero_before_commands(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    seen = _patch(monkeypatch)
    code = main(["--env=production", f"--root={_site(tmp_path)}"])

    assert code == 1
    assert seen["credential_calls"] == 0
    assert _all_calls() == []


def test_missing_file_exits_nonzero_without_sync(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    _patch(monkeypatch)
    _site(tmp_path)
    (tmp_path / "about.html").unlink()

    code = main([f"--root={tmp_path}"])

    assert code == 1
    assert _all_calls() == []


def test_bad_credentials_exit_nonzero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    _patch(monkeypatch, credentials_ok=False)
    assert main([f"--root={_site(tmp_path)}"]) == 1
    assert _all_calls() == []


def test_bucket_override_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    _patch(monkeypatch)
    monkeypatch.setenv("WAVES_S3_BUCKET", "waves-staging-site")

    assert main(["--env=staging", f"--root={_site(tmp_path)}"]) == 0
    sync = _all_calls()[0]
    assert "s3://waves-staging-site" in sync


def test_blank_bucket_override_exits_nonzero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    seen = _patch(monkeypatch)
    monkeypatch.setenv("WAVES_S3_BUCKET", "   ")

    assert main([f"--root={_site(tmp_path)}"]) == 1
    assert seen["credential_calls"] == 0
    assert _all_calls() == []


def test_undecodable_site_file_exits_nonzero_under_validate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from deploy.cli import main

    _patch(monkeypatch)
    _site(tmp_path)
    (tmp_path / "js/marine-app.js").write_bytes(b"\xff\xfeWavesMarineApp")

    assert main(["--validate", f"--root={tmp_path}"]) == 1
    assert _all_calls() == []
