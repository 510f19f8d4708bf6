import os

import pytest

from agentcrew.validation import (
    ValidationCheck,
    ValidationStatus,
    run_container_validation,
    summarize_checks,
    write_workspace_files,
)


def _by_name(checks):
    return {c.name: c for c in checks}


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def test_all_ok(tmp_path, home):
    claude_dir = tmp_path / ".claude"
    (claude_dir / "agents").mkdir(parents=True)
    (claude_dir / "CLAUDE.md").write_text("# test")
    (claude_dir / "agents" / "helper.md").write_text("agent")

    global_skills = tmp_path / "global-skills"
    global_skills.mkdir()
    (global_skills / "pkg1").write_text("x")
    os.symlink(global_skills, claude_dir / "skills")

    checks = run_container_validation(tmp_path, claude_dir, True, True)
    assert len(checks) >= 3
    by_name = _by_name(checks)
    assert by_name["claude_md"].status == ValidationStatus.OK
    assert by_name["agents_dir"].status == ValidationStatus.OK
    assert by_name["agents_dir"].message == "agents directory has 1 file(s)"
    assert by_name["skills_symlink"].status == ValidationStatus.OK
    assert by_name["skills_installed"].status == ValidationStatus.OK
    assert by_name["skills_installed"].message == "1 skill package(s) installed"


def test_missing_claude_md(tmp_path):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    checks = run_container_validation(tmp_path, claude_dir, False, False)
    assert len(checks) == 1
    assert checks[0].name == "claude_md"
    assert checks[0].status == ValidationStatus.ERROR
    assert checks[0].message == f"CLAUDE.md not found at {claude_dir / 'CLAUDE.md'}"


def test_empty_agents_dir(tmp_path):
    claude_dir = tmp_path / ".claude"
    (claude_dir / "agents").mkdir(parents=True)
    (claude_dir / "CLAUDE.md").write_text("# test")
    checks = _by_name(run_container_validation(tmp_path, claude_dir, False, True))
    assert checks["agents_dir"].status == ValidationStatus.ERROR


def test_missing_agents_dir(tmp_path):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "CLAUDE.md").write_text("# test")
    checks = _by_name(run_container_validation(tmp_path, claude_dir, False, True))
    assert checks["agents_dir"].message == (
        f"agents directory missing or empty at {claude_dir / 'agents'}"
    )


def test_broken_symlink(tmp_path, home):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "CLAUDE.md").write_text("# test")
    os.symlink("/nonexistent/path", claude_dir / "skills")
    checks = _by_name(run_container_validation(tmp_path, claude_dir, True, False))
    assert checks["skills_symlink"].status == ValidationStatus.WARNING


def test_skills_installed_ok(tmp_path, home):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "CLAUDE.md").write_text("# test")
    global_skills = tmp_path / ".claude" / "skills"
    global_skills.mkdir(parents=True)
    (global_skills / "my-skill-pkg").write_text("installed")

    checks = _by_name(run_container_validation(tmp_path, claude_dir, True, False))
    assert "skills_installed" in checks
    assert checks["skills_installed"].status == ValidationStatus.OK


def test_skills_installed_empty(tmp_path, home):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "CLAUDE.md").write_text("# test")
    (tmp_path / ".claude" / "skills").mkdir(parents=True)

    checks = _by_name(run_container_validation(tmp_path, claude_dir, True, False))
    assert "skills_installed" in checks
    assert checks["skills_installed"].status == ValidationStatus.WARNING


def test_no_skills_or_agents_configured(tmp_path):
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "CLAUDE.md").write_text("# test")
    checks = run_container_validation(tmp_path, claude_dir, False, False)
    assert len(checks) == 1
    assert checks[0].name == "claude_md"
    assert checks[0].status == ValidationStatus.OK
    assert checks[0].message == "CLAUDE.md exists"


def test_summarize_checks():
    checks = [
        ValidationCheck("claude_md", ValidationStatus.OK, "CLAUDE.md exists"),
        ValidationCheck("skills_symlink", ValidationStatus.WARNING, "symlink broken"),
    ]
    assert summarize_checks(checks) == "1 ok, 1 warning(s), 0 error(s)"


def test_summarize_checks_empty():
    assert summarize_checks([]) == "0 ok, 0 warning(s), 0 error(s)"


def test_check_to_dict():
    check = ValidationCheck("agents_dir", ValidationStatus.ERROR, "missing")
    assert check.to_dict() == {"name": "agents_dir", "status": "error", "message": "missing"}


def test_write_workspace_files(tmp_path):
    claude_dir = tmp_path / ".claude"
    written = write_workspace_files(
        claude_dir, "# hello", {"helper.md": "agent body", "other.md": "x"}
    )
    assert (claude_dir / "CLAUDE.md").read_text() == "# hello"
    assert (claude_dir / "agents" / "helper.md").read_text() == "agent body"
    assert sorted(p.name for p in written) == ["CLAUDE.md", "helper.md", "other.md"]


def test_write_workspace_files_rejects_traversal(tmp_path):
    claude_dir = tmp_path / ".claude"
    written = write_workspace_files(
        claude_dir,
        "",
        {"../evil.md": "bad", "sub/dir.md": "bad", "..": "bad", "good.md": "ok"},
    )
    assert [p.name for p in written] == ["good.md"]
    assert not (claude_dir / "CLAUDE.md").exists()
    assert not (tmp_path / "evil.md").exists()
    assert sorted(p.name for p in (claude_dir / "agents").iterdir()) == ["good.md"]


def test_written_files_pass_validation(tmp_path):
    claude_dir = tmp_path / ".claude"
    write_workspace_files(claude_dir, "# md", {"a.md": "a"})
    checks = run_container_validation(tmp_path, claude_dir, False, True)
    assert [c.status for c in checks] == [ValidationStatus.OK, ValidationStatus.OK]