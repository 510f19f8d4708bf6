"""Checks that the agent workspace was set up as expected."""

from __future__ import annotations

import enum
import logging
import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

CLAUDE_MD = "CLAUDE.md"
AGENTS_DIR = "agents"


class ValidationStatus(str, enum.Enum):
    """Outcome of a single validation check."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationCheck:
    """One named check with its status and a human-readable message."""

    name: str
    status: ValidationStatus
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status.value, "message": self.message}


def _count_entries(directory: Path) -> int | None:
    """Return the number of entries in a directory, or None if it cannot be read."""
    try:
        return sum(1 for _ in directory.iterdir())
    except OSError:
        return None


def _check_claude_md(claude_dir: Path) -> ValidationCheck:
    path = claude_dir / CLAUDE_MD
    if path.exists():
        return ValidationCheck("claude_md", ValidationStatus.OK, "CLAUDE.md exists")
    return ValidationCheck("claude_md", ValidationStatus.ERROR, f"CLAUDE.md not found at {path}")


def _check_agents_dir(claude_dir: Path) -> ValidationCheck:
    agents_dir = claude_dir / AGENTS_DIR
    count = _count_entries(agents_dir)
    if not count:
        return ValidationCheck(
            "agents_dir",
            ValidationStatus.ERROR,
            f"agents directory missing or empty at {agents_dir}",
        )
    return ValidationCheck(
        "agents_dir", ValidationStatus.OK, f"agents directory has {count} file(s)"
    )


def _check_skills_symlink(work_dir: Path) -> ValidationCheck:
    skills_dir = work_dir / ".claude" / "skills"
    try:
        resolved = skills_dir.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        return ValidationCheck(
            "skills_symlink",
            ValidationStatus.WARNING,
            f"skills symlink missing or broken at {skills_dir}: {exc}",
        )
    return ValidationCheck(
        "skills_symlink", ValidationStatus.OK, f"skills symlink resolves to {resolved}"
    )


def _check_skills_installed() -> ValidationCheck | None:
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return None
    global_dir = home / ".claude" / "skills"
    count = _count_entries(global_dir)
    if not count:
        return ValidationCheck(
            "skills_installed",
            ValidationStatus.WARNING,
            f"no installed skill packages found in {global_dir}",
        )
    return ValidationCheck(
        "skills_installed", ValidationStatus.OK, f"{count} skill package(s) installed"
    )


def run_container_validation(
    work_dir: str | os.PathLike[str],
    claude_dir: str | os.PathLike[str],
    skills_configured: bool,
    sub_agents_configured: bool,
) -> list[ValidationCheck]:
    """Verify the expected workspace files and directories exist.

    CLAUDE.md is always checked; the agents directory only when sub-agents
    were configured; the skills link and installed packages only when skills
    were configured.
    """
    work = Path(work_dir)
    claude = Path(claude_dir)

    checks = [_check_claude_md(claude)]
    if sub_agents_configured:
        checks.append(_check_agents_dir(claude))
    if skills_configured:
        checks.append(_check_skills_symlink(work))
        installed = _check_skills_installed()
        if installed is not None:
            checks.append(installed)
    return checks


def summarize_checks(checks: Iterable[ValidationCheck]) -> str:
    """Return a summary such as '1 ok, 1 warning(s), 0 error(s)'."""
    counts = Counter(check.status for check in checks)
    return (
        f"{counts[ValidationStatus.OK]} ok, "
        f"{counts[ValidationStatus.WARNING]} warning(s), "
        f"{counts[ValidationStatus.ERROR]} error(s)"
    )


def _is_safe_filename(filename: str) -> bool:
    return (
        bool(filename)
        and os.path.basename(filename) == filename
        and ".." not in filename
        and "/" not in filename
        and filename != "."
    )


def write_workspace_files(
    claude_dir: str | os.PathLike[str],
    claude_md: str | None,
    sub_agent_files: Mapping[str, str] | None,
) -> list[Path]:
    """Write CLAUDE.md and sub-agent files into the .claude directory.

    Empty content is skipped. Sub-agent file names that could escape the
    agents directory are rejected. Failures are logged and skipped. Returns
    the paths that were written.
    """
    claude = Path(claude_dir)
    written: list[Path] = []

    if claude_md:
        path = claude / CLAUDE_MD
        try:
            claude.mkdir(parents=True, exist_ok=True)
            path.write_text(claude_md, encoding="utf-8")
        except OSError as exc:
            logger.warning("failed to write CLAUDE.md: %s", exc)
        else:
            logger.info("wrote CLAUDE.md at %s", path)
            written.append(path)

    if sub_agent_files:
        agents_dir = claude / AGENTS_DIR
        try:
            agents_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("failed to create .claude/agents dir: %s", exc)
            return written
        for filename, content in sub_agent_files.items():
            if not _is_safe_filename(filename):
                logger.warning("rejected sub-agent filename with path traversal: %r", filename)
                continue
            path = agents_dir / filename
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as exc:
                logger.warning("failed to write sub-agent file %s: %s", filename, exc)
            else:
                logger.info("wrote sub-agent file %s", path)
                written.append(path)

    return written