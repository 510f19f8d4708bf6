"""Installation of skill packages and linking them into the workspace."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)

_VALID_SKILL_NAME = re.compile(r"[a-zA-Z0-9@/_.-]+")

STATUS_INSTALLED = "installed"
STATUS_FAILED = "failed"


@dataclass
class SkillInstallResult:
    """Outcome of installing one skill package."""

    package: str
    status: str
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if not self.error:
            del data["error"]
        return data


def is_valid_skill_name(name: str) -> bool:
    """Return True if the name is a safe npm-style package name."""
    return _VALID_SKILL_NAME.fullmatch(name) is not None


def _install_one(skill: str) -> SkillInstallResult:
    executable = shutil.which("npx")
    if executable is None:
        message = 'executable "npx" not found in PATH: '
        logger.error("failed to install skill %s: %s", skill, message)
        return SkillInstallResult(skill, STATUS_FAILED, message)

    logger.info("installing skill globally: %s", skill)
    try:
        proc = subprocess.run(
            [executable, "skills", "add", skill, "-g", "--yes"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        message = f"{exc}: "
        logger.error("failed to install skill %s: %s", skill, message)
        return SkillInstallResult(skill, STATUS_FAILED, message)

    output = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        message = f"exit status {proc.returncode}: {output}"
        logger.error("failed to install skill %s: %s", skill, message)
        return SkillInstallResult(skill, STATUS_FAILED, message)

    logger.info("skill installed globally: %s", skill)
    return SkillInstallResult(skill, STATUS_INSTALLED)


def install_skills(skills: Iterable[str]) -> list[SkillInstallResult]:
    """Install each skill globally, continuing past individual failures.

    Empty names are skipped; names with unsafe characters are rejected.
    """
    results: list[SkillInstallResult] = []
    for skill in skills:
        if not skill:
            continue
        if not is_valid_skill_name(skill):
            logger.warning("rejected skill with invalid name: %r", skill)
            results.append(SkillInstallResult(skill, STATUS_FAILED, "invalid skill name"))
            continue
        results.append(_install_one(skill))
    return results


def symlink_skills_dir(work_dir: str | os.PathLike[str]) -> Path:
    """Link <work_dir>/.claude/skills to ~/.claude/skills and return the link path.

    Any existing file, directory or link at the workspace path is replaced.
    """
    global_dir = Path.home() / ".claude" / "skills"
    workspace_dir = Path(work_dir) / ".claude" / "skills"

    global_dir.mkdir(parents=True, exist_ok=True)

    if workspace_dir.is_symlink() or workspace_dir.is_file():
        workspace_dir.unlink()
    elif workspace_dir.exists():
        shutil.rmtree(workspace_dir)

    workspace_dir.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(global_dir, workspace_dir)

    logger.info("created skills symlink from %s to %s", global_dir, workspace_dir)
    return workspace_dir


def summarize_skill_results(results: Iterable[SkillInstallResult]) -> str:
    """Return a summary such as '1 installed, 2 failed'."""
    installed = failed = 0
    for result in results:
        if result.status == STATUS_INSTALLED:
            installed += 1
        else:
            failed += 1
    return f"{installed} installed, {failed} failed"