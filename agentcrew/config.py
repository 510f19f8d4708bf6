"""Agent sidecar configuration loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULT_ROLE = "leader"
DEFAULT_FILESYSTEM_SCOPE = "/workspace"


class ConfigError(ValueError):
    """Raised when the configuration cannot be read, parsed or validated."""


def _as_str(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigError(f"field {key!r} must be a scalar")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_str_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"field {key!r} must be a list")
    return [_as_str(item, key) for item in value]


def _as_int(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"field {key!r} must be an integer")
    return value


def _as_mapping(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"field {key!r} must be a mapping")
    return value


@dataclass
class NATSSection:
    """NATS connection settings."""

    url: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NATSSection:
        return cls(url=_as_str(data.get("url"), "url"))


@dataclass
class PermissionsSection:
    """Permission gate configuration."""

    allowed_tools: list[str] = field(default_factory=list)
    allowed_commands: list[str] = field(default_factory=list)
    denied_commands: list[str] = field(default_factory=list)
    filesystem_scope: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PermissionsSection:
        return cls(
            allowed_tools=_as_str_list(data.get("allowed_tools"), "allowed_tools"),
            allowed_commands=_as_str_list(data.get("allowed_commands"), "allowed_commands"),
            denied_commands=_as_str_list(data.get("denied_commands"), "denied_commands"),
            filesystem_scope=_as_str(data.get("filesystem_scope"), "filesystem_scope"),
        )


@dataclass
class ResourcesSection:
    """Resource limits for the agent."""

    timeout_seconds: int = 0
    cpu: str = ""
    memory: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ResourcesSection:
        return cls(
            timeout_seconds=_as_int(data.get("timeout_seconds"), "timeout_seconds"),
            cpu=_as_str(data.get("cpu"), "cpu"),
            memory=_as_str(data.get("memory"), "memory"),
        )


@dataclass
class AgentSection:
    """Agent-specific configuration."""

    name: str = ""
    team: str = ""
    role: str = ""
    system_prompt: str = ""
    nats: NATSSection = field(default_factory=NATSSection)
    permissions: PermissionsSection = field(default_factory=PermissionsSection)
    resources: ResourcesSection = field(default_factory=ResourcesSection)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AgentSection:
        return cls(
            name=_as_str(data.get("name"), "name"),
            team=_as_str(data.get("team"), "team"),
            role=_as_str(data.get("role"), "role"),
            system_prompt=_as_str(data.get("system_prompt"), "system_prompt"),
            nats=NATSSection.from_mapping(_as_mapping(data.get("nats"), "nats")),
            permissions=PermissionsSection.from_mapping(
                _as_mapping(data.get("permissions"), "permissions")
            ),
            resources=ResourcesSection.from_mapping(
                _as_mapping(data.get("resources"), "resources")
            ),
        )


@dataclass
class AgentConfig:
    """Full configuration for the agent sidecar."""

    agent: AgentSection = field(default_factory=AgentSection)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AgentConfig:
        return cls(agent=AgentSection.from_mapping(_as_mapping(data.get("agent"), "agent")))


def _read_file(path: str | os.PathLike[str]) -> AgentConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"reading config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
        return AgentConfig.from_mapping(_as_mapping(data, "document"))
    except (yaml.YAMLError, ConfigError) as exc:
        raise ConfigError(f"parsing config file {path}: {exc}") from exc


def _overlay_permissions(cfg: AgentConfig, raw: str) -> None:
    """Apply permissions given as JSON/YAML text; unparsable input is ignored."""
    try:
        perms = PermissionsSection.from_mapping(_as_mapping(yaml.safe_load(raw), "permissions"))
    except (yaml.YAMLError, ConfigError):
        return
    target = cfg.agent.permissions
    if perms.allowed_tools:
        target.allowed_tools = perms.allowed_tools
    if perms.allowed_commands:
        target.allowed_commands = perms.allowed_commands
    if perms.denied_commands:
        target.denied_commands = perms.denied_commands
    if perms.filesystem_scope:
        target.filesystem_scope = perms.filesystem_scope


def load_config(path: str | os.PathLike[str] | None) -> AgentConfig:
    """Read the config file (if a path is given) and apply environment overrides.

    Environment variables take precedence over file values.
    """
    cfg = _read_file(path) if path else AgentConfig()
    agent = cfg.agent

    if v := os.environ.get("AGENT_NAME"):
        agent.name = v
    if v := os.environ.get("TEAM_NAME"):
        agent.team = v
    if v := os.environ.get("AGENT_ROLE"):
        agent.role = v
    if v := os.environ.get("AGENT_SYSTEM_PROMPT"):
        agent.system_prompt = v
    if v := os.environ.get("NATS_URL"):
        agent.nats.url = v
    if v := os.environ.get("AGENT_FILESYSTEM_SCOPE"):
        agent.permissions.filesystem_scope = v
    if v := os.environ.get("AGENT_PERMISSIONS"):
        _overlay_permissions(cfg, v)

    if not agent.name:
        raise ConfigError("agent name is required (set via config file or AGENT_NAME env)")
    if not agent.team:
        raise ConfigError("team name is required (set via config file or TEAM_NAME env)")
    if not agent.nats.url:
        raise ConfigError("NATS URL is required (set via config file or NATS_URL env)")

    if not agent.role:
        agent.role = DEFAULT_ROLE
    if not agent.permissions.filesystem_scope:
        agent.permissions.filesystem_scope = DEFAULT_FILESYSTEM_SCOPE

    return cfg