# agentcrew

Building blocks for running a team of coding agents, each inside its own
container with a small sidecar process next to it. The package holds the
parts of that setup that are plain logic and file handling.

## Modules

### `agentcrew.config`

`load_config(path)` reads an agent's YAML file (skipped when `path` is empty
or `None`), then applies environment overrides: `AGENT_NAME`, `TEAM_NAME`,
`AGENT_ROLE`, `AGENT_SYSTEM_PROMPT`, `NATS_URL`, `AGENT_FILESYSTEM_SCOPE` and
`AGENT_PERMISSIONS` (JSON or YAML text whose non-empty permission fields
replace those from the file; text that cannot be parsed is ignored).

The agent name, team name and NATS URL are required; when one is missing a
`ConfigError` (a `ValueError`) is raised. It is raised too when the file cannot
be read or parsed. The role defaults to `leader` and the filesystem scope to
`/workspace`.

The result is an `AgentConfig` dataclass holding an `AgentSection` with
`NATSSection`, `PermissionsSection` and `ResourcesSection`.

### `agentcrew.skills`

- `is_valid_skill_name(name)`: true for names made only of letters, digits
  and `@ / _ . -`.
- `install_skills(skills)`: runs `npx skills add <name> -g --yes` for every
  valid name and returns one `SkillInstallResult` (`package`, `status` of
  `"installed"` or `"failed"`, `error`) per non-empty name. Invalid names fail
  with the error `"invalid skill name"`; a missing `npx` or a non-zero exit
  gives a failed result rather than an exception.
- `symlink_skills_dir(work_dir)`: creates `~/.claude/skills`, replaces
  whatever is at `<work_dir>/.claude/skills` with a symlink to it, and returns
  the link path.
- `summarize_skill_results(results)`: a line such as `"1 installed, 1 failed"`.

### `agentcrew.validation`

- `write_workspace_files(claude_dir, claude_md, sub_agent_files)`: writes
  `CLAUDE.md` and the files under `agents/`, rejecting file names that could
  leave that directory, and returns the paths written.
- `run_container_validation(work_dir, claude_dir, skills_configured, sub_agents_configured)`:
  returns a list of `ValidationCheck` items (`name`, `status`, `message`).
  `claude_md` is always checked; `agents_dir` only when sub-agents are
  configured; `skills_symlink` and `skills_installed` only when skills are.
- `ValidationStatus` is `OK`, `WARNING` or `ERROR` (`"ok"`, `"warning"`,
  `"error"`).
- `summarize_checks(checks)`: a line such as `"1 ok, 1 warning(s), 0 error(s)"`.

### `agentcrew.names`

- `validate_name(name)`: returns the name, or raises `ValueError` when it is
  blank or longer than 255 bytes.
- `sanitize_name(name)`: turns a display name such as `"My Team"` into a slug
  (`"my-team"`) of at most 62 characters from `[a-z0-9_-]`; an empty result
  becomes `"team"`.
- `is_valid_sub_agent_model(value)`: true for `inherit`, `sonnet`, `opus`
  and `haiku`.

### `agentcrew.errors`

`APIError(code, message)` carries an HTTP status code. `error_response(error)`
returns `(status, {"error": message})`: client errors (below 500) keep their
message, server errors and any other exception become status 500 with
`"internal server error"`.

### `agentcrew.messages`

- `split_csv(s)`: trimmed, non-empty comma-separated parts.
- `relay_message_type(message_type)`: the log type for leader responses,
  activity events, container validation and skill status messages; `None`
  for anything else.
- `parse_before(value)`: parses an RFC 3339 timestamp into an aware
  `datetime`, raising `APIError` with status 400 when it is invalid.
- `message_limit(requested, default, maximum)`: the default (100) for a
  missing or non-integer value, capped at the maximum (500).
- `CHAT_MESSAGE_TYPES`: the types shown in chat history by default.

## What it does not do

The package has no command-line entry point, no HTTP or WebSocket server, no
database storage of teams, agents or task logs, no NATS client and no
container runtime. It supplies the helpers such pieces would use.

## Example

```python
from agentcrew.names import sanitize_name
from agentcrew.validation import run_container_validation, summarize_checks

print(sanitize_name("My Team"))  # my-team

checks = run_container_validation("/workspace", "/workspace/.claude", False, False)
print(summarize_checks(checks))
```

## Running the tests

```
pip install -e ".[test]"
pytest
```