"""Typed configuration loading and access.

The configuration lives in an optional `.shiprel.toml` at the repository
root. Every field has a default, so a project without the file releases
exactly like the classic `release.sh` workflow:

    [release]
    remote = "origin"
    branch = "main"
    tag_prefix = "v"
    publish_target = "JFrog Fly"
    commit_message = "chore: bump version to {version}"
    tag_message = "Release {tag}"

    [manifest]
    path = "package.json"
    lock_file = "package-lock.json"   # next to package.json
    tool = "npm"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "ManifestConfig",
    "ManifestTool",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = ".shiprel.toml"

ManifestTool = Literal["npm", "builtin"]
_MANIFEST_TOOLS: tuple[ManifestTool, ...] = ("npm", "builtin")

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_TAG_PREFIX = "v"
DEFAULT_PUBLISH_TARGET = "JFrog Fly"
DEFAULT_COMMIT_MESSAGE = "chore: bump version to {version}"
DEFAULT_TAG_MESSAGE = "Release {tag}"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Where and how a release is recorded in git."""

    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    tag_prefix: str = DEFAULT_TAG_PREFIX
    publish_target: str = DEFAULT_PUBLISH_TARGET
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    tag_message: str = DEFAULT_TAG_MESSAGE

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    def commit_message_for(self, version: str) -> str:
        return self.commit_message.format(version=version, tag=self.tag_for(version))

    def tag_message_for(self, version: str) -> str:
        return self.tag_message.format(version=version, tag=self.tag_for(version))


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    """Manifest file holding the version.

    Attributes:
        path: package.json, relative to the repository root.
        lock_file: Lock file name, relative to the manifest's directory (where
            npm writes it). None when the project has no lock file.
        tool: "npm" runs `npm version`; "builtin" edits the JSON itself.
    """

    path: str = "package.json"
    lock_file: str | None = "package-lock.json"
    tool: ManifestTool = "npm"

    def lock_path(self) -> str | None:
        """Lock file relative to the repository root."""
        if not self.lock_file:
            return None
        return (PurePosixPath(self.path).parent / self.lock_file).as_posix()


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but not acceptable.
        """
        release: StrDict = get_table(data, "release") or {}
        manifest: StrDict = get_table(data, "manifest") or {}

        tool = get_str(manifest, "tool") or "npm"
        if tool not in _MANIFEST_TOOLS:
            raise ValueError(f"manifest.tool must be one of {list(_MANIFEST_TOOLS)}, got {tool!r}")

        lock_file: str | None = "package-lock.json"
        if "lock_file" in manifest:
            # An explicit empty string disables staging a lock file.
            lock_file = get_str(manifest, "lock_file")

        config = cls(
            release=ReleaseConfig(
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
                branch=get_str(release, "branch") or DEFAULT_BRANCH,
                tag_prefix=_get_raw_str(release, "tag_prefix", DEFAULT_TAG_PREFIX),
                publish_target=get_str(release, "publish_target") or DEFAULT_PUBLISH_TARGET,
                commit_message=get_str(release, "commit_message") or DEFAULT_COMMIT_MESSAGE,
                tag_message=get_str(release, "tag_message") or DEFAULT_TAG_MESSAGE,
            ),
            manifest=ManifestConfig(
                path=get_str(manifest, "path") or "package.json",
                lock_file=lock_file,
                tool=tool,
            ),
        )

        # Fail at load time rather than after the commit was created.
        try:
            config.release.commit_message_for("0.0.0")
            config.release.tag_message_for("0.0.0")
        except (KeyError, IndexError, AttributeError) as e:
            raise ValueError(f"unknown placeholder in message template: {e}") from e

        return config


def _get_raw_str(table: Mapping[str, object], key: str, default: str) -> str:
    # tag_prefix may legitimately be empty, so get_str() cannot be used.
    value = table.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to .shiprel.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[Config, ConfigError]:
    """Load `.shiprel.toml` from repo_root, or defaults when it does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    path = repo_root / CONFIG_FILENAME
    if not path.is_file():
        return Ok(Config())
    return load_config(path)
