"""Manifest stores: where the project version lives and how it changes.

NpmManifest delegates writes to `npm version --no-git-tag-version`, so the
lock file and any npm lifecycle scripts are handled by npm itself.
JsonManifest edits package.json and package-lock.json directly for machines
without npm.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from shiprel.core.config import ManifestConfig
from shiprel.core.result import Err, Ok, Result
from shiprel.core.structured import as_str_dict, get_str, get_table
from shiprel.platform.files import atomic_write_bytes, atomic_write_text
from shiprel.platform.process import run as run_process
from shiprel.services.release.errors import ReleaseError
from shiprel.services.release.model import BumpKind
from shiprel.services.release.semver import parse_version

NPM_TIMEOUT_SECONDS = 2 * 60.0


@dataclass(frozen=True, slots=True)
class ManifestSnapshot:
    """Raw bytes of the manifest files (None for a file that did not exist)."""

    files: tuple[tuple[Path, bytes | None], ...]


class ManifestStore(Protocol):
    def current_version(self) -> Result[str, ReleaseError]: ...

    def bump(self, kind: BumpKind) -> Result[str, ReleaseError]: ...

    def set_version(self, version: str) -> Result[None, ReleaseError]: ...

    def tracked_files(self) -> list[str]: ...

    def snapshot(self) -> ManifestSnapshot: ...

    def restore(self, snapshot: ManifestSnapshot) -> Result[None, ReleaseError]: ...


class _ManifestFiles:
    """Reading, listing and restoring package.json and its lock file."""

    def __init__(self, *, root: Path, config: ManifestConfig) -> None:
        self.root = root
        self.manifest_path = root / config.path
        lock = config.lock_path()
        self.lock_path = root / lock if lock else None
        self._relative = [config.path] + ([lock] if lock else [])

    def current_version(self) -> Result[str, ReleaseError]:
        data = _read_json(self.manifest_path)
        if isinstance(data, Err):
            return data

        value = get_str(data.value, "version")
        if value is None:
            return Err(
                ReleaseError(
                    kind="manifest_invalid",
                    message=f"missing version in {self.manifest_path.name}",
                    hint=str(self.manifest_path),
                )
            )
        return Ok(value)

    def tracked_files(self) -> list[str]:
        """Manifest files to stage, relative to the repository root."""
        return [rel for rel in self._relative if (self.root / rel).is_file()]

    def snapshot(self) -> ManifestSnapshot:
        files: list[tuple[Path, bytes | None]] = []
        for path in (self.manifest_path, self.lock_path):
            if path is None:
                continue
            files.append((path, path.read_bytes() if path.is_file() else None))
        return ManifestSnapshot(files=tuple(files))

    def restore(self, snapshot: ManifestSnapshot) -> Result[None, ReleaseError]:
        for path, content in snapshot.files:
            try:
                if content is None:
                    path.unlink(missing_ok=True)
                else:
                    atomic_write_bytes(path, content)
            except OSError as e:
                return Err(
                    ReleaseError(
                        kind="manifest_failed",
                        message=f"failed to restore {path.name}: {e}",
                        hint=str(path),
                    )
                )
        return Ok(None)


class NpmManifest(_ManifestFiles):
    """Version changes go through `npm version ... --no-git-tag-version`."""

    def bump(self, kind: BumpKind) -> Result[str, ReleaseError]:
        return self._npm_version(kind)

    def set_version(self, version: str) -> Result[None, ReleaseError]:
        result = self._npm_version(version)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def _npm_version(self, arg: str) -> Result[str, ReleaseError]:
        result = run_process(
            ["npm", "version", arg, "--no-git-tag-version"],
            cwd=self.manifest_path.parent,
            timeout=NPM_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            e = result.error
            return Err(
                ReleaseError(
                    kind="manifest_failed",
                    message=f"npm version {arg} failed: {e.detail}",
                    returncode=e.returncode,
                )
            )

        # npm prints the new version as "v1.2.4" (after any lifecycle output).
        lines = [ln.strip() for ln in result.value.splitlines() if ln.strip()]
        if not lines:
            return Err(
                ReleaseError(
                    kind="manifest_failed",
                    message=f"npm version {arg} printed no version",
                )
            )
        return Ok(lines[-1].removeprefix("v"))


class JsonManifest(_ManifestFiles):
    """Version changes are written into the JSON files directly."""

    def bump(self, kind: BumpKind) -> Result[str, ReleaseError]:
        current = self.current_version()
        if isinstance(current, Err):
            return current

        parsed = parse_version(current.value)
        if parsed is None:
            return Err(
                ReleaseError(
                    kind="manifest_invalid",
                    message=f"cannot bump non-semver version: {current.value}",
                    hint=str(self.manifest_path),
                )
            )

        new_version = str(parsed.bump(kind))
        applied = self.set_version(new_version)
        if isinstance(applied, Err):
            return applied
        return Ok(new_version)

    def set_version(self, version: str) -> Result[None, ReleaseError]:
        updated = _write_json_version(self.manifest_path, version, lock=False)
        if isinstance(updated, Err):
            return updated

        if self.lock_path is not None and self.lock_path.is_file():
            updated = _write_json_version(self.lock_path, version, lock=True)
            if isinstance(updated, Err):
                return updated

        return Ok(None)


def build_manifest_store(*, root: Path, config: ManifestConfig) -> ManifestStore:
    match config.tool:
        case "npm":
            return NpmManifest(root=root, config=config)
        case "builtin":
            return JsonManifest(root=root, config=config)


def _read_json(path: Path) -> Result[dict[str, object], ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )
    return Ok(data)


def _detect_indent(text: str) -> str | int:
    m = re.search(r"^\{\r?\n([ \t]+)\S", text)
    if m is None:
        return 2
    indent = m.group(1)
    return indent if "\t" in indent else len(indent)


def _write_json_version(path: Path, version: str, *, lock: bool) -> Result[None, ReleaseError]:
    data = _read_json(path)
    if isinstance(data, Err):
        return data

    obj = data.value
    obj["version"] = version
    if lock:
        # lockfileVersion >= 2 repeats the root package under packages[""].
        packages = get_table(obj, "packages")
        root_pkg = get_table(packages, "") if packages is not None else None
        if root_pkg is not None:
            root_pkg["version"] = version

    # Bytes, so CRLF line endings survive the rewrite.
    text = path.read_bytes().decode("utf-8")
    newline = "\r\n" if "\r\n" in text else "\n"
    out = json.dumps(obj, indent=_detect_indent(text), ensure_ascii=False) + "\n"
    if newline != "\n":
        out = out.replace("\n", newline)

    try:
        atomic_write_text(path, out, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_failed",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
