"""Plugin manifest: decide whether a service must be restarted to pick up plugins.

Comparing file modification times against the pid file is racy (concurrent
writes, clock skew, copies preserving mtimes). Instead, a manifest of content
digests is recorded when the service is (re)started and compared against the
plugin directory on the next run.

Typical Usage:
    current = scan_plugins(Path("/var/lib/jenkins/plugins"))
    changes = diff_manifests(load_manifest(manifest_path), current)
    if changes.restart_required:
        ...  # stop, wait for the port to close, start, wait until ready
        save_manifest(current, manifest_path)
"""

import hashlib
from pathlib import Path

import arrow
from loguru import logger
from pydantic import BaseModel, Field

from service_readiness.constants import DEFAULT_PLUGIN_PATTERN

_CHUNK_SIZE = 1024 * 1024


class PluginManifest(BaseModel):
    """Content digests of the plugin files present at a point in time."""

    directory: str
    pattern: str = DEFAULT_PLUGIN_PATTERN
    digests: dict[str, str] = Field(default_factory=dict)  # file name -> sha256
    recorded_at: str = Field(default_factory=lambda: arrow.utcnow().isoformat())


class PluginChanges(BaseModel):
    """Differences between a recorded manifest and the current plugin directory."""

    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)

    @property
    def restart_required(self) -> bool:
        return bool(self.added or self.modified or self.removed)


def file_digest(path: Path) -> str:
    """Return the sha256 hex digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def scan_plugins(directory: Path, pattern: str = DEFAULT_PLUGIN_PATTERN) -> PluginManifest:
    """Build a manifest of the plugin files currently in ``directory``.

    A missing directory yields an empty manifest: no plugins installed.
    """
    digests = {}
    if directory.is_dir():
        for path in sorted(directory.glob(pattern)):
            if path.is_file():
                digests[path.name] = file_digest(path)
    else:
        logger.debug("Plugin directory {} does not exist", directory)

    return PluginManifest(directory=str(directory), pattern=pattern, digests=digests)


def load_manifest(path: Path) -> PluginManifest | None:
    """Load a previously saved manifest, or None if none was recorded yet.

    Raises:
        pydantic.ValidationError: If the file is not a valid manifest
    """
    if not path.exists():
        return None
    return PluginManifest.model_validate_json(path.read_text(encoding="utf-8"))


def save_manifest(manifest: PluginManifest, path: Path) -> None:
    """Persist a manifest as JSON, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    logger.info("Recorded {} plugin digest(s) in {}", len(manifest.digests), path)


def diff_manifests(previous: PluginManifest | None, current: PluginManifest) -> PluginChanges:
    """Compare two manifests.

    Without a previous manifest there is no known running state to compare
    against, so every current plugin counts as added.
    """
    before = previous.digests if previous else {}
    after = current.digests

    changes = PluginChanges(
        added=sorted(name for name in after if name not in before),
        modified=sorted(name for name in after if name in before and before[name] != after[name]),
        removed=sorted(name for name in before if name not in after),
    )
    if changes.restart_required:
        logger.info(
            "Plugins changed: {} added, {} modified, {} removed",
            len(changes.added),
            len(changes.modified),
            len(changes.removed),
        )
    return changes
