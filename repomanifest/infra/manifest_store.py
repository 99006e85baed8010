"""
Manifest file persistence for repomanifest.

Reads and writes the manifest document with:
- Validation on every load and save (through the codec)
- Atomic writes (write to temp, then rename)
- A lock around load-modify-save cycles within one process
- Automatic parent directory creation

Cross-process coordination is left to the caller.
"""

import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Optional
import logging

from ..domain import RepositoryManifest
from ..exit_codes import ManifestNotFoundError
from ..serialization import deserialize_manifest, serialize_manifest

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_PATH = Path('.wayruco') / 'manifest.json'


class ManifestStore:
    """
    Load and save a RepositoryManifest as JSON.

    Example:
        store = ManifestStore(Path(".wayruco/manifest.json"))
        manifest = store.load()
        store.save(manifest.add_repository(repo))
    """

    def __init__(self, path: Path = DEFAULT_MANIFEST_PATH):
        self.path = Path(path).expanduser()
        self._lock = threading.RLock()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> RepositoryManifest:
        """
        Read and validate the manifest.

        Raises:
            ManifestNotFoundError: if the file does not exist
            ParseError: if the file is not well-formed JSON
            ValidationError: if the document violates the schema
        """
        with self._lock:
            if not self.exists():
                raise ManifestNotFoundError(str(self.path))
            text = self.path.read_text(encoding='utf-8')
            manifest = deserialize_manifest(text)
            logger.debug(f"Loaded {len(manifest.repositories)} repositories from {self.path}")
            return manifest

    def save(self, manifest: RepositoryManifest) -> None:
        """
        Validate and write the manifest.

        Nothing is written if validation fails.

        Raises:
            ValidationError: if the manifest is invalid
        """
        text = serialize_manifest(manifest)
        with self._lock:
            self._write_atomic(text + '\n')
        logger.debug(f"Saved {len(manifest.repositories)} repositories to {self.path}")

    def update(self, fn: Callable[[RepositoryManifest], RepositoryManifest]) -> RepositoryManifest:
        """
        Load, transform and save under the store lock.

        lastUpdated is stamped on the result before saving.

        Args:
            fn: Receives the current manifest, returns the new one

        Returns:
            The saved manifest
        """
        with self._lock:
            manifest = fn(self.load()).touch()
            self.save(manifest)
            return manifest

    def init(self, version: str = "1.0.0", last_updated: Optional[str] = None) -> RepositoryManifest:
        """
        Create an empty manifest if none exists.

        Returns:
            The existing manifest, or the new empty one
        """
        with self._lock:
            if self.exists():
                return self.load()
            manifest = RepositoryManifest.empty(version=version, last_updated=last_updated)
            self.save(manifest)
            logger.info(f"Created manifest at {self.path}")
            return manifest

    def _write_atomic(self, text: str) -> None:
        """Write text atomically using temp file and rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp"
        )

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(temp_path, self.path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
