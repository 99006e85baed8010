"""
Git client infrastructure for repomanifest.

Provides a thin abstraction over the git commands upstream sync needs.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Each method returns (output, returncode); a returncode of -1 means
    the command could not be run at all (timeout, git missing).

    Example:
        client = GitClient()
        output, code = client.fetch("packages/wayru-sdk", "upstream", "main")
        if code != 0:
            print(output)
    """

    def __init__(self, timeout: int = 60):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 60)
        """
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments after "git"
            cwd: Working directory

        Returns:
            Tuple of (combined stdout/stderr, returncode)
        """
        cmd = ['git', *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return None, -1

        output = (result.stdout or '') + (result.stderr or '')
        return output.strip() or None, result.returncode

    def remote_url(self, path: str, remote: str) -> Optional[str]:
        """URL configured for a remote, or None."""
        output, code = self._run(['config', '--get', f'remote.{remote}.url'], cwd=path)
        if code == 0 and output:
            return output.strip()
        return None

    def add_remote(self, path: str, remote: str, url: str) -> Tuple[Optional[str], int]:
        """Add a remote; an existing remote of the same name is left alone."""
        if self.remote_url(path, remote) is not None:
            return None, 0
        return self._run(['remote', 'add', remote, url], cwd=path)

    def fetch(self, path: str, remote: str, branch: str) -> Tuple[Optional[str], int]:
        """Fetch one branch from a remote."""
        return self._run(['fetch', remote, branch], cwd=path)

    def merge(self, path: str, ref: str) -> Tuple[Optional[str], int]:
        """Merge a ref into the current branch."""
        return self._run(['merge', '--no-edit', ref], cwd=path)
