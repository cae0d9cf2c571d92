"""Open folders in a dev container or over SSH through the editor.

PUBLIC API:
  - container_uri: Build the dev container URI for a local folder
  - ssh_uri: Build the SSH remote URI for a folder on a host
  - EditorPathOpener: PathOpener that launches the editor with a folder URI
"""

import asyncio
import logging
from pathlib import Path

__all__ = ["container_uri", "ssh_uri", "EditorPathOpener"]

logger = logging.getLogger(__name__)


def container_uri(path: str) -> str:
    """Dev container URI for a local folder.

    The authority carries the hex-encoded absolute host path; the container
    side is mounted under /workspaces/<folder name>.
    """
    local = Path(path).expanduser().resolve()
    encoded = str(local).encode("utf-8").hex()
    return f"vscode-remote://dev-container+{encoded}/workspaces/{local.name}"


def ssh_uri(host: str, path: str) -> str:
    """SSH remote URI for path on host."""
    if not path.startswith("/"):
        path = "/" + path
    return f"vscode-remote://ssh-remote+{host}{path}"


class EditorPathOpener:
    """Launch ``<editor> --folder-uri <uri>``."""

    def __init__(self, editor: str = "code"):
        self.editor = editor

    async def open_local(self, path: str) -> None:
        await self._launch(container_uri(path))

    async def open_remote(self, host: str, path: str) -> None:
        await self._launch(ssh_uri(host, path))

    async def _launch(self, uri: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.editor,
                "--folder-uri",
                uri,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise RuntimeError(f"editor '{self.editor}' not found on PATH") from e

        _, stderr = await proc.communicate()
        if proc.returncode != 0:
            raise RuntimeError(stderr.decode(errors="replace").strip() or f"{self.editor} exited with {proc.returncode}")
        logger.info(f"Opened {uri}")
