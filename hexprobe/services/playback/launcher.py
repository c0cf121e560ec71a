# hexprobe/services/playback/launcher.py
from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from hexprobe.common.logging import get_logger
from hexprobe.domain.errors import IOFailureError
from hexprobe.domain.ports.playback import PlayerPort

logger = get_logger(__name__)


class SystemOpener(PlayerPort):
    """Hands the file to the desktop's default application."""

    def __init__(self, platform: Optional[str] = None):
        self.platform = platform or sys.platform
        if self.platform.startswith("win"):
            self.backend = "os.startfile"
        elif self.platform == "darwin":
            self.backend = "open"
        else:
            self.backend = "xdg-open"
        self._children: List[subprocess.Popen] = []

    def _command(self, path: Path) -> List[str]:
        return [self.backend, str(path)]

    def available(self) -> bool:
        if self.backend == "os.startfile":
            return hasattr(os, "startfile")
        return shutil.which(self.backend) is not None

    def open(self, path: Path) -> None:
        try:
            if self.backend == "os.startfile":
                os.startfile(str(path))  # type: ignore[attr-defined]
            else:
                # the viewer outlives this call; keep the handle so it is reaped once it exits
                self._children = [p for p in self._children if p.poll() is None]
                self._children.append(subprocess.Popen(
                    self._command(path),
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                ))
        except OSError as e:
            raise IOFailureError(f"Failed to launch {self.backend}: {e}", path=path) from e
        logger.info("opened %s with %s", path, self.backend)
