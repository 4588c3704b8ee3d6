# streambrain/services/probe/ffprobe_adapter.py
from __future__ import annotations

import asyncio
import json
import shlex
import shutil
from pathlib import Path
from typing import Optional

from streambrain.common.settings import get_settings
from streambrain.common.logging import get_logger
from streambrain.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_ffprobe
from streambrain.domain.entities.media_metadata import MediaMetadata
from streambrain.domain.ports.probe import MediaProbePort

logger = get_logger()


class FFprobeError(RuntimeError):
    """Adapter-level error for probe failures."""

    def __init__(self, message: str, stderr: Optional[str] = None, rc: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.rc = rc


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Runs ffprobe as an asyncio subprocess so the event loop stays free while probing.
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[float] = None):
        cfg = get_settings()
        self.ffprobe_bin = ffprobe_bin or cfg.ffprobe.bin
        self.log_level = cfg.ffprobe.log_level
        self.timeout_sec = float(timeout_sec if timeout_sec is not None else cfg.ffprobe.timeout_sec)

    # ---- Port API -------------------------------------------------------------
    async def probe(self, source: str) -> MediaMetadata:
        if not source:
            raise FFprobeError("No source provided to probe().")
        if not Path(source).is_file():
            raise FFprobeError(f"File not found: {source}")
        self._resolve_bin()

        cmd = build_ffprobe_cmd(source, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FFprobeError("Failed to execute ffprobe (OS error).", stderr=str(e)) from e

        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout=self.timeout_sec)
        except asyncio.TimeoutError as e:
            raise FFprobeError(f"ffprobe timed out after {self.timeout_sec}s") from e
        finally:
            # also reached when the caller cancels us (e.g. an outer wait_for)
            if proc.returncode is None:
                proc.kill()
                await proc.wait()

        stdout = out.decode("utf-8", errors="replace")
        stderr = err.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            raise FFprobeError("ffprobe returned non-zero exit code", stderr=stderr, rc=proc.returncode)

        try:
            data = json.loads(stdout or "{}")
        except json.JSONDecodeError as e:
            raise FFprobeError("ffprobe produced invalid JSON", stderr=stdout) from e

        return parse_ffprobe(data)

    def _resolve_bin(self) -> None:
        if Path(self.ffprobe_bin).is_absolute():
            return
        # try to resolve absolute path for nicer errors
        resolved = shutil.which(self.ffprobe_bin)
        if not resolved:
            raise FFprobeError("ffprobe not found on PATH; set FFPROBE__BIN or install ffmpeg.")
        self.ffprobe_bin = resolved
