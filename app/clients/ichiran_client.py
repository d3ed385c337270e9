"""
Subprocess client for the ichiran-cli romanization engine.
"""
import asyncio
import logging
import os
import signal
import time
from typing import List, Optional

from app.core.config import settings
from app.core.errors import EngineTimeoutError, ProcessError

logger = logging.getLogger(__name__)

READ_CHUNK = 64 * 1024
KILL_WAIT_SECONDS = 2


class IchiranClient:
    def __init__(self, executable: str, timeout_seconds: float = 30, max_output_bytes: int = 1024 * 1024):
        self.executable = executable
        self.timeout = timeout_seconds
        self.max_output_bytes = max_output_bytes

    async def romanize(self, text: str) -> str:
        """Line mode: annotated text, one word header per `* ` line."""
        return await self.run(["-i", text])

    async def romanize_full(self, text: str, limit: int = 1) -> str:
        """Full mode: a JSON document with up to `limit` interpretations."""
        return await self.run(["-f", "-l", str(limit), text])

    async def run(self, args: List[str]) -> str:
        """
        Run ichiran-cli once and return its stdout.
        Raises EngineTimeoutError when the timeout elapses, ProcessError otherwise.
        """
        cmd = [self.executable, *args]
        start = time.perf_counter()
        logger.info("[ICHIRAN] event=start executable=%s mode=%s", self.executable, args[0] if args else "")
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            logger.error("[ICHIRAN] event=spawn_error executable=%s err=%s", self.executable, e)
            raise ProcessError(f"Failed to start {self.executable}: {e}") from e

        try:
            stdout, stderr, returncode = await asyncio.wait_for(self._communicate(proc), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._kill(proc)
            latency_ms = (time.perf_counter() - start) * 1000
            logger.error("[ICHIRAN] event=timeout timeout_s=%s latency_ms=%.2f", self.timeout, latency_ms)
            raise EngineTimeoutError(f"{self.executable} timed out after {self.timeout}s")
        except ProcessError as e:
            await self._kill(proc)
            logger.error("[ICHIRAN] event=error err=%s", e)
            raise

        latency_ms = (time.perf_counter() - start) * 1000
        err_text = stderr.decode("utf-8", errors="replace")
        if err_text:
            logger.warning("[ICHIRAN] event=stderr output=%s", err_text.rstrip())

        if returncode != 0:
            logger.error(
                "[ICHIRAN] event=error returncode=%s latency_ms=%.2f", returncode, latency_ms
            )
            message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
            if err_text:
                message += f"\n{err_text.rstrip()}"
            raise ProcessError(message)

        logger.info("[ICHIRAN] event=ok latency_ms=%.2f bytes=%d", latency_ms, len(stdout))
        return stdout.decode("utf-8", errors="replace")

    async def _communicate(self, proc):
        stdout, stderr = await asyncio.gather(
            self._read_capped(proc.stdout, "stdout"),
            self._read_capped(proc.stderr, "stderr"),
        )
        returncode = await proc.wait()
        return stdout, stderr, returncode

    async def _read_capped(self, stream, name: str) -> bytes:
        buf = bytearray()
        while True:
            chunk = await stream.read(READ_CHUNK)
            if not chunk:
                return bytes(buf)
            buf.extend(chunk)
            if len(buf) > self.max_output_bytes:
                raise ProcessError(f"{name} exceeded {self.max_output_bytes} bytes")

    async def _kill(self, proc) -> None:
        # the engine runs in its own session; take down anything it forked too
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        try:
            await asyncio.wait_for(proc.wait(), timeout=KILL_WAIT_SECONDS)
        except asyncio.TimeoutError:
            logger.warning("[ICHIRAN] event=kill_wait_timeout pid=%s", proc.pid)


def build_client() -> Optional[IchiranClient]:
    if not settings.ICHIRAN_CLI:
        return None
    return IchiranClient(
        executable=settings.ICHIRAN_CLI,
        timeout_seconds=settings.ICHIRAN_TIMEOUT_SECONDS,
        max_output_bytes=settings.ICHIRAN_MAX_OUTPUT_BYTES,
    )
