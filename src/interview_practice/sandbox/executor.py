"""
Server-side code sandbox.

Runs submitted Python or JavaScript in a throwaway subprocess:
- fresh temporary working directory, removed afterwards
- scrubbed environment (no inherited secrets such as GEMINI_API_KEY)
- POSIX rlimits on CPU time, memory and file size
- wall-clock timeout that kills the whole process group
- output pipes drained to EOF, keeping at most a fixed number of characters

Java and C++ are accepted but not executed (status ``unsupported``).
"""

import asyncio
import functools
import os
import shutil
import signal
import tempfile
import time
from pathlib import Path

import structlog

from interview_practice.config import Settings
from interview_practice.models.enums import ExecutionStatus, Language
from interview_practice.models.execution import ExecutionResult
from interview_practice.monitoring.metrics import sandbox_duration_seconds, sandbox_executions_total
from interview_practice.sandbox.exceptions import CodeTooLargeError, EmptyCodeError

logger = structlog.get_logger(__name__)

SCRIPT_NAMES = {
    Language.PYTHON: "main.py",
    Language.JAVASCRIPT: "main.js",
}

MAX_FILE_BYTES = 1024 * 1024


def _limit_resources(cpu_seconds: int, memory_bytes: int | None) -> None:
    """Apply rlimits in the child before exec (POSIX only)."""
    import resource

    resource.setrlimit(resource.RLIMIT_CPU, (cpu_seconds, cpu_seconds))
    resource.setrlimit(resource.RLIMIT_FSIZE, (MAX_FILE_BYTES, MAX_FILE_BYTES))
    if memory_bytes is not None:
        resource.setrlimit(resource.RLIMIT_AS, (memory_bytes, memory_bytes))


READ_CHUNK_BYTES = 64 * 1024
# Pipes left open by an escaped grandchild must not block the request
DRAIN_GRACE_SECONDS = 2.0
TRUNCATION_MARKER = "\n... [output truncated]"


async def _read_bounded(stream: asyncio.StreamReader, limit_chars: int) -> tuple[str, bool]:
    """
    Read ``stream`` until EOF, keeping at most ``limit_chars`` characters.

    Everything past the limit is read and discarded so the child never
    blocks on a full pipe and memory stays bounded.
    """
    # A UTF-8 character is at most 4 bytes
    limit_bytes = limit_chars * 4
    kept = bytearray()
    overflow = False

    while True:
        chunk = await stream.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        room = limit_bytes - len(kept)
        if room > 0:
            kept += chunk[:room]
        if len(chunk) > room:
            overflow = True

    text = kept.decode("utf-8", errors="replace")
    if len(text) > limit_chars:
        text, overflow = text[:limit_chars], True
    if overflow:
        text += TRUNCATION_MARKER
    return text, overflow


class CodeSandbox:
    """
    Executes submitted code in an isolated subprocess.

    Attributes:
        python_binary: Interpreter used for Python submissions
        node_binary: Runtime used for JavaScript submissions
        timeout_seconds: Wall-clock limit per execution
        max_code_chars: Larger submissions are rejected
        max_output_chars: stdout/stderr are each cut to this size
        memory_limit_mb: Address-space limit (Python) / V8 heap limit (JavaScript)
        cpu_limit_seconds: CPU time limit
    """

    def __init__(
        self,
        python_binary: str,
        node_binary: str = "node",
        timeout_seconds: float = 10.0,
        max_code_chars: int = 50_000,
        max_output_chars: int = 10_000,
        memory_limit_mb: int = 256,
        cpu_limit_seconds: int = 5,
    ):
        self.python_binary = python_binary
        self.node_binary = node_binary
        self.timeout_seconds = timeout_seconds
        self.max_code_chars = max_code_chars
        self.max_output_chars = max_output_chars
        self.memory_limit_mb = memory_limit_mb
        self.cpu_limit_seconds = cpu_limit_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "CodeSandbox":
        return cls(
            python_binary=settings.SANDBOX_PYTHON_BINARY,
            node_binary=settings.SANDBOX_NODE_BINARY,
            timeout_seconds=settings.SANDBOX_TIMEOUT_SECONDS,
            max_code_chars=settings.SANDBOX_MAX_CODE_CHARS,
            max_output_chars=settings.SANDBOX_MAX_OUTPUT_CHARS,
            memory_limit_mb=settings.SANDBOX_MEMORY_LIMIT_MB,
            cpu_limit_seconds=settings.SANDBOX_CPU_LIMIT_SECONDS,
        )

    def runtime_available(self, language: Language) -> bool:
        """True if the runtime for ``language`` is installed on this host."""
        if language == Language.PYTHON:
            return shutil.which(self.python_binary) is not None
        if language == Language.JAVASCRIPT:
            return shutil.which(self.node_binary) is not None
        return False

    def _command(self, language: Language, script: Path) -> list[str]:
        if language == Language.PYTHON:
            # -I: isolated mode, ignores PYTHON* env vars and user site-packages
            return [self.python_binary, "-I", "-B", str(script)]
        return [self.node_binary, f"--max-old-space-size={self.memory_limit_mb}", str(script)]

    def _environment(self, workdir: str) -> dict[str, str]:
        return {
            "PATH": os.environ.get("PATH", "/usr/local/bin:/usr/bin:/bin"),
            "HOME": workdir,
            "TMPDIR": workdir,
            "LANG": "C.UTF-8",
            "PYTHONUNBUFFERED": "1",
        }

    async def execute(self, code: str, language: Language) -> ExecutionResult:
        """
        Run ``code`` and capture its output.

        Args:
            code: Source code as typed by the user
            language: Submission language

        Returns:
            ExecutionResult; non-zero exit is ``error``, a killed run ``timeout``

        Raises:
            EmptyCodeError: Code is empty/whitespace
            CodeTooLargeError: Code exceeds max_code_chars
        """
        if not code.strip():
            raise EmptyCodeError("Please write some code before running.")
        if len(code) > self.max_code_chars:
            raise CodeTooLargeError(len(code), self.max_code_chars)

        line_count = len(code.split("\n"))
        char_count = len(code)

        if language not in SCRIPT_NAMES:
            result = ExecutionResult(
                language=language,
                status=ExecutionStatus.UNSUPPORTED,
                line_count=line_count,
                char_count=char_count,
                message=f"{language.value} code is not executed on this server.",
            )
            sandbox_executions_total.labels(language=language.value, status=result.status.value).inc()
            return result

        if not self.runtime_available(language):
            logger.warning("Sandbox runtime not installed", language=language.value)
            result = ExecutionResult(
                language=language,
                status=ExecutionStatus.UNSUPPORTED,
                line_count=line_count,
                char_count=char_count,
                message=f"No {language.value} runtime is installed on this server.",
            )
            sandbox_executions_total.labels(language=language.value, status=result.status.value).inc()
            return result

        with tempfile.TemporaryDirectory(prefix="sandbox-") as workdir:
            script = Path(workdir) / SCRIPT_NAMES[language]
            script.write_text(code, encoding="utf-8")
            result = await self._run(language, script, workdir)

        result = result.model_copy(update={"line_count": line_count, "char_count": char_count})
        sandbox_executions_total.labels(language=language.value, status=result.status.value).inc()
        sandbox_duration_seconds.labels(language=language.value).observe(result.duration_ms / 1000.0)
        logger.info(
            "Sandbox execution finished",
            language=language.value,
            status=result.status.value,
            exit_code=result.exit_code,
            duration_ms=result.duration_ms,
            truncated=result.truncated,
        )
        return result

    async def _run(self, language: Language, script: Path, workdir: str) -> ExecutionResult:
        preexec_fn = None
        if os.name == "posix":
            memory_bytes = (
                self.memory_limit_mb * 1024 * 1024 if language == Language.PYTHON else None
            )
            preexec_fn = functools.partial(_limit_resources, self.cpu_limit_seconds, memory_bytes)

        start = time.perf_counter()
        process = await asyncio.create_subprocess_exec(
            *self._command(language, script),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=workdir,
            env=self._environment(workdir),
            preexec_fn=preexec_fn,
            start_new_session=True,
        )

        # Readers drain both pipes to EOF for the whole run, including after a kill
        readers = asyncio.gather(
            _read_bounded(process.stdout, self.max_output_chars),
            _read_bounded(process.stderr, self.max_output_chars),
        )

        timed_out = False
        try:
            await asyncio.wait_for(process.wait(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            timed_out = True
            self._kill(process)
        finally:
            if process.returncode is None and not timed_out:
                # Cancelled from outside (client went away)
                self._kill(process)

        try:
            (stdout, stdout_truncated), (stderr, stderr_truncated) = await asyncio.wait_for(
                readers, timeout=DRAIN_GRACE_SECONDS
            )
        except asyncio.TimeoutError:
            logger.warning("Sandbox output pipes still open after exit", language=language.value)
            stdout, stdout_truncated, stderr, stderr_truncated = "", True, "", True

        duration_ms = int((time.perf_counter() - start) * 1000)

        if timed_out:
            logger.warning(
                "Sandbox execution timed out",
                language=language.value,
                timeout_seconds=self.timeout_seconds,
            )
            return ExecutionResult(
                language=language,
                status=ExecutionStatus.TIMEOUT,
                stdout=stdout,
                stderr=stderr,
                duration_ms=duration_ms,
                truncated=stdout_truncated or stderr_truncated,
                message=f"Execution timed out after {self.timeout_seconds}s.",
            )

        status = ExecutionStatus.OK if process.returncode == 0 else ExecutionStatus.ERROR
        message = None
        if status == ExecutionStatus.OK and not stdout:
            message = "Code executed successfully (no output)"

        return ExecutionResult(
            language=language,
            status=status,
            stdout=stdout,
            stderr=stderr,
            exit_code=process.returncode,
            duration_ms=duration_ms,
            truncated=stdout_truncated or stderr_truncated,
            message=message,
        )

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        try:
            if os.name == "posix":
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass
