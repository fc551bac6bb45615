"""Claude CLI fallback provider."""

import asyncio
import json
import logging
import shutil
import weakref
from typing import Any

from rosetta_llm.config.prompts import build_user_prompt, system_prompt_for
from rosetta_llm.config.settings import Settings
from rosetta_llm.errors import (
    ProviderInvalidResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from rosetta_llm.infrastructure.llm.base import LlmProvider, LlmResult, ProviderRequest
from rosetta_llm.infrastructure.llm.parsing import parse_model_response

logger = logging.getLogger(__name__)

# Flags for a minimal, stateless single-turn invocation with no tools
# and no filesystem settings
_BASE_FLAGS: tuple[str, ...] = (
    "--print",
    "--output-format",
    "json",
    "--max-turns",
    "1",
    "--strict-mcp-config",
    "--disable-slash-commands",
    "--no-session-persistence",
    "--no-chrome",
    "--tools",
    "",
    "--setting-sources",
    "",
)

# One semaphore per event loop; asyncio primitives cannot cross loops.
_loop_semaphores: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Semaphore]" = (
    weakref.WeakKeyDictionary()
)


def _get_semaphore(limit: int) -> asyncio.Semaphore:
    loop = asyncio.get_running_loop()
    semaphore = _loop_semaphores.get(loop)
    if semaphore is None:
        semaphore = asyncio.Semaphore(limit)
        _loop_semaphores[loop] = semaphore
    return semaphore


class ClaudeCliProvider(LlmProvider):
    """
    Runs the `claude` CLI in print mode for one conversion.

    Process launches are limited to `provider_max_concurrent` at a time per
    event loop.
    """

    name = "claude_cli"

    def __init__(
        self,
        model: str,
        cli_path: str = "claude",
        timeout: float = 60.0,
        version_timeout: float = 5.0,
        max_concurrent: int = 1,
    ):
        super().__init__(model)
        self.cli_path = cli_path
        self.timeout = timeout
        self.version_timeout = version_timeout
        self.max_concurrent = max_concurrent

    @classmethod
    def from_settings(cls, settings: Settings, model: str) -> "ClaudeCliProvider":
        return cls(
            model=model,
            cli_path=settings.claude_cli_path,
            timeout=settings.provider_timeout,
            version_timeout=settings.claude_cli_version_timeout,
            max_concurrent=settings.provider_max_concurrent,
        )

    async def is_available(self) -> bool:
        """True when the CLI is on PATH and answers `--version`."""
        executable = shutil.which(self.cli_path)
        if executable is None:
            logger.debug("Claude CLI not found on PATH (%s)", self.cli_path)
            return False
        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                "--version",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug("Claude CLI availability check failed: %s", e)
            return False

        try:
            return_code = await asyncio.wait_for(process.wait(), timeout=self.version_timeout)
        except asyncio.TimeoutError:
            logger.debug("Claude CLI --version did not exit within %ss", self.version_timeout)
            process.kill()
            await process.wait()
            return False
        except asyncio.CancelledError:
            process.kill()
            raise
        return return_code == 0

    async def convert(self, request: ProviderRequest) -> LlmResult:
        executable = shutil.which(self.cli_path)
        if executable is None:
            raise ProviderUnavailableError(
                f"Claude CLI not found: {self.cli_path}", provider=self.name, model=self.model
            )

        system_prompt = system_prompt_for(request.prompt_style)
        user_prompt = build_user_prompt(
            request.prose, request.tier, request.unmapped, request.partial_output
        )
        args = [
            executable,
            *_BASE_FLAGS,
            "--model",
            self.model,
            "--system-prompt",
            system_prompt,
        ]

        async with _get_semaphore(self.max_concurrent):
            stdout, stderr, return_code = await self._run(args, user_prompt)

        if return_code != 0:
            raise ProviderUnavailableError(
                f"Claude CLI exited with status {return_code}",
                provider=self.name,
                model=self.model,
                context={"stderr": stderr[:500]},
            )
        return self._parse_output(stdout)

    async def _run(self, args: list[str], user_prompt: str) -> tuple[str, str, int]:
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProviderUnavailableError(
                f"Could not start Claude CLI: {e}", provider=self.name, model=self.model
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(user_prompt.encode("utf-8")), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ProviderTimeoutError(
                f"Claude CLI did not answer within {self.timeout}s",
                timeout=self.timeout,
                provider=self.name,
                model=self.model,
            ) from e
        except asyncio.CancelledError:
            process.kill()
            raise

        try:
            return stdout.decode("utf-8"), stderr.decode("utf-8", errors="replace"), process.returncode
        except UnicodeDecodeError as e:
            raise ProviderInvalidResponseError(
                "Claude CLI output is not valid UTF-8", provider=self.name, model=self.model
            ) from e

    def _parse_output(self, stdout: str) -> LlmResult:
        """Unwrap the CLI's JSON envelope, then parse the model text."""
        envelope: dict[str, Any] | None
        try:
            envelope = json.loads(stdout)
        except json.JSONDecodeError:
            envelope = None

        if not isinstance(envelope, dict):
            return parse_model_response(stdout, self.name, self.model)

        if envelope.get("is_error"):
            raise ProviderUnavailableError(
                f"Claude CLI reported an error: {str(envelope.get('result', ''))[:200]}",
                provider=self.name,
                model=self.model,
            )
        result_text = envelope.get("result")
        if not isinstance(result_text, str):
            raise ProviderInvalidResponseError(
                "Claude CLI envelope has no text result",
                raw_response=stdout,
                provider=self.name,
                model=self.model,
            )
        return parse_model_response(
            result_text, self.name, self.model, tokens_used=_tokens_from_envelope(envelope)
        )


def _tokens_from_envelope(envelope: dict[str, Any]) -> int | None:
    usage = envelope.get("usage")
    if isinstance(usage, dict):
        counts = [usage.get("input_tokens"), usage.get("output_tokens")]
        if all(isinstance(c, int) for c in counts):
            return sum(counts)
    cost = envelope.get("total_cost_usd")
    if isinstance(cost, (int, float)):
        # Rough estimate when the CLI reports cost only
        return int(cost * 100000)
    return None
