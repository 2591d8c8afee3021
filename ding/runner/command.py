"""Run the monitored command as a child process."""

from __future__ import annotations

import asyncio
import signal
from dataclasses import dataclass
from typing import Sequence, Union

from loguru import logger

from ding.errors import ConfigurationError, SpawnError

# Output lines appended to the crash reason on a non-zero exit
OUTPUT_TAIL_LINES = 20


@dataclass(frozen=True)
class Completed:
    """The process ran to completion."""

    exit_code: int
    output: str = ""


@dataclass(frozen=True)
class Failed:
    """The process failed to spawn, or exited non-zero.

    ``exit_code`` is None when the OS never gave us a process to wait on,
    and ``128 + signum`` when a signal killed the child.
    """

    reason: str
    exit_code: int | None = None
    error: SpawnError | None = None


ExecutionOutcome = Union[Completed, Failed]


def validate_command(command: Sequence[str]) -> list[str]:
    """Return *command* as a list, rejecting an empty specification."""
    tokens = list(command)
    if not tokens:
        raise ConfigurationError("at least one command token required")
    for token in tokens:
        if "\x00" in token:
            raise ConfigurationError(f"command token contains a NUL byte: {token!r}")
    return tokens


def _tail(output: str, lines: int = OUTPUT_TAIL_LINES) -> str:
    return "\n".join(output.rstrip().splitlines()[-lines:])


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


class CommandRunner:
    """Spawn ``argv[0]`` with the remaining tokens and wait for it.

    stdout and stderr are captured together. Spawn failures become a
    :class:`Failed` outcome rather than an exception.
    """

    def __init__(self, fail_on_nonzero: bool = True):
        self.fail_on_nonzero = fail_on_nonzero

    async def run(self, command: Sequence[str]) -> ExecutionOutcome:
        argv = validate_command(command)
        command_text = " ".join(argv)
        logger.debug(f"Spawning: {command_text}")

        try:
            process = await asyncio.create_subprocess_exec(
                argv[0],
                *argv[1:],
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
            raw, _ = await process.communicate()
        except OSError as e:
            err = SpawnError(argv[0], e)
            logger.error(str(err))
            return Failed(reason=str(err), error=err)

        output = raw.decode(errors="replace") if raw else ""
        code = process.returncode if process.returncode is not None else 0
        if output:
            logger.debug(f"Child output ({len(output)} chars):\n{output.rstrip()}")

        if code < 0:
            # Killed by a signal; report it the way a shell would
            reason = f"Process terminated by signal {_signal_name(-code)}"
            code = 128 - code
        else:
            reason = f"Process exited with code {code}"

        if code != 0 and self.fail_on_nonzero:
            tail = _tail(output)
            if tail:
                reason = f"{reason}\n{tail}"
            logger.warning(f"'{command_text}' failed: {reason}")
            return Failed(reason=reason, exit_code=code)

        logger.info(f"'{command_text}' exited with code {code}")
        return Completed(exit_code=code, output=output)
