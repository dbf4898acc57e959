"""
Batch execution of external commands for user-defined segments.

A segment configured with ``command = "..."`` shows that command's output.
All such commands for one prompt are started together, one worker each, and
their results are put back in request order once every worker has finished.
Unlike the git segment, this boundary does not degrade gracefully: if any
command fails the whole batch fails with CommandError.
"""

import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed

from .errors import CommandError


def run_command(command: str, cwd: str | None = None) -> str:
    """Run one shell command and return its stdout with surrounding whitespace removed."""
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd or None,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise CommandError(command, str(e)) from e
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise CommandError(command, detail)
    return result.stdout.strip()


def run_commands(commands: list[str], cwd: str | None = None, runner=run_command) -> list[str]:
    """Run ``commands`` concurrently and return their outputs in the same order."""
    if not commands:
        return []

    results: dict[int, str] = {}
    with ThreadPoolExecutor(max_workers=len(commands)) as pool:
        futures = {pool.submit(runner, command, cwd): i for i, command in enumerate(commands)}
        for future in as_completed(futures):
            # A CommandError from any worker fails the whole batch.
            results[futures[future]] = future.result()

    return [results[i] for i in range(len(commands))]
