"""Runs commands picked from the history menu."""

from __future__ import annotations

import logging
import os
import subprocess
import sys

logger = logging.getLogger(__name__)


def run_command(command: str) -> int:
    """Run ``command`` through the user's shell, attached to this terminal.

    Returns the exit code; a shell that cannot be started reports 127.
    """
    shell = os.environ.get("SHELL") or "/bin/sh"
    logger.info("Executing: %s", command)
    try:
        # sys.stdin is the reopened terminal when items were piped in
        result = subprocess.run([shell, "-c", command], stdin=sys.stdin, check=False)
    except OSError as e:
        logger.error("Cannot start %s: %s", shell, e)
        return 127
    logger.debug("Command exited with %d", result.returncode)
    return result.returncode
