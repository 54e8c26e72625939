from __future__ import annotations

import logging
import subprocess

from .errors import LaunchError, RuntimeExitError
from .plan import Invocation

log = logging.getLogger(__name__)


def execute(invocation: Invocation) -> None:
    """
    Run the container runtime once and block until it exits.

    There is no timeout and no retry. Interrupting this process does not stop
    a container that has already been started.
    """
    cmd = invocation.argv()
    print(" ".join(cmd), flush=True)

    try:
        subprocess.run(cmd, check=True)
    except OSError as e:
        raise LaunchError(f"Failed to start {cmd[0]}: {e}") from e
    except subprocess.CalledProcessError as e:
        log.debug("%s exited with %s", cmd[0], e.returncode)
        raise RuntimeExitError(cmd, e.returncode) from e
