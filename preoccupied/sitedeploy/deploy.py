"""
Running a site's deploy script.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Optional, TextIO

from .errors import (
    BuildDirMissingError, DeployFailedError, DeployScriptMissingError,
    DeployShellError, DeployTimeoutError, PathLike,
)


logger = logging.getLogger(__name__)


PLACEHOLDER_NOTICE = 'Edit _scripts/deploy.sh to set up deploy script'

# seconds to wait for output to drain after killing a timed out script
KILL_GRACE_PERIOD = 2.0


def placeholder_notice(stream: Optional[TextIO] = None) -> int:
    """
    Write the reminder that the deploy script has not been set up yet,
    as a single line. Always succeeds, returning a zero exit status.
    """

    if stream is None:
        stream = sys.stdout

    stream.write(f'{PLACEHOLDER_NOTICE}\n')
    stream.flush()
    return 0


async def run_deploy(
        build_dir: PathLike,
        script: PathLike,
        shell: str = 'bash',
        timeout: Optional[float] = None) -> str:
    """
    Run the deploy script from inside the built site directory and
    return everything it wrote to stdout and stderr.

    Raises DeployFailedError if the script exits non-zero, and
    DeployTimeoutError if it runs for longer than timeout seconds. The
    script output is carried on both.
    """

    build_path = Path(build_dir)
    script_path = Path(script).absolute()

    if not build_path.is_dir():
        raise BuildDirMissingError(build_dir)
    if not script_path.is_file():
        raise DeployScriptMissingError(script)

    logger.info(f'Running {script_path} in {build_path}')
    try:
        process = await asyncio.create_subprocess_exec(
            shell, str(script_path),
            cwd=str(build_path),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            start_new_session=True
        )
    except OSError as e:
        raise DeployShellError(shell, e)

    chunks = []

    async def collect():
        # chunks survive cancellation, so a timeout keeps the partial output
        while True:
            chunk = await process.stdout.read(4096)
            if not chunk:
                break
            chunks.append(chunk)
        await process.wait()

    try:
        await asyncio.wait_for(collect(), timeout)
    except asyncio.TimeoutError:
        logger.warning(f'Deploy script {script_path} timed out after {timeout} seconds')
        _kill_session(process.pid)
        try:
            await asyncio.wait_for(collect(), KILL_GRACE_PERIOD)
        except asyncio.TimeoutError:
            # something escaped the session and still holds the pipe open
            await process.wait()
        raise DeployTimeoutError(timeout, script, _decode(b''.join(chunks)))

    output = _decode(b''.join(chunks))
    if process.returncode != 0:
        logger.warning(f'Deploy script {script_path} exited with status {process.returncode}')
        raise DeployFailedError(process.returncode, script, output)

    logger.info(f'Deploy script {script_path} finished')
    return output


def _kill_session(pid: int) -> None:
    """
    Kill the script along with everything it started
    """

    try:
        os.killpg(pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ''
    return data.decode('utf-8', errors='replace').rstrip()


# The end.
