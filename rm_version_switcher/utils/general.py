import subprocess

from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.command_result import CommandResult
from rm_version_switcher.models.runcommand_error import RunCommandError

log = get_logger(__name__)


def run_command(cmd: list) -> CommandResult:
    """
    Run a firmware or system utility and wait for it to exit.

    There is no timeout: rootdev, fw_printenv, fw_setenv, swupdate, mmc and
    mount are expected to return promptly.

    Args:
        cmd: Program and its arguments, never passed through a shell

    Returns:
        CommandResult: Decoded stdout, stderr and the exit status

    Raises:
        RunCommandError: If the command exits non-zero
        FileNotFoundError: If the program is not installed
    """
    log.debug(f"Executing: {' '.join(cmd)}")
    with subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    ) as proc:
        stdout, stderr = proc.communicate()

    stdout = stdout.decode(errors="replace")
    stderr = stderr.decode(errors="replace")
    if proc.returncode != 0:
        raise RunCommandError(stderr, proc.returncode)
    return CommandResult(stdout, stderr, proc.returncode)
