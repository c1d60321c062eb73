"""Platform preview launcher.

Opens a file with the operating system's default viewer. The opener is
chosen from a strategy table keyed by ``sys.platform``:

- linux:  xdg-open <file>
- darwin: open <file>
- win32:  cmd.exe /C start <file>

The opener executable must be on PATH. After the opener returns, the
launcher sleeps for a grace period so the viewer can read the file before
the caller removes it. The sleep is unconditional; it does not wait on
the viewer process.
"""

import logging
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

from mdpreview.errors import PreviewLaunchError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = 2.0


@dataclass(frozen=True)
class LauncherCommand:
    """Opener executable plus the arguments placed before the file path.

    Attributes:
        executable: Command name resolved on PATH
        args: Arguments preceding the file path
    """

    executable: str
    args: tuple[str, ...] = field(default_factory=tuple)

    def build(self, resolved: str, target: Path) -> list[str]:
        """Build the argument vector for opening ``target``."""
        return [resolved, *self.args, str(target)]


LAUNCHERS: dict[str, LauncherCommand] = {
    "linux": LauncherCommand("xdg-open"),
    "darwin": LauncherCommand("open"),
    "win32": LauncherCommand("cmd.exe", ("/C", "start")),
}


def resolve_launcher(
    platform: str | None = None,
    launchers: dict[str, LauncherCommand] | None = None,
) -> LauncherCommand:
    """Select the opener for a platform.

    Args:
        platform: Platform identifier (default: sys.platform)
        launchers: Strategy table (default: LAUNCHERS)

    Returns:
        Opener command for the platform

    Raises:
        UnsupportedPlatformError: If the platform has no opener
    """
    platform = platform or sys.platform
    table = LAUNCHERS if launchers is None else launchers

    try:
        return table[platform]
    except KeyError:
        raise UnsupportedPlatformError(platform) from None


class Launcher:
    """Opens files with the platform's default viewer.

    Usage:
        launcher = Launcher(grace_period=2.0)
        launcher.open(Path("/tmp/mdp123.html"))
    """

    def __init__(
        self,
        platform: str | None = None,
        grace_period: float = DEFAULT_GRACE_PERIOD,
        launchers: dict[str, LauncherCommand] | None = None,
    ) -> None:
        """Initialize the launcher.

        Args:
            platform: Platform identifier (default: sys.platform)
            grace_period: Seconds to sleep after the opener returns
            launchers: Strategy table (default: LAUNCHERS)
        """
        self.platform = platform or sys.platform
        self.grace_period = grace_period
        self.launchers = LAUNCHERS if launchers is None else launchers

    def open(self, target: Path) -> None:
        """Open a file with the platform opener.

        The grace period is applied once the opener has run, even when
        the opener reports a failure.

        Args:
            target: File to open

        Raises:
            UnsupportedPlatformError: If the platform has no opener
            PreviewLaunchError: If the opener is not on PATH or fails
        """
        command = resolve_launcher(self.platform, self.launchers)

        resolved = shutil.which(command.executable)
        if resolved is None:
            raise PreviewLaunchError(command.executable, "executable not found in PATH")

        argv = command.build(resolved, target)
        logger.debug("Launching preview: %s", " ".join(argv))

        try:
            result = subprocess.run(argv, check=False)
        except OSError as e:
            raise PreviewLaunchError(command.executable, str(e)) from e

        # Give the viewer time to open the file before it is removed
        time.sleep(self.grace_period)

        if result.returncode != 0:
            raise PreviewLaunchError(
                command.executable,
                "opener reported a failure",
                exit_code=result.returncode,
            )

        logger.info("Opened %s with %s", target, command.executable)
