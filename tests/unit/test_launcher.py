"""Unit tests for the platform preview launcher."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mdpreview.errors import PreviewLaunchError, UnsupportedPlatformError
from mdpreview.utils.launcher import (
    LAUNCHERS,
    Launcher,
    LauncherCommand,
    resolve_launcher,
)


class TestResolveLauncher:
    """Tests for the opener strategy table."""

    def test_linux(self) -> None:
        """Test Linux uses xdg-open."""
        assert resolve_launcher("linux") == LauncherCommand("xdg-open")

    def test_darwin(self) -> None:
        """Test macOS uses open."""
        assert resolve_launcher("darwin") == LauncherCommand("open")

    def test_windows(self) -> None:
        """Test Windows goes through cmd.exe /C start."""
        command = resolve_launcher("win32")

        assert command.executable == "cmd.exe"
        assert command.args == ("/C", "start")

    def test_unsupported_platform(self) -> None:
        """Test unknown platforms raise UnsupportedPlatformError."""
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            resolve_launcher("plan9")

        assert exc_info.value.platform == "plan9"
        assert "OS not supported" in str(exc_info.value)

    def test_custom_table(self) -> None:
        """Test that the strategy table can be replaced."""
        table = {"plan9": LauncherCommand("page")}

        assert resolve_launcher("plan9", table).executable == "page"

    def test_table_covers_known_platforms(self) -> None:
        """Test the built-in table entries."""
        assert set(LAUNCHERS) == {"linux", "darwin", "win32"}


class TestLauncherCommand:
    """Tests for argument building."""

    def test_build_without_args(self) -> None:
        """Test argv for an opener without extra arguments."""
        argv = LauncherCommand("open").build("/usr/bin/open", Path("/tmp/a.html"))

        assert argv == ["/usr/bin/open", str(Path("/tmp/a.html"))]

    def test_build_with_args(self) -> None:
        """Test argv for cmd.exe /C start."""
        argv = LAUNCHERS["win32"].build("C:\\Windows\\cmd.exe", Path("a.html"))

        assert argv == ["C:\\Windows\\cmd.exe", "/C", "start", "a.html"]


class TestLauncher:
    """Tests for Launcher.open."""

    @pytest.fixture
    def target(self, tmp_path: Path) -> Path:
        """Create a file to open."""
        path = tmp_path / "mdp123.html"
        path.write_text("<html></html>")
        return path

    def test_open_success(self, target: Path) -> None:
        """Test a successful launch waits the grace period."""
        launcher = Launcher(platform="linux", grace_period=2.0)

        with (
            patch("mdpreview.utils.launcher.shutil.which", return_value="/usr/bin/xdg-open") as mock_which,
            patch("mdpreview.utils.launcher.subprocess.run") as mock_run,
            patch("mdpreview.utils.launcher.time.sleep") as mock_sleep,
        ):
            mock_run.return_value = MagicMock(returncode=0)

            launcher.open(target)

        mock_which.assert_called_once_with("xdg-open")
        mock_run.assert_called_once_with(["/usr/bin/xdg-open", str(target)], check=False)
        mock_sleep.assert_called_once_with(2.0)

    def test_open_windows(self, target: Path) -> None:
        """Test the Windows opener arguments."""
        launcher = Launcher(platform="win32", grace_period=0)

        with (
            patch("mdpreview.utils.launcher.shutil.which", return_value="C:\\cmd.exe"),
            patch("mdpreview.utils.launcher.subprocess.run") as mock_run,
            patch("mdpreview.utils.launcher.time.sleep"),
        ):
            mock_run.return_value = MagicMock(returncode=0)

            launcher.open(target)

        mock_run.assert_called_once_with(
            ["C:\\cmd.exe", "/C", "start", str(target)],
            check=False,
        )

    def test_executable_not_found(self, target: Path) -> None:
        """Test a missing opener raises PreviewLaunchError without launching."""
        launcher = Launcher(platform="darwin")

        with (
            patch("mdpreview.utils.launcher.shutil.which", return_value=None),
            patch("mdpreview.utils.launcher.subprocess.run") as mock_run,
            patch("mdpreview.utils.launcher.time.sleep") as mock_sleep,
        ):
            with pytest.raises(PreviewLaunchError) as exc_info:
                launcher.open(target)

        assert exc_info.value.command == "open"
        assert "not found" in str(exc_info.value)
        mock_run.assert_not_called()
        mock_sleep.assert_not_called()

    def test_opener_failure(self, target: Path) -> None:
        """Test a failing opener raises after the grace period."""
        launcher = Launcher(platform="linux", grace_period=1.5)

        with (
            patch("mdpreview.utils.launcher.shutil.which", return_value="/usr/bin/xdg-open"),
            patch("mdpreview.utils.launcher.subprocess.run") as mock_run,
            patch("mdpreview.utils.launcher.time.sleep") as mock_sleep,
        ):
            mock_run.return_value = MagicMock(returncode=4)

            with pytest.raises(PreviewLaunchError) as exc_info:
                launcher.open(target)

        assert exc_info.value.exit_code == 4
        assert "(exit code: 4)" in str(exc_info.value)
        mock_sleep.assert_called_once_with(1.5)

    def test_opener_oserror(self, target: Path) -> None:
        """Test that an exec failure becomes PreviewLaunchError."""
        launcher = Launcher(platform="linux")

        with (
            patch("mdpreview.utils.launcher.shutil.which", return_value="/usr/bin/xdg-open"),
            patch("mdpreview.utils.launcher.subprocess.run", side_effect=PermissionError("denied")),
            patch("mdpreview.utils.launcher.time.sleep"),
        ):
            with pytest.raises(PreviewLaunchError, match="denied"):
                launcher.open(target)

    def test_unsupported_platform(self, target: Path) -> None:
        """Test open on an unknown platform."""
        launcher = Launcher(platform="sunos5")

        with patch("mdpreview.utils.launcher.shutil.which") as mock_which:
            with pytest.raises(UnsupportedPlatformError):
                launcher.open(target)

        mock_which.assert_not_called()

    def test_defaults_to_current_platform(self) -> None:
        """Test that the platform defaults to sys.platform."""
        with patch("mdpreview.utils.launcher.sys.platform", "darwin"):
            launcher = Launcher()

        assert launcher.platform == "darwin"
        assert launcher.grace_period == 2.0
