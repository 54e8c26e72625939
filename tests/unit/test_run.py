from __future__ import annotations

import os
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from dvbackup.errors import LaunchError, RuntimeExitError
from dvbackup.paths import ResolvedPath
from dvbackup.plan import plan_backup
from dvbackup.run import execute


def _invocation(runtime: str):
    return plan_backup(["vol1"], ResolvedPath("/tmp", "out.tar.gz"), runtime=runtime)


class TestExecute(unittest.TestCase):
    @patch("dvbackup.run.subprocess.run")
    def test_runs_full_argv_once(self, mock_run) -> None:
        inv = _invocation("docker")

        execute(inv)

        mock_run.assert_called_once_with(inv.argv(), check=True)

    def test_missing_executable_raises_launch_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            runtime = os.path.join(td, "no-such-runtime")

            with self.assertRaises(LaunchError) as ctx:
                execute(_invocation(runtime))

        self.assertIn(runtime, str(ctx.exception))

    def test_non_executable_file_raises_launch_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            runtime = os.path.join(td, "runtime")
            with open(runtime, "w", encoding="utf-8") as f:
                f.write("not executable")
            os.chmod(runtime, 0o644)

            with self.assertRaises(LaunchError):
                execute(_invocation(runtime))

    @patch("dvbackup.run.subprocess.run")
    def test_non_zero_exit_raises_runtime_exit_error(self, mock_run) -> None:
        inv = _invocation("docker")
        mock_run.side_effect = subprocess.CalledProcessError(125, inv.argv())

        with self.assertRaises(RuntimeExitError) as ctx:
            execute(inv)

        self.assertEqual(ctx.exception.returncode, 125)
        self.assertEqual(ctx.exception.command, inv.argv())
        self.assertIn("Exit code: 125", str(ctx.exception))

    @unittest.skipUnless(os.path.exists("/bin/false"), "needs /bin/false")
    def test_real_process_exit_status_is_surfaced(self) -> None:
        with self.assertRaises(RuntimeExitError) as ctx:
            execute(_invocation("/bin/false"))

        self.assertNotEqual(ctx.exception.returncode, 0)

    @unittest.skipUnless(os.path.exists("/bin/true"), "needs /bin/true")
    def test_real_process_success(self) -> None:
        execute(_invocation("/bin/true"))


if __name__ == "__main__":
    unittest.main()
