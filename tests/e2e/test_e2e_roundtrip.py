from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
import uuid

from dvbackup.archive import top_level_volume_names


def run(
    cmd: list[str], *, check: bool = True
) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, check=check, text=True, capture_output=True)
    except subprocess.CalledProcessError as e:
        print(">>> command failed:", " ".join(cmd))
        print(">>> exit code:", e.returncode)
        if e.stdout:
            print(">>> STDOUT:\n" + e.stdout)
        if e.stderr:
            print(">>> STDERR:\n" + e.stderr)
        raise


def docker_available() -> bool:
    if shutil.which("docker") is None:
        return False
    return run(["docker", "version"], check=False).returncode == 0


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}"


@unittest.skipUnless(docker_available(), "docker daemon not available")
class TestE2ERoundTrip(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.volume = unique("dvbackup-e2e")
        cls._td = tempfile.TemporaryDirectory()
        cls.archive = f"{cls._td.name}/out.tar.gz"

        run(["docker", "volume", "create", cls.volume])
        run([
            "docker", "run", "--rm",
            "-v", f"{cls.volume}:/data",
            "alpine",
            "sh", "-lc", "mkdir -p /data/sub && echo 'hello' > /data/sub/hello.txt",
        ])

        run(["docker-volume-backup", "backup", cls.volume, cls.archive])

    @classmethod
    def tearDownClass(cls) -> None:
        run(["docker", "volume", "rm", "-f", cls.volume], check=False)
        cls._td.cleanup()

    def test_archive_contains_volume(self) -> None:
        self.assertEqual(top_level_volume_names(self.archive), [self.volume])

    def test_restore_into_recreated_volume(self) -> None:
        run(["docker", "volume", "rm", "-f", self.volume])

        run(["docker-volume-backup", "restore", self.archive])

        p = run([
            "docker", "run", "--rm",
            "-v", f"{self.volume}:/data",
            "alpine",
            "sh", "-lc", "cat /data/sub/hello.txt",
        ])
        self.assertEqual((p.stdout or "").strip(), "hello")


if __name__ == "__main__":
    unittest.main()
