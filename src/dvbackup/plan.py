from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .paths import ResolvedPath

INPUT_ROOT = "/input"
OUTPUT_ROOT = "/output"

DEFAULT_IMAGE = "alpine"
DEFAULT_RUNTIME = "docker"


@dataclass(frozen=True)
class MountSpec:
    volume_name: str
    container_path: str
    access_mode: Optional[str] = None  # "ro" | "rw" | None for the runtime default

    def arg(self) -> str:
        spec = f"{self.volume_name}:{self.container_path}"
        if self.access_mode:
            spec = f"{spec}:{self.access_mode}"
        return f"--volume={spec}"


@dataclass(frozen=True)
class Invocation:
    runtime: str
    host_mount: MountSpec
    volume_mounts: tuple[MountSpec, ...]
    image: str
    command: tuple[str, ...]

    @property
    def mounts(self) -> tuple[MountSpec, ...]:
        return (*self.volume_mounts, self.host_mount)

    def args(self) -> list[str]:
        return [
            "run",
            "--rm",
            self.host_mount.arg(),
            *(m.arg() for m in self.volume_mounts),
            self.image,
            *self.command,
        ]

    def argv(self) -> list[str]:
        return [self.runtime, *self.args()]


def _volume_mounts(
    volume_names: Iterable[str], root: str, access_mode: str
) -> tuple[MountSpec, ...]:
    mounts = []
    for name in volume_names:
        if not name:
            raise ValueError("Volume names must not be empty.")
        mounts.append(MountSpec(name, f"{root}/{name}", access_mode))
    return tuple(mounts)


def plan_backup(
    volume_names: Iterable[str],
    target: ResolvedPath,
    *,
    image: str = DEFAULT_IMAGE,
    runtime: str = DEFAULT_RUNTIME,
) -> Invocation:
    """Mount each volume read-only under /input and archive /input into the target."""
    return Invocation(
        runtime=runtime,
        host_mount=MountSpec(target.parent_dir, OUTPUT_ROOT),
        volume_mounts=_volume_mounts(volume_names, INPUT_ROOT, "ro"),
        image=image,
        command=(
            "tar",
            "-czf",
            f"{OUTPUT_ROOT}/{target.filename}",
            "-C",
            INPUT_ROOT,
            ".",
        ),
    )


def plan_restore(
    volume_names: Iterable[str],
    source: ResolvedPath,
    *,
    image: str = DEFAULT_IMAGE,
    runtime: str = DEFAULT_RUNTIME,
) -> Invocation:
    """Mount each volume read-write under /output and unpack the source into it."""
    return Invocation(
        runtime=runtime,
        host_mount=MountSpec(source.parent_dir, INPUT_ROOT),
        volume_mounts=_volume_mounts(volume_names, OUTPUT_ROOT, "rw"),
        image=image,
        command=(
            "tar",
            "-xzf",
            f"{INPUT_ROOT}/{source.filename}",
            "-C",
            OUTPUT_ROOT,
        ),
    )
