from pathlib import Path
import subprocess
import os

FAKE_DEXOPT_LOG_VAR = "FAKE_DEXOPT_LOG"


def make_fake_dexopt(path: Path, exit_code: int = 0, fail_on: str | None = None) -> Path:
    """
    Write an executable shell script standing in for dexopt.
    It appends "$BOOTCLASSPATH|<arguments>" to the file named by $FAKE_DEXOPT_LOG (if set),
    then exits with `exit_code` when the input archive name ends with `fail_on`
    (or always, when `fail_on` is None), 0 otherwise.
    """
    if fail_on is None:
        exit_line = f"exit {exit_code}"
    else:
        exit_line = f'case "$2" in *{fail_on}) exit {exit_code};; esac\nexit 0'

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "#!/bin/sh\n"
        f'if [ -n "${FAKE_DEXOPT_LOG_VAR}" ]; then echo "$BOOTCLASSPATH|$*" >> "${FAKE_DEXOPT_LOG_VAR}"; fi\n'
        f"{exit_line}\n",
        encoding="utf-8",
    )
    path.chmod(0o755)
    return path


def make_build_tree(
    root: Path,
    products: tuple[str, ...] = ("foo",),
    host_archs: tuple[str, ...] = ("linux-x86",),
    boot_dir: str = "system/framework",
    boot_jars: tuple[str, ...] = ("core",),
) -> Path:
    """
    Create a fake build output directory:
        <root>/out/target/product/<product>/<boot_dir>/<jar>.jar
        <root>/out/host/<arch>/bin/dexopt
    Return the build directory.
    """
    build_dir = root / "out"

    for product in products:
        framework_dir = build_dir / "target" / "product" / product / boot_dir
        framework_dir.mkdir(parents=True)
        for jar in boot_jars:
            (framework_dir / f"{jar}.jar").write_bytes(b"PK\x03\x04")

    for arch in host_archs:
        make_fake_dexopt(build_dir / "host" / arch / "bin" / "dexopt")

    build_dir.mkdir(parents=True, exist_ok=True)
    return build_dir


class FakeRun:
    """
    Replacement for subprocess.run recording dexopt invocations.
    `statuses` maps an input archive file name to the exit code dexopt should report for it.
    """

    def __init__(self, statuses: dict[str, int] | None = None):
        self.statuses = dict(statuses or {})
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append((args, kwargs))
        status = self.statuses.get(os.path.basename(args[2]), 0)
        if kwargs.get("check") and status != 0:
            raise subprocess.CalledProcessError(status, args)
        return subprocess.CompletedProcess(args, status)

    @property
    def arguments(self) -> list[list[str]]:
        return [args for args, _ in self.calls]
