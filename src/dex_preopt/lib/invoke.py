from dataclasses import dataclass
import os
from pathlib import Path
import subprocess
from .bootclasspath import BOOTCLASSPATH, format_boot_classpath, odex_path_for
from .paths import ResolvedPaths, anchor
from .util import print_error, print_warning


@dataclass(frozen=True)
class PreoptResult:
    """
    Outcome of a single dexopt invocation.
    """

    input_path: str
    output_path: str
    status: int


def dexopt_environment(boot_classpath: list[str]) -> dict[str, str]:
    """
    Environment for dexopt: ours, plus the boot classpath it resolves dependencies against.
    """
    env = dict(os.environ)
    env[BOOTCLASSPATH] = format_boot_classpath(boot_classpath)
    return env


def exit_status(returncode: int) -> int:
    """
    Convert a subprocess return code into a process exit status.
    Children killed by signal N have a return code of -N, reported as 128+N like shells do.
    """
    return 128 - returncode if returncode < 0 else returncode


def run_dexopt(dexopt: Path, input_path: str, output_path: str, flags: str, env: dict[str, str], cwd: Path) -> int:
    """
    Run `dexopt --preopt` on one archive and wait for it.
    Return 0 on success, otherwise the exit status to propagate.
    """
    if os.path.exists(output_path):
        print_warning(f"Output file {output_path} already exists.")

    try:
        subprocess.run(
            [str(dexopt), "--preopt", input_path, output_path, flags],
            stdin=subprocess.DEVNULL,
            env=env,
            cwd=cwd,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print_error(f"dexopt failed with code {e.returncode} on {input_path}")
        return exit_status(e.returncode)
    except OSError as e:
        print_error(f"Unable to run dexopt ({dexopt}): {e}")
        return 1

    return 0


def rewrite_boot_input(input_path: Path, paths: ResolvedPaths) -> str:
    """
    Archives living in the boot classpath directory are handed to dexopt through the
    split "<product>/./<boot dir>" form, so it can name their dependencies the way the
    device sees them. Any other path is returned unchanged.
    """
    boot_dir = paths.boot_dir

    if input_path.is_relative_to(boot_dir.joined):
        return f"{boot_dir}/{input_path.relative_to(boot_dir.joined).as_posix()}"

    return str(input_path)


def preopt_single(
    input_file: str, output_file: str, paths: ResolvedPaths, flags: str, env: dict[str, str]
) -> int:
    """
    Preoptimize one archive into the given output file.
    """
    input_path = rewrite_boot_input(anchor(paths.build_dir, input_file), paths)
    output_path = str(anchor(paths.build_dir, output_file))

    print(f"{input_path} -> {output_path}")

    return run_dexopt(paths.dexopt, input_path, output_path, flags, env, paths.build_dir)


def preopt_bootstrap(
    boot_classpath: list[str], paths: ResolvedPaths, flags: str, env: dict[str, str]
) -> tuple[int, list[PreoptResult]]:
    """
    Preoptimize every boot classpath archive, in classpath order, each one next to its
    archive as ".odex". Stop at the first failure.
    Return the exit status (0 if all succeeded) and the results of the attempted entries.
    """
    results: list[PreoptResult] = []

    for entry in boot_classpath:
        output_path = odex_path_for(entry)
        print(f"{entry} -> {output_path}")

        status = run_dexopt(paths.dexopt, entry, output_path, flags, env, paths.build_dir)
        results.append(PreoptResult(input_path=entry, output_path=output_path, status=status))

        if status != 0:
            return status, results

    return 0, results
