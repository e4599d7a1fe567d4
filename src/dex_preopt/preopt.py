#!/usr/bin/env python3

from .lib.bootclasspath import BOOTCLASSPATH, expand_boot_classpath, format_boot_classpath
from .lib.flags import optimize_flag_string
from .lib.invoke import PreoptResult, dexopt_environment, preopt_bootstrap, preopt_single
from .lib.options import USAGE, Configuration, parse_arguments
from .lib.paths import ResolutionError, ResolvedPaths, resolve_paths
from .lib.util import AnsiColor, print_error
import sys
from rich.console import Console
from rich.table import Table
from rich import box


def print_configuration(console: Console, config: Configuration, paths: ResolvedPaths, flags: str, boot_classpath: list[str]):
    table = Table(box=box.SIMPLE, show_edge=False, pad_edge=False, show_header=False)
    table.add_column("Setting", style="bright_yellow")
    table.add_column("Value")

    table.add_row("Build dir", str(paths.build_dir))
    table.add_row("Product dir", str(paths.product_dir))
    table.add_row("Boot dir", str(paths.boot_dir))
    table.add_row("Dexopt", str(paths.dexopt))
    table.add_row("Mode", "bootstrap" if config.bootstrap else "single file")
    table.add_row("Flags", flags)
    table.add_row(BOOTCLASSPATH, format_boot_classpath(boot_classpath))

    console.print(table)


def print_results(console: Console, results: list[PreoptResult], total: int):
    table = Table(box=box.SIMPLE, show_edge=False, pad_edge=False, header_style=None)
    table.add_column("Archive")
    table.add_column("Output")
    table.add_column("Status", justify="right")

    for result in results:
        status = "ok" if result.status == 0 else f"failed ({result.status})"
        table.add_row(result.input_path, result.output_path, status)

    console.print(table)

    skipped = total - len(results)
    if skipped:
        print(f"{AnsiColor.YELLOW}{skipped} archive(s) not processed.{AnsiColor.RESET}")


def main(argv: list[str] | None = None) -> int:
    # ================================================================
    # Command line

    config, errors = parse_arguments(sys.argv[1:] if argv is None else argv)

    if config.show_help:
        print(USAGE, end="")
        return 0

    if errors:
        for error in errors:
            print_error(error)
        print(file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        return 1

    # ================================================================
    # Paths: everything must be valid before dexopt runs for the first time.

    try:
        paths = resolve_paths(config)
    except ResolutionError as e:
        print_error(e)
        return 1

    flags = optimize_flag_string(config.verify, config.optimize, config.register_maps, config.uniprocessor)
    boot_classpath = expand_boot_classpath(config.boot_jars, paths.boot_dir)
    env = dexopt_environment(boot_classpath)

    console = Console()
    print_configuration(console, config, paths, flags, boot_classpath)

    # ================================================================
    # Preoptimization

    if config.bootstrap:
        print(f"\n{AnsiColor.BLUE}» Preoptimizing {len(boot_classpath)} boot classpath archive(s){AnsiColor.RESET}\n")
        status, results = preopt_bootstrap(boot_classpath, paths, flags, env)
        print()
        print_results(console, results, len(boot_classpath))
    else:
        print(f"\n{AnsiColor.BLUE}» Preoptimizing {config.input_file}{AnsiColor.RESET}\n")
        status = preopt_single(config.input_file, config.output_file, paths, flags, env)

    if status == 0:
        print(f"{AnsiColor.GREEN}Preoptimization complete.{AnsiColor.RESET}")

    return status


if __name__ == "__main__":
    raise SystemExit(main())
