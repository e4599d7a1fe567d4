from .paths import SplitPath

BOOTCLASSPATH = "BOOTCLASSPATH"
ARCHIVE_SUFFIX = ".jar"
ODEX_SUFFIX = ".odex"


def expand_boot_classpath(boot_jars: tuple[str, ...] | list[str], boot_dir: SplitPath | str) -> list[str]:
    """
    Turn archive base names into archive paths under the boot directory.
    Order matters (it is the runtime class lookup order) and is preserved.
    """
    return [f"{boot_dir}/{name}{ARCHIVE_SUFFIX}" for name in boot_jars]


def format_boot_classpath(entries: list[str]) -> str:
    return ":".join(entries)


def odex_path_for(archive_path: str) -> str:
    """
    Path of the optimized output for an archive: same directory, ".jar" replaced with ".odex".
    Plain string manipulation, since pathlib would collapse the "/./" boundary marker.
    """
    if archive_path.endswith(ARCHIVE_SUFFIX):
        archive_path = archive_path[: -len(ARCHIVE_SUFFIX)]
    return archive_path + ODEX_SUFFIX
