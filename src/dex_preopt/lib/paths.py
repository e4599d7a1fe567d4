from dataclasses import dataclass
import os
from pathlib import Path, PurePosixPath
from .options import Configuration
from .util import is_executable_file, is_writable_dir

# Inserted between the host-specific prefix of a path and its device-relative part.
# dexopt looks for it to record dependencies under their on-device names.
BOUNDARY_MARKER = "/./"

PRODUCT_DIR_PATTERN = "target/product/*"
DEXOPT_PATTERN = "host/*/bin/dexopt"


class ResolutionError(FileNotFoundError):
    """
    A required path is missing, ambiguous or unusable.
    """


@dataclass(frozen=True)
class SplitPath:
    """
    A path made of a build host prefix and a device-relative suffix.
    Its string form keeps both parts apart with the boundary marker, e.g.
    "/out/target/product/foo/./system/framework".
    """

    host_prefix: Path
    device_suffix: str

    def __str__(self) -> str:
        return f"{self.host_prefix}{BOUNDARY_MARKER}{self.device_suffix}"

    @property
    def joined(self) -> Path:
        """
        The same location as a regular path, without the marker.
        """
        return self.host_prefix / self.device_suffix


@dataclass(frozen=True)
class ResolvedPaths:
    build_dir: Path
    product_dir: Path
    boot_dir: SplitPath
    dexopt: Path


def normalize_device_path(path: str) -> str:
    """
    Normalize a device-relative path: collapse separators, drop any leading "/".
    Raise ResolutionError if it climbs out of its root with "..".
    """
    device_path = PurePosixPath(path)

    if ".." in device_path.parts:
        raise ResolutionError(f"The boot classpath directory ({path}) must stay inside the product directory.")

    return device_path.as_posix().lstrip("/") or "."


def anchor(base: Path, path: str) -> Path:
    """
    Make a path absolute relative to `base` and normalize it lexically (symlinks are kept).
    """
    return Path(os.path.normpath(base / path))


def resolve_unique_child(root: Path, pattern: str, what: str, hint: str | None = None) -> Path:
    """
    Find the single path matching a glob pattern under `root`.
    Hidden entries (any path component starting with ".") are ignored, like a shell glob would.
    Raise ResolutionError if there is no match or more than one.
    """
    matches = sorted(
        p for p in root.glob(pattern) if not any(part.startswith(".") for part in p.relative_to(root).parts)
    )
    hint_text = f" Use {hint} to specify it." if hint else ""

    if not matches:
        raise ResolutionError(f"Unable to find the {what}: nothing matches {root / pattern}.{hint_text}")

    if len(matches) > 1:
        candidates = ", ".join(str(p) for p in matches)
        raise ResolutionError(f"Ambiguous {what}: {len(matches)} candidates match {root / pattern} ({candidates}).{hint_text}")

    return matches[0]


def resolve_paths(config: Configuration) -> ResolvedPaths:
    """
    Locate and validate every path the preoptimization needs, in order:
    build directory, product directory, boot classpath directory, dexopt.
    Relative paths are interpreted from the (canonical) build directory.
    The first failure raises ResolutionError.
    """
    if not config.build_dir:
        raise ResolutionError("The build directory path is empty.")

    if not is_writable_dir(config.build_dir):
        raise ResolutionError(f"The build directory ({config.build_dir}) does not exist or is not writable.")

    build_dir = Path(config.build_dir).resolve()

    if config.product_dir is None:
        product_dir = resolve_unique_child(build_dir, PRODUCT_DIR_PATTERN, "product directory", hint="--product-dir")
    else:
        product_dir = anchor(build_dir, config.product_dir)

    if not is_writable_dir(product_dir):
        raise ResolutionError(f"The product directory ({product_dir}) does not exist or is not writable.")

    boot_dir = SplitPath(product_dir, normalize_device_path(config.boot_dir))

    if not is_writable_dir(str(boot_dir)):
        raise ResolutionError(f"The boot classpath directory ({boot_dir}) does not exist or is not writable.")

    if config.dexopt is None:
        dexopt = resolve_unique_child(build_dir, DEXOPT_PATTERN, "dexopt executable", hint="--dexopt")
    else:
        dexopt = anchor(build_dir, config.dexopt)

    if not is_executable_file(dexopt):
        raise ResolutionError(f"The dexopt binary ({dexopt}) does not exist or is not executable.")

    return ResolvedPaths(build_dir=build_dir, product_dir=product_dir, boot_dir=boot_dir, dexopt=dexopt)
