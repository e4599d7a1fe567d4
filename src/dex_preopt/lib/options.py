from dataclasses import dataclass
from enum import StrEnum
import re

USAGE = """\
usage: dex-preopt [options] [--] input output
       dex-preopt --bootstrap [options]

Preoptimize a bytecode archive (or every archive of the boot classpath) by running
the host-side dexopt tool on it. The output file should not already exist.

options:
  --build-dir=PATH      Build output directory (default: current directory).
  --dexopt=PATH         Path to the dexopt executable, relative to the build dir
                        (default: discovered under host/*/bin/).
  --product-dir=PATH    Product directory, relative to the build dir
                        (default: the unique non-hidden entry of target/product/).
  --boot-dir=PATH       Boot classpath directory, relative to the product dir
                        (default: system/framework).
  --boot-jars=A:B:C     Colon-separated boot classpath archive names, without the
                        .jar extension, in classpath order (default: core).
  --bootstrap           Preoptimize every boot classpath archive instead of a
                        single input/output pair.
  --verify=LEVEL        Verification: none, remote or all (default: all).
  --optimize=LEVEL      Optimization: none, verified or all (default: verified).
  --no-register-maps    Do not generate register maps.
  --uniprocessor        Optimize for a uniprocessor device.
  --help                Show this message and exit.
  --                    End of options.
"""

OPTION_RE = re.compile(r"^--([^=]*)(?:=(.*))?$", re.DOTALL)

DEFAULT_BOOT_DIR = "system/framework"
DEFAULT_BOOT_JARS = ("core",)


class VerifyLevel(StrEnum):
    NONE = "none"
    REMOTE = "remote"
    ALL = "all"


class OptimizeLevel(StrEnum):
    NONE = "none"
    VERIFIED = "verified"
    ALL = "all"


@dataclass(frozen=True)
class ParseError:
    """
    A single problem found on the command line.
    """

    option: str
    message: str

    def __str__(self) -> str:
        return f"{self.option}: {self.message}" if self.option else self.message


@dataclass(frozen=True)
class Configuration:
    """
    The tool configuration, exactly as requested on the command line.
    Paths are not resolved nor validated here.
    """

    build_dir: str = "."
    dexopt: str | None = None
    product_dir: str | None = None
    boot_dir: str = DEFAULT_BOOT_DIR
    boot_jars: tuple[str, ...] = DEFAULT_BOOT_JARS
    bootstrap: bool = False
    verify: VerifyLevel = VerifyLevel.ALL
    optimize: OptimizeLevel = OptimizeLevel.VERIFIED
    register_maps: bool = True
    uniprocessor: bool = False
    input_file: str | None = None
    output_file: str | None = None
    show_help: bool = False


# Options taking a value, mapped to the configuration field they set.
VALUE_OPTIONS = {
    "build-dir": "build_dir",
    "dexopt": "dexopt",
    "product-dir": "product_dir",
    "boot-dir": "boot_dir",
    "boot-jars": "boot_jars",
    "verify": "verify",
    "optimize": "optimize",
}

# Options without value, mapped to the configuration field and the value they set.
FLAG_OPTIONS = {
    "bootstrap": ("bootstrap", True),
    "no-register-maps": ("register_maps", False),
    "uniprocessor": ("uniprocessor", True),
    "help": ("show_help", True),
}


def parse_boot_jars(value: str) -> tuple[str, ...]:
    """
    Split a colon-separated list of archive names, keeping the order.
    Raise ValueError on an empty list or an empty element.
    """
    names = tuple(value.split(":"))
    if any(not name for name in names):
        raise ValueError(f"empty archive name in '{value}'")
    return names


def convert_option_value(name: str, value: str):
    """
    Convert the raw value of a value option into its configuration type.
    Raise ValueError if the value is not acceptable.
    """
    if value == "":
        raise ValueError("value must not be empty")

    if name == "verify":
        try:
            return VerifyLevel(value)
        except ValueError:
            raise ValueError(f"invalid level '{value}' (expected one of: {', '.join(VerifyLevel)})") from None

    if name == "optimize":
        try:
            return OptimizeLevel(value)
        except ValueError:
            raise ValueError(f"invalid level '{value}' (expected one of: {', '.join(OptimizeLevel)})") from None

    if name == "boot-jars":
        return parse_boot_jars(value)

    return value


def parse_arguments(argv: list[str]) -> tuple[Configuration, list[ParseError]]:
    """
    Parse command line tokens (program name excluded) into a configuration.

    Parsing never stops at the first problem: every bad option is reported in the
    returned error list, which is empty when the command line is valid. The returned
    configuration holds defaults wherever an option could not be applied.
    """
    values: dict[str, object] = {}
    errors: list[ParseError] = []

    i = 0
    while i < len(argv):
        token = argv[i]

        if token == "--":
            i += 1
            break

        match = OPTION_RE.match(token)
        if not match:
            # First positional argument.
            break

        i += 1
        name, value = match.group(1), match.group(2)
        option = f"--{name}"

        if name in VALUE_OPTIONS:
            if value is None:
                errors.append(ParseError(option, "requires a value"))
                continue
            try:
                values[VALUE_OPTIONS[name]] = convert_option_value(name, value)
            except ValueError as e:
                errors.append(ParseError(option, str(e)))
        elif name in FLAG_OPTIONS:
            if value is not None:
                errors.append(ParseError(option, "does not take a value"))
                continue
            field_name, field_value = FLAG_OPTIONS[name]
            values[field_name] = field_value
        else:
            errors.append(ParseError(option, "unknown option"))

    positionals = argv[i:]
    bootstrap = bool(values.get("bootstrap", False))

    if bootstrap:
        if positionals:
            errors.append(ParseError("", f"--bootstrap does not accept input/output arguments: {' '.join(positionals)}"))
    elif len(positionals) == 2:
        values["input_file"], values["output_file"] = positionals
    elif not values.get("show_help"):
        errors.append(ParseError("", f"expected input and output arguments, got {len(positionals)} argument(s)"))

    return Configuration(**values), errors
