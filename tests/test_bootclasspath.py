from dex_preopt.lib.bootclasspath import expand_boot_classpath, format_boot_classpath, odex_path_for
from dex_preopt.lib.options import parse_arguments
from dex_preopt.lib.paths import SplitPath
from pathlib import Path


def test_expand_keeps_order():
    config, _ = parse_arguments(["--bootstrap", "--boot-jars=a:b:c"])

    assert expand_boot_classpath(config.boot_jars, "D") == ["D/a.jar", "D/b.jar", "D/c.jar"]


def test_expand_under_split_boot_dir():
    boot_dir = SplitPath(Path("/out/target/product/foo"), "system/framework")

    assert expand_boot_classpath(("core", "ext"), boot_dir) == [
        "/out/target/product/foo/./system/framework/core.jar",
        "/out/target/product/foo/./system/framework/ext.jar",
    ]


def test_format_boot_classpath():
    assert format_boot_classpath(["/a/core.jar", "/a/ext.jar"]) == "/a/core.jar:/a/ext.jar"
    assert format_boot_classpath(["/a/core.jar"]) == "/a/core.jar"


def test_odex_path_for():
    assert odex_path_for("/p/./system/framework/core.jar") == "/p/./system/framework/core.odex"
    assert odex_path_for("/p/framework/core.jar.jar") == "/p/framework/core.jar.odex"
