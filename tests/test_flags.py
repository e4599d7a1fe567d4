from dex_preopt.lib.flags import optimize_flag_string
from dex_preopt.lib.options import OptimizeLevel, VerifyLevel
import itertools
import pytest


@pytest.mark.parametrize(
    "verify, optimize, register_maps, uniprocessor, expected",
    [
        (VerifyLevel.ALL, OptimizeLevel.VERIFIED, True, False, "v=a,o=v,m=y,u=n"),
        (VerifyLevel.NONE, OptimizeLevel.NONE, False, False, "v=n,o=n,u=n"),
        (VerifyLevel.REMOTE, OptimizeLevel.ALL, True, True, "v=r,o=a,m=y,u=y"),
        (VerifyLevel.ALL, OptimizeLevel.ALL, False, True, "v=a,o=a,u=y"),
    ],
)
def test_optimize_flag_string(verify, optimize, register_maps, uniprocessor, expected):
    assert optimize_flag_string(verify, optimize, register_maps, uniprocessor) == expected


def test_token_structure_for_every_combination():
    for verify, optimize, register_maps, uniprocessor in itertools.product(
        VerifyLevel, OptimizeLevel, (True, False), (True, False)
    ):
        flags = optimize_flag_string(verify, optimize, register_maps, uniprocessor)
        tokens = flags.split(",")

        assert not flags.startswith(",") and not flags.endswith(",")
        assert all(tokens)
        assert [t[:2] for t in tokens] == (["v=", "o=", "m=", "u="] if register_maps else ["v=", "o=", "u="])
        assert tokens.count("m=y") == (1 if register_maps else 0)
