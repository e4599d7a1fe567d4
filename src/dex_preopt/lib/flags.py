from .options import OptimizeLevel, VerifyLevel

VERIFY_TOKENS = {
    VerifyLevel.NONE: "v=n",
    VerifyLevel.REMOTE: "v=r",
    VerifyLevel.ALL: "v=a",
}

OPTIMIZE_TOKENS = {
    OptimizeLevel.NONE: "o=n",
    OptimizeLevel.VERIFIED: "o=v",
    OptimizeLevel.ALL: "o=a",
}


def optimize_flag_string(
    verify: VerifyLevel, optimize: OptimizeLevel, register_maps: bool, uniprocessor: bool
) -> str:
    """
    Build the compact flag string dexopt expects after the input and output paths,
    e.g. "v=a,o=v,m=y,u=n".
    The register map token is only emitted when enabled; all the others are always there.
    """
    tokens = [VERIFY_TOKENS[verify], OPTIMIZE_TOKENS[optimize]]

    if register_maps:
        tokens.append("m=y")

    tokens.append("u=y" if uniprocessor else "u=n")

    return ",".join(tokens)
