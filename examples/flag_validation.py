from cliflag import Constraint, FlagSpec
from cliflag.help import render_help

flags = [
    FlagSpec(
        "ports",
        "p",
        "PORTS",
        "Ports to open",
        Constraint.REQUIRED | Constraint.INT | Constraint.ALLOW_MANY,
    ),
    FlagSpec(
        "ratio",
        "r",
        "RATIO",
        "Sampling ratio",
        Constraint.FLOAT,
    ),
    FlagSpec(
        "tag",
        "t",
        "TAG",
        "Release tag",
        Constraint.ALPHANUMERIC | Constraint.ALLOW_DOTS | Constraint.ALLOW_HYPHEN,
    ),
]

render_help(flags)

for spec, value in [
    (flags[0], "80,443"),
    (flags[0], "80,"),
    (flags[1], "0.25"),
    (flags[1], "1"),
    (flags[2], "v1.2.0-rc1"),
    (flags[2], "v1_2"),
]:
    error = spec.validate_value(False, value, "")
    print(f"--{spec.name} {value!r}: {error or 'ok'}")
