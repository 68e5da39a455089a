"""Polycalc package: polynomial engine, literal parser, command dispatcher and CLI."""

__all__ = [
    "config",
    "stack",
    "input_stream",
    "numerics",
    "poly",
    "compose",
    "parser",
    "commands",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "parse",
    "run",
    "zero",
    "from_coeff",
    "variable",
    "add",
    "sub",
    "neg",
    "mul",
    "power",
    "at",
    "compose",
    "degree",
    "degree_by",
    "is_eq",
    "render",
]
