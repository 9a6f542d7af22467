from __future__ import annotations

import argparse
import ast
import json
from dataclasses import dataclass, field

from heaputil import Ordering
from lib.config_base import ConfigBase

SUPPORTED_DTYPES = ("uint8", "uint16", "uint32", "int32", "int64")


@dataclass
class InputConfig(ConfigBase):
    path: str = "data/tokens.bin"
    token_dtype: str = "uint16"

    def __post_init__(self) -> None:
        if self.token_dtype not in SUPPORTED_DTYPES:
            raise ValueError(
                f"Unsupported token_dtype `{self.token_dtype}`. "
                f"Use one of: {', '.join(SUPPORTED_DTYPES)}"
            )


@dataclass
class OutputConfig(ConfigBase):
    path: str = "data/tokens.sorted.bin"
    # Keep only the first `limit` values after sorting (0 keeps everything).
    limit: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.limit, int) or isinstance(self.limit, bool):
            raise ValueError(f"output.limit must be an integer, got {self.limit!r}")
        if self.limit < 0:
            raise ValueError(f"output.limit must be >= 0, got {self.limit}")


@dataclass
class HeapSortConfig(ConfigBase):
    ordering: Ordering = Ordering.MIN
    show_progress: bool = True
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.show_progress, bool):
            raise ValueError(
                f"show_progress must be true or false, got {self.show_progress!r}"
            )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sort an integer token file with a binary heap.")
    parser.add_argument(
        "--config", type=str, default=None, help="Path to .toml or .json config."
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override config key(s), e.g. --set ordering=max --set output.limit=100",
    )
    parser.add_argument(
        "--print-config", action="store_true", help="Print final config and exit."
    )
    return parser.parse_args(argv)


def load_heap_sort_config(args: argparse.Namespace) -> HeapSortConfig:
    cfg = HeapSortConfig()
    if args.config is not None:
        cfg = HeapSortConfig.from_file(args.config)

    overrides = {}
    for override in args.set:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set expression: `{override}` (expected KEY=VALUE)"
            )
        key, raw = override.split("=", 1)
        overrides[key] = _parse_value(raw)
    if overrides:
        cfg = cfg.with_flat_updates(overrides)
    return cfg


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw
