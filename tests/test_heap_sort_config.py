from __future__ import annotations

import json
from pathlib import Path

import pytest

from heaputil import Ordering
from lib.heap_sort_config import HeapSortConfig, load_heap_sort_config, parse_args


def test_defaults() -> None:
    cfg = HeapSortConfig()
    assert cfg.ordering is Ordering.MIN
    assert cfg.input.token_dtype == "uint16"
    assert cfg.output.limit == 0


def test_from_toml_file(tmp_path: Path) -> None:
    path = tmp_path / "sort.toml"
    path.write_text(
        'ordering = "max"\n'
        "show_progress = false\n"
        "[input]\n"
        'path = "in.bin"\n'
        'token_dtype = "int32"\n'
        "[output]\n"
        "limit = 10\n"
    )
    cfg = HeapSortConfig.from_file(path)
    assert cfg.ordering is Ordering.MAX
    assert cfg.show_progress is False
    assert cfg.input.path == "in.bin"
    assert cfg.input.token_dtype == "int32"
    assert cfg.output.limit == 10
    assert cfg.output.path == "data/tokens.sorted.bin"


def test_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "sort.json"
    path.write_text(json.dumps({"ordering": "min", "output": {"path": "out.bin"}}))
    cfg = HeapSortConfig.from_file(path)
    assert cfg.ordering is Ordering.MIN
    assert cfg.output.path == "out.bin"


def test_missing_and_unsupported_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HeapSortConfig.from_file(tmp_path / "nope.toml")
    yaml_path = tmp_path / "sort.yaml"
    yaml_path.write_text("ordering: max\n")
    with pytest.raises(ValueError, match="Unsupported config format"):
        HeapSortConfig.from_file(yaml_path)


def test_unknown_fields_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown config field"):
        HeapSortConfig.from_dict({"orderng": "max"})
    with pytest.raises(ValueError, match="Unknown config field"):
        HeapSortConfig.from_dict({"input": {"dtype": "uint8"}})


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError, match="ordering"):
        HeapSortConfig.from_dict({"ordering": "median"})
    with pytest.raises(ValueError, match="token_dtype"):
        HeapSortConfig.from_dict({"input": {"token_dtype": "float32"}})
    with pytest.raises(ValueError, match="limit"):
        HeapSortConfig.from_dict({"output": {"limit": -1}})
    with pytest.raises(ValueError, match="mapping"):
        HeapSortConfig.from_dict({"input": "in.bin"})
    for bad_limit in ("3", 2.5, True):
        with pytest.raises(ValueError, match="output.limit"):
            HeapSortConfig.from_dict({"output": {"limit": bad_limit}})
    with pytest.raises(ValueError, match="show_progress"):
        HeapSortConfig.from_dict({"show_progress": "no"})


def test_non_integer_limit_override_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="output.limit"):
        load_heap_sort_config(parse_args(["--set", "output.limit=abc"]))
    with pytest.raises(ValueError, match="show_progress"):
        load_heap_sort_config(parse_args(["--set", "show_progress=no"]))


def test_cli_overrides_apply_on_top_of_file(tmp_path: Path) -> None:
    path = tmp_path / "sort.toml"
    path.write_text('ordering = "min"\n[output]\nlimit = 3\n')
    args = parse_args(
        ["--config", str(path), "--set", "ordering=max", "--set", "output.limit=5"]
    )
    cfg = load_heap_sort_config(args)
    assert cfg.ordering is Ordering.MAX
    assert cfg.output.limit == 5
    assert cfg.input.path == "data/tokens.bin"


def test_bad_override_expressions() -> None:
    with pytest.raises(ValueError, match="KEY=VALUE"):
        load_heap_sort_config(parse_args(["--set", "ordering"]))
    with pytest.raises(ValueError, match="not a mapping"):
        load_heap_sort_config(parse_args(["--set", "ordering.value=1"]))
    with pytest.raises(ValueError, match="Unknown config field"):
        load_heap_sort_config(parse_args(["--set", "output.size=1"]))


def test_to_dict_round_trips() -> None:
    cfg = HeapSortConfig().with_flat_updates({"ordering": "max"})
    data = cfg.to_dict()
    assert data["ordering"] == "max"
    assert HeapSortConfig.from_dict(data) == cfg
