from __future__ import annotations

import json
import pathlib

import numpy as np
from tqdm import tqdm

from heaputil import IntHeap, Ordering
from lib.heap_sort_config import (
    HeapSortConfig,
    InputConfig,
    OutputConfig,
    load_heap_sort_config,
    parse_args,
)


def load_values(input_cfg: InputConfig) -> np.ndarray:
    path = pathlib.Path(input_cfg.path)
    if not path.exists():
        raise FileNotFoundError(f"Input token file not found: {path}")
    dtype = np.dtype(input_cfg.token_dtype)
    # np.memmap refuses zero-length files
    if path.stat().st_size == 0:
        return np.empty(0, dtype=dtype)
    return np.memmap(path, mode="r", dtype=dtype)


def sort_values(
    values: np.ndarray,
    ordering: Ordering | str = Ordering.MIN,
    show_progress: bool = False,
) -> list[int]:
    heap = IntHeap(values.tolist(), ordering)
    with tqdm(total=len(heap), unit="tok", desc="Draining", disable=not show_progress) as pbar:
        result = []
        for value in heap.drain():
            result.append(value)
            pbar.update(1)
    return result


def save_values(values: list[int], output_cfg: OutputConfig, dtype: str) -> pathlib.Path:
    if output_cfg.limit:
        values = values[: output_cfg.limit]
    output_path = pathlib.Path(output_cfg.path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    np.array(values, dtype=np.dtype(dtype)).tofile(output_path)
    return output_path


def run(cfg: HeapSortConfig) -> pathlib.Path:
    values = load_values(cfg.input)
    sorted_values = sort_values(values, cfg.ordering, cfg.show_progress)
    output_path = save_values(sorted_values, cfg.output, cfg.input.token_dtype)
    print(
        f"Done! Sorted {len(values)} values ({cfg.ordering.value}-first). "
        f"Output saved to: {output_path}"
    )
    return output_path


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = load_heap_sort_config(args)
    if args.print_config:
        print(json.dumps(cfg.to_dict(), indent=2))
        return
    run(cfg)


if __name__ == "__main__":
    main()
