#!/usr/bin/env python3
"""Benchmark the reduced-matrix heuristic against the nearest-neighbor baseline.

Every named configuration in DEFAULT_METHODS is run once per instance (both
constructions are deterministic). Results go to ``--out-dir``:
  benchmark_runs.csv     one row per (instance, method)
  benchmark_summary.csv  mean cost / gap / runtime per method

The reduction construction often fails to close a single tour once n grows
past a handful of nodes (a node is reused or a subtour closes); those runs are
recorded with status "error:TourAssemblyError" and the nearest-neighbor rows
still give a baseline.

Example:
  reduced-tsp-benchmark --data-dir dat/atsp --all --big-m 9999 --bks-file tsplib_bks.txt
"""
from __future__ import annotations

import argparse
import os
import time
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import pandas as pd

from .cli import iter_instances
from .cost_matrix import reduce_matrix
from .heuristic import solve_tsp_heuristic
from .parsers import load_instance

DEFAULT_METHODS: Dict[str, Dict[str, str]] = {
    'reduction': {'method': 'reduction', 'ls': 'none'},
    'reduction_2opt': {'method': 'reduction', 'ls': '2opt'},
    'nearest_neighbor': {'method': 'nearest', 'ls': 'none'},
    'nearest_neighbor_2opt': {'method': 'nearest', 'ls': '2opt'},
}


@dataclass
class RunRecord:
    instance: str
    n: int
    lower_bound: float
    method_name: str
    status: str
    cost: Optional[float]
    gap_percent: Optional[float]
    runtime: float
    improvements: int
    timestamp: str


def load_bks(bks_file: Optional[str]) -> Dict[str, float]:
    """Load best known solutions: one "<instance> <value>" pair per line."""
    bks: Dict[str, float] = {}
    if not bks_file or not os.path.exists(bks_file):
        return bks
    with open(bks_file, 'r') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                parts = line.split()
                if len(parts) >= 2:
                    try:
                        bks[parts[0]] = float(parts[1])
                    except ValueError:
                        continue
    return bks


def extract_instance_name(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def run_benchmark(instances: List[str], methods: Dict[str, Dict[str, str]], bks: Optional[Dict[str, float]] = None,
                  max_n: Optional[int] = None, big_m: Optional[float] = None) -> List[RunRecord]:
    bks = bks or {}
    records: List[RunRecord] = []
    for path in instances:
        name = extract_instance_name(path)
        try:
            dist = load_instance(path, big_m=big_m)
        except Exception as e:
            print(f"{name:20s} PARSE_ERROR {e}")
            continue
        n = dist.shape[0]
        if max_n is not None and n >= max_n:
            print(f"{name:20s} skip n={n} >= {max_n}")
            continue
        _, row_mins, column_mins = reduce_matrix(dist)
        lower_bound = float(row_mins.sum() + column_mins.sum())
        print(f"\nInstance {name} (n={n}, LB: {lower_bound:.0f}, BKS: {bks.get(name, 'unknown')})")
        for method_name, cfg in methods.items():
            ts = time.strftime('%Y-%m-%d %H:%M:%S')
            try:
                sol = solve_tsp_heuristic(dist, method=cfg['method'], ls=cfg['ls'])
            except Exception as e:
                print(f"  {method_name:24s} ERROR {e}")
                records.append(RunRecord(name, n, lower_bound, method_name, f"error:{e.__class__.__name__}",
                                         None, None, 0.0, 0, ts))
                continue
            gap = None
            if name in bks:
                gap = (sol.cost - bks[name]) / bks[name] * 100
            records.append(RunRecord(name, n, lower_bound, method_name, 'ok', sol.cost, gap, sol.runtime, sol.improvements, ts))
            gap_str = f" (gap: {gap:.2f}%)" if gap is not None else ""
            print(f"  {method_name:24s} cost={sol.cost:.0f} time={sol.runtime:.3f}s{gap_str}")
    return records


def summarize(records: List[RunRecord]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in records])
    grp = df.groupby('method_name')
    return grp.agg(
        instances=('instance', 'count'),
        successes=('status', lambda s: (s == 'ok').sum()),
        cost_mean=('cost', 'mean'),
        gap_mean=('gap_percent', 'mean'),
        runtime_mean=('runtime', 'mean'),
    ).reset_index()


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description='Benchmark the reduced-matrix TSP heuristic')
    ap.add_argument('--data-dir', default='dat/tsp')
    ap.add_argument('--pattern', help='Glob for instances e.g. gr*.dat')
    ap.add_argument('--all', action='store_true')
    ap.add_argument('--max-n', type=int, help='Maximum nodes (exclusive)')
    ap.add_argument('--big-m', type=float, help='Costs >= this value are treated as missing edges')
    ap.add_argument('--methods', help='Comma list of method names to include (default: all)')
    ap.add_argument('--bks-file', default='tsplib_bks.txt', help='Best known solutions file')
    ap.add_argument('--out-dir', default='results', help='Output directory')
    args = ap.parse_args(argv)

    selected = DEFAULT_METHODS
    if args.methods:
        requested = [m.strip() for m in args.methods.split(',') if m.strip()]
        missing = [m for m in requested if m not in DEFAULT_METHODS]
        if missing:
            print(f'[error] unknown method names: {missing}')
            print(f'Known: {list(DEFAULT_METHODS.keys())}')
            return 1
        selected = {m: DEFAULT_METHODS[m] for m in requested}

    if not args.pattern and not args.all:
        args.all = True
        print('[info] no pattern/all specified; defaulting to --all')
    paths = list(iter_instances(args.data_dir, args.pattern, args.all))
    if not paths:
        print('[warn] no instances found')
        return 1

    records = run_benchmark(paths, selected, bks=load_bks(args.bks_file), max_n=args.max_n, big_m=args.big_m)
    if not records:
        print('[warn] nothing was run')
        return 1
    os.makedirs(args.out_dir, exist_ok=True)
    runs_csv = os.path.join(args.out_dir, 'benchmark_runs.csv')
    pd.DataFrame([asdict(r) for r in records]).to_csv(runs_csv, index=False)
    summary = summarize(records)
    summary_csv = os.path.join(args.out_dir, 'benchmark_summary.csv')
    summary.to_csv(summary_csv, index=False)
    print(f'\n✓ Runs written to {runs_csv}')
    print(f'✓ Summary written to {summary_csv}')
    print(summary.to_string(index=False))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
