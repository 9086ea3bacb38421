"""Command line front end for the reduced-matrix TSP heuristic.

CLI examples:
    reduced-tsp --file dat/tsp/gr17.dat --show-path
    reduced-tsp --pattern "gr*.dat" --ls 2opt --summary
    reduced-tsp --all --data-dir dat/atsp --big-m 9999 --json
    reduced-tsp --file small.dat --trace        # print every reduction table

The reduction method only guarantees distinct, non-reversed edges. On most
instances beyond a few nodes the committed edges do not close into one tour;
those are reported as "ERROR Committed edges form k subtours" or "ERROR Edges
reuse an endpoint". Use --method nearest for a tour on every instance.
"""
from __future__ import annotations

import argparse
import glob
import json
import logging
import os
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .consumer import format_path
from .heuristic import LOCAL_SEARCHES, METHODS, TSPSolution, solve_tsp_heuristic
from .log_sink import TableLogSink
from .parsers import load_instance


def iter_instances(data_dir: str, pattern: Optional[str], all_flag: bool) -> Iterable[str]:
    if pattern:
        for p in sorted(glob.glob(os.path.join(data_dir, pattern))):
            yield p
        return
    if all_flag:
        for ext in ('*.dat', '*.tsp', '*.atsp'):
            for p in sorted(glob.glob(os.path.join(data_dir, ext))):
                yield p
        return
    raise ValueError("Provide --pattern or --all")


def successors(tour: List[int]) -> List[int]:
    path = [0] * len(tour)
    for i, node in enumerate(tour):
        path[node] = tour[(i + 1) % len(tour)]
    return path


def run_single_tsp(path: str, args) -> Tuple[TSPSolution, np.ndarray]:
    dist = load_instance(path, big_m=args.big_m)
    log_sink = TableLogSink() if args.trace else None
    sol = solve_tsp_heuristic(dist, method=args.method, ls=args.ls, log_sink=log_sink)
    return sol, dist


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Reduced-matrix greedy TSP heuristic")
    ap.add_argument('--data-dir', default='dat/tsp')
    ap.add_argument('--file', help='Solve a single explicit instance file (overrides pattern/all)')
    ap.add_argument('--pattern', help='Filename or glob pattern (e.g., gr21.dat or gr*.dat)')
    ap.add_argument('--all', action='store_true', help='Run all instances in directory')
    ap.add_argument('--method', choices=list(METHODS), default='reduction', help='Tour construction method (reduction may end in subtours on larger instances)')
    ap.add_argument('--ls', choices=list(LOCAL_SEARCHES), default='none', help='Local search applied after construction')
    ap.add_argument('--max-n', type=int, help='Only solve instances with number of nodes < max-n')
    ap.add_argument('--big-m', type=float, help='Costs >= this value are treated as missing edges')
    ap.add_argument('--show-path', action='store_true', help='Print the tour with every edge cost')
    ap.add_argument('--trace', action='store_true', help='Print the reduced matrix after every phase')
    ap.add_argument('--summary', action='store_true')
    ap.add_argument('--json', action='store_true', help='Emit JSON array of results to stdout instead of plain text lines')
    ap.add_argument('--log-level', default='WARNING', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(levelname)s %(name)s: %(message)s')

    if args.file:
        targets = [args.file]
    else:
        if not args.pattern and not args.all:
            args.all = True
            print("[info] No --pattern or --all specified; defaulting to all instances in", args.data_dir)
        targets = list(iter_instances(args.data_dir, args.pattern, args.all))

    results: List[dict] = []
    skipped: List[Tuple[str, int]] = []
    errors = 0
    for path in targets:
        name = os.path.basename(path)
        try:
            if args.max_n is not None:
                n_nodes = load_instance(path).shape[0]
                if n_nodes >= args.max_n:
                    skipped.append((name, n_nodes))
                    continue
            sol, dist = run_single_tsp(path, args)
        except Exception as e:
            errors += 1
            if not args.json:
                print(f"{name:20s} ERROR {e}")
            continue
        results.append({
            'instance': name,
            'n': len(sol.tour),
            'cost': sol.cost,
            'runtime': sol.runtime,
            'method': sol.method,
            'improvements': sol.improvements,
            'tour': sol.tour,
        })
        if not args.json:
            print(f"{name:20s} cost={sol.cost:12.2f} time={sol.runtime:6.3f}s method={sol.method}")
            if args.show_path:
                text, _ = format_path(successors(sol.tour), dist, start=sol.tour[0])
                print(f"  {text}")

    if args.json:
        print(json.dumps(results))
    else:
        if args.summary and results:
            print("\nSummary:")
            for r in results:
                print(f"  {r['instance']:20s} n={r['n']:<5d} cost={r['cost']:.2f} method={r['method']}")
        if skipped:
            print(f"\nSkipped (>= max-n={args.max_n}):")
            for nm, sz in skipped:
                print(f"  {nm} (n={sz})")
    return 1 if errors and not results else 0


if __name__ == '__main__':
    raise SystemExit(main())
