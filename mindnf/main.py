from __future__ import annotations
import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

from mindnf.config import DEFAULT_LIMITS, Limits
from mindnf.cover import MinimalCoverResult, solve_minimal_cover
from mindnf.cube import Cube
from mindnf.errors import MindnfError
from mindnf.expression import format_prime_implicant_table, format_result
from mindnf.implicants import derive_prime_implicants
from mindnf.pla import build_pla
from mindnf.truth_table import (
    TruthTable,
    load_truth_table,
    parse_sum_of_minterms_file,
    tables_from_minterm_indices,
)

logger = logging.getLogger(__name__)


@dataclass
class Minimization:
    table: TruthTable
    prime_implicants: List[Cube]
    result: Optional[MinimalCoverResult] = None

    def solve(self) -> MinimalCoverResult:
        """Run the cover search over the prime implicants and keep its result."""
        self.result = solve_minimal_cover(self.prime_implicants, self.table.minterms)
        return self.result

    def cover_cubes(self, k: int = 0) -> List[Cube]:
        """Cubes of the k-th minimal cover."""
        if self.result is None:
            raise ValueError("cover search was not run")
        return [self.prime_implicants[i] for i in self.result.covers[k]]


def minimize(table: TruthTable, limits: Limits = DEFAULT_LIMITS, search: bool = True) -> Minimization:
    """Enumerate prime implicants of `table`, then (optionally) all minimal covers."""
    pis = derive_prime_implicants(table.num_inputs, table.minterms, table.non_minterms, limits)
    run = Minimization(table=table, prime_implicants=pis)
    if search:
        run.solve()
    return run


def _pla_path(path: str, table: TruthTable, several: bool) -> str:
    if not several:
        return path
    root, ext = os.path.splitext(path)
    return f"{root}_{table.output_name}{ext}"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mindnf",
        description="Find all minimal disjunctive normal forms of a boolean function.",
        epilog='Note: the output value for the input values not included in the truth table file '
               'is regarded as "don\'t care".',
    )
    parser.add_argument("file", help="truth table file (or sum-of-minterms file with --sum)")
    parser.add_argument("-n", "--no-search", action="store_true",
                        help="don't search minimal covers (use with --print-prime-implicants)")
    parser.add_argument("-p", "--print-prime-implicants", action="store_true",
                        help="print all prime implicants")
    parser.add_argument("-t", "--time", action="store_true",
                        help="print timing data about this program run")
    parser.add_argument("--sum", type=int, metavar="N", dest="sum_inputs",
                        help="read FILE as 'f = sum{...} d{...}' lines over N inputs")
    parser.add_argument("--pla", metavar="PATH", help="write the first minimal cover as a PLA file")
    parser.add_argument("--max-inputs", type=int, default=DEFAULT_LIMITS.max_inputs,
                        help="maximum number of input variables (default: %(default)s)")
    parser.add_argument("--max-prime-implicants", type=int, default=DEFAULT_LIMITS.max_prime_implicants,
                        help="maximum number of prime implicants (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _load_tables(args: argparse.Namespace, limits: Limits) -> List[TruthTable]:
    if args.sum_inputs is not None:
        spec = parse_sum_of_minterms_file(args.file)
        return tables_from_minterm_indices(args.sum_inputs, spec, limits=limits)
    return [load_truth_table(args.file, limits)]


def run_table(table: TruthTable, args: argparse.Namespace, limits: Limits, pla_path: Optional[str]) -> None:
    names = table.input_names

    st = time.perf_counter()
    run = minimize(table, limits, search=False)
    et = time.perf_counter()

    if args.print_prime_implicants:
        print("Prime implicants:")
        for line in format_prime_implicant_table(run.prime_implicants, names):
            print(line)
        print()

    if args.time:
        print(f"Time for constructing prime implicants table: {et - st:.6f}s", file=sys.stderr)

    if args.no_search:
        return

    st = time.perf_counter()
    result = run.solve()
    et = time.perf_counter()

    print("Results:")
    for k in range(len(result.covers)):
        print(format_result(table.output_name, run.cover_cubes(k), names))

    if args.time:
        print(f"Time for solving the minimal cover problem: {et - st:.6f}s", file=sys.stderr)

    if pla_path is not None:
        cubes = run.cover_cubes()
        with open(pla_path, "w", encoding="utf-8") as f:
            f.write(build_pla(cubes, table.num_inputs, names, table.output_name) + "\n")
        logger.info("PLA written to %s", pla_path)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    if args.pla and args.no_search:
        logger.warning("--pla has no effect together with --no-search")

    try:
        limits = Limits(max_inputs=args.max_inputs, max_prime_implicants=args.max_prime_implicants)
        tables = _load_tables(args, limits)
        several = len(tables) > 1
        for table in tables:
            if several:
                print(f"=== {table.output_name} ===")
            pla_path = _pla_path(args.pla, table, several) if args.pla and not args.no_search else None
            run_table(table, args, limits, pla_path)
    except (OSError, ValueError, MindnfError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
