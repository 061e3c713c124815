"""
Loading single-output truth tables.

Two file formats are accepted.

Truth table file:

    # comment
    a b y
    0 0 1
    0 1 1
    1 0 0

The header names the inputs and, last, the output.  Each data row gives
one 0/1 value per input and then the output.  Rows missing from the file
are don't care.  Malformed rows are reported and skipped.

Sum-of-minterms file (one function per line, row index 0 = all inputs 0,
first input is the most significant bit):

    f = sum{0,2,3,4} d{5,7}
    g = sum{1,6} + d{0,3}

Every row listed neither in sum{} nor in d{} is a non-minterm.
"""

from __future__ import annotations
import itertools
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from mindnf.config import DEFAULT_LIMITS, Limits
from mindnf.cube import Cube
from mindnf.errors import LimitExceededError, TruthTableFormatError

logger = logging.getLogger(__name__)


@dataclass
class TruthTable:
    input_names: List[str]
    output_name: str
    minterms: List[Cube] = field(default_factory=list)
    non_minterms: List[Cube] = field(default_factory=list)

    @property
    def num_inputs(self) -> int:
        return len(self.input_names)


def _check_num_inputs(n_inputs: int, limits: Limits) -> None:
    if n_inputs < 1:
        raise TruthTableFormatError("at least one input variable is required")
    if n_inputs > limits.max_inputs:
        raise LimitExceededError(
            f"the number of input variables is too large ({n_inputs} > {limits.max_inputs})"
        )


def parse_truth_table(
    lines: Iterable[str],
    source: str = "<input>",
    limits: Limits = DEFAULT_LIMITS,
) -> TruthTable:
    header: Optional[List[str]] = None
    outputs: Dict[Cube, int] = {}
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        tokens = line.split()
        if header is None:
            if len(tokens) < 2:
                raise TruthTableFormatError(
                    f"{source}:{lineno}: header must name at least one input and the output"
                )
            _check_num_inputs(len(tokens) - 1, limits)
            header = tokens
            continue

        n = len(header) - 1
        if len(tokens) != n + 1 or any(t not in ('0', '1') for t in tokens):
            logger.warning('%s:%d: illegal input line "%s", ignored.', source, lineno, line)
            continue
        row = Cube.from_bits(tokens[:n])
        out = int(tokens[n])
        prev = outputs.get(row)
        if prev is None:
            outputs[row] = out
        elif prev != out:
            logger.warning('%s:%d: input %s already has output %d, line "%s" ignored.',
                           source, lineno, ' '.join(tokens[:n]), prev, line)

    if header is None:
        raise TruthTableFormatError(f"{source}: no header line found")

    table = TruthTable(input_names=header[:-1], output_name=header[-1])
    for row, out in outputs.items():
        (table.minterms if out == 1 else table.non_minterms).append(row)
    logger.debug("%s: %d inputs, %d minterms, %d non-minterms", source,
                 table.num_inputs, len(table.minterms), len(table.non_minterms))
    return table


def load_truth_table(path: str, limits: Limits = DEFAULT_LIMITS) -> TruthTable:
    with open(path, "r", encoding="utf-8") as f:
        return parse_truth_table(f, source=path, limits=limits)


# ---- sum-of-minterms specs ----

_SUM_LINE = re.compile(
    r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*sum\s*\{\s*([0-9,\s]*)\s*\}\s*(?:\+?\s*d\s*\{\s*([0-9,\s]*)\s*\}\s*)?$"""
)


def gen_all_input_combinations(n_inputs: int) -> List[str]:
    if n_inputs < 1:
        raise ValueError("n_inputs must be >= 1")
    return [''.join(bits) for bits in itertools.product('01', repeat=n_inputs)]


def _parse_index_list(body: Optional[str]) -> Set[int]:
    if body is None or body.strip() == "":
        return set()
    return {int(tok) for tok in (t.strip() for t in body.split(',')) if tok}


def parse_sum_of_minterms(lines: Iterable[str], source: str = "<input>") -> Dict[str, Tuple[Set[int], Set[int]]]:
    """Returns: dict name -> (on_set, dc_set)"""
    spec: Dict[str, Tuple[Set[int], Set[int]]] = {}
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = _SUM_LINE.match(line)
        if not m:
            raise TruthTableFormatError(f"{source}:{lineno}: invalid format -> {line}")
        name, on_body, dc_body = m.group(1), m.group(2), m.group(3)
        if name in spec:
            logger.warning("%s:%d: function '%s' redefined, using the last definition", source, lineno, name)
        spec[name] = (_parse_index_list(on_body), _parse_index_list(dc_body))
    if not spec:
        raise TruthTableFormatError(f"{source}: no functions found")
    return spec


def parse_sum_of_minterms_file(path: str) -> Dict[str, Tuple[Set[int], Set[int]]]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_sum_of_minterms(f, source=path)


def tables_from_minterm_indices(
    n_inputs: int,
    spec: Dict[str, Tuple[Set[int], Set[int]]],
    input_names: Optional[List[str]] = None,
    limits: Limits = DEFAULT_LIMITS,
) -> List[TruthTable]:
    """One TruthTable per function, sorted by function name."""
    _check_num_inputs(n_inputs, limits)
    if input_names is None:
        input_names = [f"x{i+1}" for i in range(n_inputs)]
    if len(input_names) != n_inputs:
        raise ValueError(f"expected {n_inputs} input names, got {len(input_names)}")

    max_index = (1 << n_inputs) - 1
    for name, (on_set, dc_set) in spec.items():
        bad_on = sorted(i for i in on_set if i > max_index)
        bad_dc = sorted(i for i in dc_set if i > max_index)
        if bad_on:
            raise TruthTableFormatError(f"Output '{name}' has invalid ON indices: {bad_on} (N={n_inputs})")
        if bad_dc:
            raise TruthTableFormatError(f"Output '{name}' has invalid DC indices: {bad_dc} (N={n_inputs})")
        if on_set & dc_set:
            raise TruthTableFormatError(f"Output '{name}' has overlap between ON and DC: {sorted(on_set & dc_set)}")

    rows = [Cube.from_bits(bits) for bits in gen_all_input_combinations(n_inputs)]
    tables = []
    for name in sorted(spec):
        on_set, dc_set = spec[name]
        table = TruthTable(input_names=list(input_names), output_name=name)
        for i, row in enumerate(rows):
            if i in on_set:
                table.minterms.append(row)
            elif i not in dc_set:
                table.non_minterms.append(row)
        tables.append(table)
    return tables
