from __future__ import annotations
from typing import List, Optional, Sequence

from mindnf.cube import Cube


def default_var_names(n: int) -> List[str]:
    return [f"x{i+1}" for i in range(n)]


def implicant_to_product_term(implicant: Cube, var_names: Optional[Sequence[str]] = None) -> str:
    """'a & ^b' style term; '^' marks a variable fixed to 0."""
    if var_names is None:
        var_names = default_var_names(implicant.num_inputs)
    terms = []
    for i, name in enumerate(var_names[:implicant.num_inputs]):
        v = implicant.value(i)
        if v == 1:
            terms.append(name)
        elif v == 0:
            terms.append("^" + name)
    return ' & '.join(terms) if terms else "1"


def build_sum_of_products(selected_pis: Sequence[Cube], var_names: Optional[Sequence[str]] = None) -> str:
    if not selected_pis:
        return "0"
    return ' | '.join(f"({implicant_to_product_term(pi, var_names)})" for pi in selected_pis)


def format_result(output_name: str, selected_pis: Sequence[Cube], var_names: Optional[Sequence[str]] = None) -> str:
    return f"{output_name} = {build_sum_of_products(selected_pis, var_names)}"


def format_prime_implicant_table(pis: Sequence[Cube], var_names: Optional[Sequence[str]] = None) -> List[str]:
    """Numbered lines, 1-based, numbers right-aligned."""
    width = len(str(len(pis)))
    return [f"{n:>{width}}: {implicant_to_product_term(pi, var_names)}" for n, pi in enumerate(pis, 1)]
