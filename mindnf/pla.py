from __future__ import annotations
from typing import List, Optional, Sequence

from mindnf.cube import Cube
from mindnf.expression import default_var_names


def build_pla(
    cubes: Sequence[Cube],
    num_inputs: int,
    input_names: Optional[Sequence[str]] = None,
    output_name: str = "f",
) -> str:
    """Berkeley PLA text for a single-output sum of products."""
    if num_inputs < 1:
        raise ValueError("PLA needs at least one input.")
    if input_names is None:
        input_names = default_var_names(num_inputs)
    lines: List[str] = []
    lines.append(f".i {num_inputs}")
    lines.append(".o 1")
    lines.append(".ilb " + " ".join(input_names))
    lines.append(".ob " + output_name)
    lines.append(f".p {len(cubes)}")
    lines.extend(f"{cube} 1" for cube in cubes)
    lines.append(".e")
    return "\n".join(lines)
