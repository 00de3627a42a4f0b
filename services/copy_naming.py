"""
Copy name generation for duplicated nodes.

Names follow the "<base> Copy <N>" family. Duplicating a copy stays in the
same family, and the smallest free N is reused before the maximum grows:

    generate_copy_name("Week 1", [])                                  # "Week 1 Copy 1"
    generate_copy_name("Week 1", ["Week 1 Copy 1"])                   # "Week 1 Copy 2"
    generate_copy_name("Week 1", ["Week 1 Copy 1", "Week 1 Copy 3"])  # "Week 1 Copy 2"
    generate_copy_name("Week 1 Copy 1", ["Week 1 Copy 2"])            # "Week 1 Copy 3"
"""

import re
from typing import Iterable, Set

from core.constants import COPY_SUFFIX_WORD

# "<whitespace>Copy<whitespace><ASCII integer>" at the very end of a name
COPY_SUFFIX_PATTERN = re.compile(rf"\s+{COPY_SUFFIX_WORD}\s+(\d+)\Z", re.ASCII)


def extract_base_name(name: str) -> str:
    """Strip a trailing " Copy N" suffix, if present."""
    match = COPY_SUFFIX_PATTERN.search(name)
    if match:
        return name[: match.start()]
    return name


def _copy_numbers(base_name: str, sibling_names: Iterable[str]) -> Set[int]:
    numbers = set()
    for name in sibling_names:
        if not name.startswith(base_name):
            continue
        match = COPY_SUFFIX_PATTERN.fullmatch(name[len(base_name):])
        if match:
            numbers.add(int(match.group(1)))
    return numbers


def generate_copy_name(source_name: str, sibling_names: Iterable[str]) -> str:
    """
    Compute a sibling-unique name for a copy of ``source_name``.

    Pure function, no I/O. Callers supply a complete, current snapshot of the
    sibling names. The source node lives under the same parent, so its own
    copy number (if any) always counts as used.

    Args:
        source_name: Name of the node being duplicated
        sibling_names: Names of every node under the same parent

    Returns:
        "<base> Copy <N>" with N the smallest positive integer not yet used
    """
    base_name = extract_base_name(source_name)
    numbers = _copy_numbers(base_name, [source_name, *sibling_names])

    next_number = 1
    while next_number in numbers:
        next_number += 1

    return f"{base_name} {COPY_SUFFIX_WORD} {next_number}"
