"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows
about.

    from algorithms import REGISTRY, get_algorithm, get_executor

REGISTRY is a dict:
    {
        "merge": AlgoInfo(key, label, executors={"topDown": …, "bottomUp": …},
                          variants={"topDown": "Top-down (recursive)", …},
                          default_variant="topDown", …),
        …
    }

Algorithms without alternatives register a single "default" executor and
no variants.  Adding an algorithm is: write the executor, add one entry
here.  Lookups fail loudly with ConfigurationError; nothing falls back to
a no-op.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from elements import ConfigurationError
from algorithms.step import StepContext

# ---------------------------------------------------------------------------
# Import all executor modules
# ---------------------------------------------------------------------------
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge     import merge_sort_top_down, merge_sort_bottom_up, PSEUDOCODE as _merge_pc
from algorithms.quick     import quick_sort_lomuto, quick_sort_hoare,       PSEUDOCODE as _quick_pc
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from algorithms.shell     import shell_sort_ciura, shell_sort_knuth,        PSEUDOCODE as _shell_pc
from algorithms.cocktail  import cocktail_sort  as _cocktail,  PSEUDOCODE as _cocktail_pc


Executor = Callable[[StepContext], None]

DEFAULT_VARIANT = "default"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                     # registry key, e.g. "quick"
    label:             str                     # human label, e.g. "Quick Sort"
    executors:         Dict[str, Executor]     # variant key → executor
    pseudocode:        List[str]               = field(default_factory=list)
    variants:          Dict[str, str]          = field(default_factory=dict)   # variant key → label
    default_variant:   Optional[str]           = None
    complexity_time:   str                     = ""
    complexity_space:  str                     = ""
    best_case:         str                     = ""
    stable:            bool                    = False
    description:       str                     = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort",
        executors={DEFAULT_VARIANT: _bubble}, pseudocode=_bubble_pc,
        complexity_time="O(n^2)", complexity_space="O(1)",
        best_case="O(n) when the array is already sorted", stable=True,
        description="Compares adjacent elements and swaps them when out of order. "
                    "Easy to understand but inefficient for large inputs.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort",
        executors={DEFAULT_VARIANT: _selection}, pseudocode=_selection_pc,
        complexity_time="O(n^2)", complexity_space="O(1)",
        best_case="O(n^2) in every case", stable=False,
        description="Repeatedly selects the minimum remaining element and places it at the front. "
                    "Minimizes swaps but always quadratic.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort",
        executors={DEFAULT_VARIANT: _insertion}, pseudocode=_insertion_pc,
        complexity_time="O(n^2)", complexity_space="O(1)",
        best_case="O(n) when the data is nearly sorted", stable=True,
        description="Builds a sorted prefix one element at a time. "
                    "Excellent for nearly sorted data sets and small inputs.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort",
        executors={"topDown": merge_sort_top_down, "bottomUp": merge_sort_bottom_up},
        pseudocode=_merge_pc,
        variants={"topDown": "Top-down (recursive)", "bottomUp": "Bottom-up (iterative)"},
        default_variant="topDown",
        complexity_time="O(n log n)", complexity_space="O(n)",
        best_case="O(n log n) regardless of input", stable=True,
        description="Divide-and-conquer approach that splits the array, sorts each half, "
                    "and merges them back together.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort",
        executors={"lomuto": quick_sort_lomuto, "hoare": quick_sort_hoare},
        pseudocode=_quick_pc,
        variants={"lomuto": "Lomuto partition", "hoare": "Hoare partition"},
        default_variant="lomuto",
        complexity_time="O(n log n)", complexity_space="O(log n)",
        best_case="O(n log n) with balanced partitions", stable=False,
        description="Partitions the array around a pivot so smaller values move left and "
                    "larger ones move right. Very fast on average.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort",
        executors={DEFAULT_VARIANT: _heap}, pseudocode=_heap_pc,
        complexity_time="O(n log n)", complexity_space="O(1)",
        best_case="O(n log n) in every case", stable=False,
        description="Transforms the data into a binary heap to repeatedly extract the maximum "
                    "element. Predictable performance.",
    ),

    "shell": AlgoInfo(
        key="shell", label="Shell Sort",
        executors={"ciura": shell_sort_ciura, "knuth": shell_sort_knuth},
        pseudocode=_shell_pc,
        variants={"ciura": "Ciura gap sequence", "knuth": "Knuth gap sequence"},
        default_variant="ciura",
        complexity_time="O(n^(3/2)) average", complexity_space="O(1)",
        best_case="O(n log n) with good gap sequences", stable=False,
        description="Generalises insertion sort by comparing elements separated by a gap "
                    "sequence, shrinking the gap over time.",
    ),

    "cocktail": AlgoInfo(
        key="cocktail", label="Cocktail Shaker Sort",
        executors={DEFAULT_VARIANT: _cocktail}, pseudocode=_cocktail_pc,
        complexity_time="O(n^2)", complexity_space="O(1)",
        best_case="O(n) when already sorted", stable=True,
        description="Bidirectional bubble sort variant that bubbles large elements right and "
                    "small elements left each pass.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    info = REGISTRY.get(key)
    if info is None:
        raise ConfigurationError(key, reason="is not registered")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def get_default_variant(key: str) -> Optional[str]:
    """Declared default variant, else the first declared one, else None."""
    info = REGISTRY.get(key)
    if info is None or not info.variants:
        return None
    if info.default_variant and info.default_variant in info.variants:
        return info.default_variant
    return next(iter(info.variants))


def get_variant_label(key: str, variant: Optional[str]) -> Optional[str]:
    if not variant:
        return None
    info = REGISTRY.get(key)
    if info is None:
        return None
    return info.variants.get(variant)


def resolve_variant(key: str, variant: Optional[str] = None) -> str:
    """
    Map a requested variant onto a registered executor key.

    Order: the requested variant if it has an executor → the declared
    default → the first declared variant with an executor → "default" →
    the first executor.  Raises ConfigurationError when nothing matches.
    """
    info = require_algorithm(key)
    executors = info.executors

    if variant and variant in executors:
        return variant

    if info.variants:
        if info.default_variant and info.default_variant in executors:
            return info.default_variant
        for candidate in info.variants:
            if candidate in executors:
                return candidate

    if DEFAULT_VARIANT in executors:
        return DEFAULT_VARIANT

    if executors:
        return next(iter(executors))

    raise ConfigurationError(key, variant, reason="has no executor")


def get_executor(key: str, variant: Optional[str] = None) -> Executor:
    info = require_algorithm(key)
    return info.executors[resolve_variant(key, variant)]


def display_name(key: str, variant: Optional[str] = None) -> str:
    """'Quick Sort (Hoare partition)' — or just the label without variants."""
    info = REGISTRY.get(key)
    label = info.label if info else key
    variant_label = get_variant_label(key, variant) if variant != DEFAULT_VARIANT else None
    return f"{label} ({variant_label})" if variant_label else label


__all__ = [
    "AlgoInfo",
    "Executor",
    "REGISTRY",
    "DEFAULT_VARIANT",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "get_default_variant",
    "get_variant_label",
    "resolve_variant",
    "get_executor",
    "display_name",
]
