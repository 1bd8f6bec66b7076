"""
Compatibility Engine Module.

Decides whether a consumer released under one license may include a
dependency released under another, using a Tri-State logic
(Included | Excluded | Unknown).

Key Logic:
    - **Unspecified dependency**: never includable.
    - **Custom / File**: the terms cannot be reasoned about, so Unknown.
    - **Multiple consumer**: evaluated conservatively. Every alternative the
      consumer might ship under must accept the dependency.
    - **Multiple dependency**: evaluated liberally. One acceptable alternative
      is enough.
    - **Concrete pair**: looked up in the static matrix.

The engine never raises; "cannot determine" is always `Compatibility.UNKNOWN`.
"""

from enum import Enum
from typing import Iterable, List, Tuple

from .matrix import UNMODELED, get_matrix
from .model import License


class Compatibility(str, Enum):
    """Outcome of a compatibility decision."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNKNOWN = "unknown"


def _combine_all(results: Iterable[Compatibility]) -> Compatibility:
    """
    Conjunctive combination: Excluded dominates, then Unknown absorbs.

    Args:
        results (Iterable[Compatibility]): Outcome for each alternative.

    Returns:
        Compatibility: EXCLUDED if any is excluded, UNKNOWN if any is unknown,
        else INCLUDED.
    """
    seen_unknown = False
    for result in results:
        if result is Compatibility.EXCLUDED:
            return Compatibility.EXCLUDED
        if result is Compatibility.UNKNOWN:
            seen_unknown = True
    return Compatibility.UNKNOWN if seen_unknown else Compatibility.INCLUDED


def _combine_any(results: Iterable[Compatibility]) -> Compatibility:
    """
    Existential combination: Included dominates, then Unknown absorbs.

    Args:
        results (Iterable[Compatibility]): Outcome for each alternative.

    Returns:
        Compatibility: INCLUDED if any is included, UNKNOWN if any is unknown,
        else EXCLUDED.
    """
    seen_unknown = False
    for result in results:
        if result is Compatibility.INCLUDED:
            return Compatibility.INCLUDED
        if result is Compatibility.UNKNOWN:
            seen_unknown = True
    return Compatibility.UNKNOWN if seen_unknown else Compatibility.EXCLUDED


def _lookup_status(consumer: License, dependency: License) -> Compatibility:
    """Looks a concrete (non-composite, modeled) pair up in the matrix."""
    includable = get_matrix().get(consumer.kind, frozenset())
    if dependency.kind in includable:
        return Compatibility.INCLUDED
    return Compatibility.EXCLUDED


def explain(consumer: License, dependency: License) -> Tuple[Compatibility, List[str]]:
    """
    Evaluates `consumer` against `dependency` and records why.

    Args:
        consumer (License): License of the including package.
        dependency (License): License of the package being included.

    Returns:
        Tuple[Compatibility, List[str]]:
            - The tri-state outcome.
            - A list of strings explaining the derivation of the result,
              useful for reporting and debugging.
    """
    if dependency.is_unspecified:
        return Compatibility.EXCLUDED, [
            f"{dependency} → excluded: a dependency without a declared license "
            f"cannot be included by {consumer}"
        ]

    if consumer.is_custom or consumer.is_file or dependency.is_custom or dependency.is_file:
        return Compatibility.UNKNOWN, [
            f"{dependency} → unknown with respect to {consumer}: "
            "custom or file-based terms require manual verification"
        ]

    if consumer.is_multiple:
        trace: List[str] = []
        results = []
        for alternative in consumer.members:
            status, sub_trace = explain(alternative, dependency)
            results.append(status)
            trace.extend(sub_trace)
        combined = _combine_all(results)
        trace.append(f"every alternative of {consumer} must accept {dependency} ⇒ {combined.value}")
        return combined, trace

    if dependency.is_multiple:
        trace = []
        results = []
        for alternative in dependency.members:
            status, sub_trace = explain(consumer, alternative)
            results.append(status)
            trace.extend(sub_trace)
        combined = _combine_any(results)
        trace.append(f"one alternative of {dependency} is enough for {consumer} ⇒ {combined.value}")
        return combined, trace

    if consumer.kind in UNMODELED or dependency.kind in UNMODELED:
        return Compatibility.UNKNOWN, [f"{dependency} → unknown with respect to {consumer} (not modeled)"]

    status = _lookup_status(consumer, dependency)
    return status, [f"{dependency} → {status.value} with respect to {consumer}"]


def can_include(consumer: License, dependency: License) -> Compatibility:
    """
    Answers: may a package under `consumer` include a dependency under `dependency`?

    Evaluation order:
    1. An unspecified dependency is Excluded.
    2. Custom or File on either side is Unknown.
    3. A Multiple consumer is Included only if every alternative includes the
       dependency (any Excluded wins, then any Unknown).
    4. A Multiple dependency is Included if any alternative is included
       (otherwise any Unknown wins, then Excluded).
    5. LGPL-2.0 on either side is Unknown.
    6. The static matrix decides; untabulated pairs are Excluded.

    Args:
        consumer (License): License of the including package.
        dependency (License): License of the package being included.

    Returns:
        Compatibility: The tri-state outcome.
    """
    status, _ = explain(consumer, dependency)
    return status
