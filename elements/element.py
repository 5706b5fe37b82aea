from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


# ---------------------------------------------------------------------------
# Element State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class ElementState(Enum):
    DEFAULT    = "default"     # resting colour
    COMPARING  = "comparing"   # one side of a comparison happening RIGHT NOW
    SWAPPING   = "swapping"    # about to exchange places with another element
    SORTED     = "sorted"      # locked in its final slot
    PIVOT      = "pivot"       # quicksort pivot
    CURRENT    = "current"     # element being inserted / running minimum
    SELECTED   = "selected"    # picked by the user in the UI


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Element:
    """
    One bar / circle / cell of the array being sorted.

    Attributes:
        value : Numeric value (>= 0).  Moves between slots during a sort.
        id    : Stable identity assigned at array creation.  The renderer
                keys continuous-motion visuals on it across steps.
        state : Visual state for the current step.

    Elements are frozen: a state change produces a new Element carrying the
    same value and id, so a tuple of Elements is a safe snapshot.
    """

    value: float
    id:    int
    state: ElementState = ElementState.DEFAULT

    def with_state(self, state: ElementState) -> "Element":
        if state is self.state:
            return self
        return replace(self, state=state)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "id": self.id, "state": self.state.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        return cls(
            value=data["value"],
            id=data["id"],
            state=ElementState(data.get("state", "default")),
        )

    def __repr__(self) -> str:
        return f"Element(id={self.id}, value={self.value}, state={self.state.value})"
