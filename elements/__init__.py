"""
elements/
---------
Core data layer.  Public API:

    from elements import Element, ElementState
    from elements import create_random_array, parse_custom_array
    from elements import ConfigurationError, ValidationError, SequencingError
"""

from elements.element import Element, ElementState
from elements.errors  import SortVizError, ConfigurationError, ValidationError, SequencingError
from elements.source  import create_random_array, parse_custom_array, elements_from_values

__all__ = [
    "Element",            "ElementState",
    "SortVizError",       "ConfigurationError",
    "ValidationError",    "SequencingError",
    "create_random_array", "parse_custom_array",
    "elements_from_values",
]
