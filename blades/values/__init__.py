"""Value types that implement the rendering contract.

- :class:`DynamicValue` and its variants wrap arbitrary parsed metadata.
- :class:`DateValue` exposes date components as single-letter fields.
- :class:`PathSegments` renders a page path or iterates its breadcrumbs.
"""

from .dates import DateParseError, DateValue
from .dynamic import (
    DateTime,
    DynamicValue,
    List,
    Map,
    Number,
    String,
    ValueConversionError,
)
from .paths import PathSegments, Segment

__all__ = [
    "DateParseError",
    "DateTime",
    "DateValue",
    "DynamicValue",
    "List",
    "Map",
    "Number",
    "PathSegments",
    "Segment",
    "String",
    "ValueConversionError",
]
