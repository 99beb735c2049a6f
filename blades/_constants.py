"""Common literal values used across blades.

These constants keep directory names, file suffixes, and the date lookup
tables centralized so templates, loaders, and tests can import the same
values without drifting. Intended for internal use within the blades package.

Examples
--------
>>> from blades import _constants
>>> _constants.PADDED_NUMBERS[7]
'07'
>>> _constants.MONTH_ABBREVIATIONS[2]
'Mar'
"""

TEMPLATE_DIR = "templates"
TEMPLATE_SUFFIX = ".html"
FRONT_MATTER_FENCE = "+++"
PAGE_SUFFIX = ".md"
INDEX_STEM = "index"

PADDED_NUMBERS: tuple[str, ...] = tuple(f"{number:02d}" for number in range(60))
"""Two-digit strings ``"00"`` to ``"59"``, indexed by value."""

WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
