"""Glyph sets used to draw the report tree.

Reference print, showing which field draws which part::

    >,,,, main                 - 100.0%, 300 ms/loop, 2 samples
       +,,,, inner operations  -  66.7%, 200 ms/loop, 4 samples
       |  -.... processing     - 100.0%, 200 ms/loop, 4 samples
       -.... processing        -  33.3%, 100 ms/loop, 2 samples

``>`` starting, ``|`` continuing, ``+`` branching, ``-`` turning,
``....`` ending and ``,,,,`` turning-ending branch.
"""

from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class FormattingOptions:
    """Strings used to draw one report line's tree prefix.

    Attributes:
        starting_branch: Prefix of a top-level scope.
        continuing_branch: Vertical line under a scope with later siblings.
        branching_branch: Joint of a scope that has later siblings.
        turning_branch: Joint of the last sibling.
        ending_branch: Tail in front of a leaf's name.
        turning_ending_branch: Tail in front of a name that has children.
    """

    starting_branch: str
    continuing_branch: str
    branching_branch: str
    turning_branch: str
    ending_branch: str
    turning_ending_branch: str


# ╶──┬╼ main                 - 100.0%, 300 ms/loop, 2 samples
#    ├──┬╼ inner operations  -  66.7%, 200 ms/loop, 4 samples
#    │  └───╼ processing     - 100.0%, 200 ms/loop, 4 samples
#    └───╼ processing        -  33.3%, 100 ms/loop, 2 samples
STREAMLINED = FormattingOptions(
    starting_branch="╶",
    continuing_branch="│",
    branching_branch="├",
    turning_branch="└",
    ending_branch="───╼",
    turning_ending_branch="──┬╼",
)

STREAMLINED_ROUNDED = FormattingOptions(
    starting_branch="╶",
    continuing_branch="│",
    branching_branch="├",
    turning_branch="╰",
    ending_branch="───╼",
    turning_ending_branch="──┬╼",
)

# Plain ASCII, for terminals without box-drawing glyphs.
COMPATIBLE = FormattingOptions(
    starting_branch="-",
    continuing_branch="|",
    branching_branch="|",
    turning_branch="\\",
    ending_branch="----",
    turning_ending_branch="----",
)

DOUBLED = FormattingOptions(
    starting_branch="═",
    continuing_branch="║",
    branching_branch="╠",
    turning_branch="╚",
    ending_branch="════",
    turning_ending_branch="══╦═",
)

DEBUGGING = FormattingOptions(
    starting_branch=">",
    continuing_branch="|",
    branching_branch="+",
    turning_branch="-",
    ending_branch="....",
    turning_ending_branch=",,,,",
)

FORMATS: dict[str, FormattingOptions] = {
    "streamlined": STREAMLINED,
    "streamlined_rounded": STREAMLINED_ROUNDED,
    "compatible": COMPATIBLE,
    "doubled": DOUBLED,
    "debugging": DEBUGGING,
}


def get_format(name: str) -> FormattingOptions:
    """Return the preset called ``name`` (case-insensitive)."""
    try:
        return FORMATS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown report format: {name}",
            suggestion=f"Use one of: {', '.join(FORMATS)}",
        ) from None
