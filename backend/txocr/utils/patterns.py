"""
Named regex patterns and the first-match-wins cascade shared by all recipes.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))

    def search(self, text: str) -> Optional[re.Match]:
        return self.compiled.search(text)


def first_match(
    specs: Iterable[PatternSpec],
    text: str
) -> Optional[Tuple[PatternSpec, re.Match]]:
    """
    Return the first pattern (in list order) that matches anywhere in text.

    Order is the priority: later, looser patterns are never tried once an
    earlier one matches.
    """
    for spec in specs:
        match = spec.search(text)
        if match:
            return spec, match
    return None
