"""
Matcher configuration.

MatcherConfig collects the parsed expressions and subject filters the
CLI hands to the matcher subsystem. It is a frozen value; update()
returns a modified copy.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import ClassVar, Tuple

from .expression import Expression

SubjectSelect = Tuple[str, str]


@dataclass(frozen=True)
class MatcherConfig:
    match_expressions: Tuple[Expression, ...] = ()
    subject_ignores: Tuple[Expression, ...] = ()
    subject_selects: Tuple[SubjectSelect, ...] = ()

    DEFAULT: ClassVar["MatcherConfig"]

    def update(self, **changes) -> "MatcherConfig":
        """Return a copy with the given fields replaced; sequences are stored as tuples."""

        return dataclasses.replace(self, **{name: tuple(value) for name, value in changes.items()})

    def selects(self, subject: str, code: str) -> bool:
        """
        Decide whether a subject takes part in a run.

        A subject must match at least one match expression, no ignore
        expression, and, when code selects are present, one of their
        codes.
        """

        if not any(expression.matches(subject) for expression in self.match_expressions):
            return False
        if any(expression.matches(subject) for expression in self.subject_ignores):
            return False
        codes = [pattern for kind, pattern in self.subject_selects if kind == "code"]
        return not codes or any(code.startswith(pattern) for pattern in codes)


MatcherConfig.DEFAULT = MatcherConfig()
