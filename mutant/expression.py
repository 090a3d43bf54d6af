"""
Match expressions.

A match expression names the code subjects a run should mutate. Only
the syntax needed to select and ignore subjects from the command line
is understood here:

  Foo::Bar       exact namespace
  Foo::Bar*      namespace and everything nested below it
  Foo::Bar#baz   instance method
  Foo::Bar.baz   singleton method
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional

from .errors import ExpressionError

_SCOPE = r"[A-Z]\w*(?:::[A-Z]\w*)*"
_METHOD = r"[A-Za-z_]\w*[?!=]?|\[\]=?|[-+*/%<>=!~^&|]+"

_NAMESPACE_RE = re.compile(rf"\A(?P<scope>{_SCOPE})(?P<recursive>\*)?\Z")
_METHOD_RE = re.compile(rf"\A(?P<scope>{_SCOPE})(?P<kind>[#.])(?P<method>{_METHOD})\Z")


@dataclass(frozen=True)
class Expression:
    """
    A parsed match expression.

    Two expressions parsed from the same text compare equal, so parsed
    configurations can be compared field by field.
    """

    syntax: str
    scope: str
    kind: Literal["namespace", "recursive", "instance", "singleton"]
    method: Optional[str] = None

    def matches(self, subject: str) -> bool:
        """Return True if the subject identification falls under this expression."""

        if self.kind == "recursive":
            return subject == self.scope or subject.startswith(
                (f"{self.scope}::", f"{self.scope}#", f"{self.scope}.")
            )
        return subject == self.syntax

    def __str__(self) -> str:
        return self.syntax


def parse(text: str) -> Expression:
    """Parse expression text, raising ExpressionError if it is not recognized."""

    match = _NAMESPACE_RE.match(text)
    if match:
        kind = "recursive" if match.group("recursive") else "namespace"
        return Expression(syntax=text, scope=match.group("scope"), kind=kind)

    match = _METHOD_RE.match(text)
    if match:
        kind = "instance" if match.group("kind") == "#" else "singleton"
        return Expression(
            syntax=text,
            scope=match.group("scope"),
            kind=kind,
            method=match.group("method"),
        )

    raise ExpressionError(f"invalid expression: {text}")
