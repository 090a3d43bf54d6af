"""
Reporters render run results for the user.
"""

from __future__ import annotations

from typing import TextIO


class CLIReporter:
    """
    Plain-text reporter writing to an output sink (stdout by default).

    Reporters bound to the same sink compare equal.
    """

    def __init__(self, output: TextIO) -> None:
        self.output = output

    def report(self, report) -> None:
        print(
            f"Mutations: {report.total} Kills: {report.killed} Alive: {len(report.alive)} "
            f"Coverage: {report.coverage:.2f}%",
            file=self.output,
        )
        for mutation in report.alive:
            print(f"alive: {mutation.identification}", file=self.output)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CLIReporter) and other.output is self.output

    def __hash__(self) -> int:
        return hash(id(self.output))

    def __repr__(self) -> str:
        return f"CLIReporter({getattr(self.output, 'name', self.output)!r})"
