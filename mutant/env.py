"""
Execution environment for a mutant run.

The environment prepares the process for a run (load path, required
modules, integration setup), asks the configured integration to kill
each selected mutation and summarizes the outcome in a Report.
Generating mutations is the job of the mutation engine; call() receives
whatever it produced.
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import Config
from .errors import EnvironmentSetupError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mutation:
    """
    A single altered variant of a subject.

    subject is the subject identification (for example Foo::Bar#baz)
    and code its short code, which --code selects on.
    """

    subject: str
    code: str
    identification: str


@dataclass
class Report:
    killed: int = 0
    alive: List[Mutation] = field(default_factory=list)
    expected_coverage: Optional[float] = None

    @property
    def total(self) -> int:
        return self.killed + len(self.alive)

    @property
    def coverage(self) -> float:
        if not self.total:
            return 100.0
        return 100.0 * self.killed / self.total

    def success(self) -> bool:
        """
        A run succeeds when no mutation survived or, with an expected
        coverage, when that coverage is reached exactly.
        """

        if self.expected_coverage is None:
            return not self.alive
        return self.coverage == self.expected_coverage


def prepare(config: Config) -> None:
    for directory in reversed(config.includes):
        if directory not in sys.path:
            sys.path.insert(0, directory)
    for name in config.requires:
        LOG.debug("requiring %s", name)
        try:
            importlib.import_module(name)
        except ImportError as exc:
            raise EnvironmentSetupError(f"cannot require {name}: {exc}") from exc
    config.integration.setup()


def call(config: Config, mutations: Iterable[Mutation] = ()) -> Report:
    """
    Run the configured integration against the selected mutations.
    """

    if config.zombie:
        LOG.info("running zombified")
    prepare(config)

    report = Report(expected_coverage=config.expected_coverage)
    for mutation in mutations:
        if not config.matcher_config.selects(mutation.subject, mutation.code):
            continue
        if config.integration.kill(mutation):
            report.killed += 1
            continue
        LOG.info("mutation survived: %s", mutation.identification)
        report.alive.append(mutation)
        if config.fail_fast:
            break

    config.reporter.report(report)
    return report
