"""
Configuration model for mutant.

The CLI accumulates flags into a ConfigBuilder during the parse pass and
freezes it into a Config, which is then handed to the execution
environment. A Config is never modified after it has been built.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .expression import Expression
from .integration import Integration, Null
from .matcher import MatcherConfig, SubjectSelect
from .reporter import CLIReporter


@dataclass(frozen=True)
class Config:
    """
    Top-level configuration for a mutant run.
    """

    integration: Integration = field(default_factory=Null)
    reporter: CLIReporter = field(default_factory=lambda: CLIReporter(sys.stdout))
    matcher_config: MatcherConfig = MatcherConfig.DEFAULT
    includes: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    expected_coverage: Optional[float] = None
    fail_fast: bool = False
    debug: bool = False
    zombie: bool = False


@dataclass
class ConfigBuilder:
    """Mutable accumulator used while arguments are being consumed."""

    integration: Integration = field(default_factory=Null)
    reporter: CLIReporter = field(default_factory=lambda: CLIReporter(sys.stdout))
    match_expressions: List[Expression] = field(default_factory=list)
    subject_ignores: List[Expression] = field(default_factory=list)
    subject_selects: List[SubjectSelect] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    requires: List[str] = field(default_factory=list)
    expected_coverage: Optional[float] = None
    fail_fast: bool = False
    debug: bool = False
    zombie: bool = False

    def freeze(self) -> Config:
        matcher_config = MatcherConfig.DEFAULT.update(
            match_expressions=self.match_expressions,
            subject_ignores=self.subject_ignores,
            subject_selects=self.subject_selects,
        )
        return Config(
            integration=self.integration,
            reporter=self.reporter,
            matcher_config=matcher_config,
            includes=tuple(self.includes),
            requires=tuple(self.requires),
            expected_coverage=self.expected_coverage,
            fail_fast=self.fail_fast,
            debug=self.debug,
            zombie=self.zombie,
        )
