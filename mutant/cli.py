"""
Command-line interface for mutant.

This module is responsible for argument parsing and for mapping the
outcome of a run to a process exit code. Parsing never prints and never
exits: --help and --version produce a Terminate outcome and the caller
decides what to do with it.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple, Union

from . import __version__
from . import env as default_env
from . import expression, integration
from .config import Config, ConfigBuilder
from .errors import CLIError, ExpressionError, IntegrationLookupError, MutantError
from .logging_utils import configure_logging

LOG = logging.getLogger(__name__)

USAGE = "usage: mutant [options] MATCH_EXPRESSION ..."
SUMMARY_WIDTH = 32
SUMMARY_INDENT = "    "


@dataclass(frozen=True)
class Terminate:
    """Outcome of flags that print a message and end the process."""

    message: str
    code: int = 0


@dataclass(frozen=True)
class Option:
    section: str
    flags: Tuple[str, ...]
    help: str
    apply: Callable[[ConfigBuilder, Optional[str]], Optional[Terminate]]
    metavar: Optional[str] = None

    @property
    def dest(self) -> str:
        return self.flags[-1].lstrip("-").replace("-", "_")

    @property
    def terminates(self) -> bool:
        return self.dest in ("help", "version")

    def summary(self) -> str:
        if len(self.flags) > 1:
            label = ", ".join(self.flags)
        else:
            label = f"    {self.flags[0]}"
        if self.metavar:
            label = f"{label} {self.metavar}"
        return f"{SUMMARY_INDENT}{label:<{SUMMARY_WIDTH}} {self.help}"


def _parse_expression(text: str) -> expression.Expression:
    try:
        return expression.parse(text)
    except ExpressionError as exc:
        raise CLIError(str(exc)) from None


def _set(name: str, value) -> Callable[[ConfigBuilder, Optional[str]], None]:
    def apply(builder: ConfigBuilder, _argument: Optional[str]) -> None:
        setattr(builder, name, value)

    return apply


def _score(builder: ConfigBuilder, argument: Optional[str]) -> None:
    try:
        coverage = float(argument)
    except ValueError:
        raise CLIError("invalid option: --score") from None
    if not (math.isfinite(coverage) and 0 <= coverage <= 100):
        raise CLIError("invalid option: --score")
    builder.expected_coverage = coverage


def _use(builder: ConfigBuilder, argument: Optional[str]) -> None:
    try:
        builder.integration = integration.resolve(argument)
    except IntegrationLookupError as exc:
        LOG.debug("%s", exc)
        raise CLIError(f"invalid option: --use {argument}") from None


OPTIONS: Tuple[Option, ...] = (
    Option("Environment", ("--zombie",), "Run mutant zombified", _set("zombie", True)),
    Option(
        "Environment",
        ("-I", "--include"),
        "Add DIRECTORY to $LOAD_PATH",
        lambda builder, argument: builder.includes.append(argument),
        metavar="DIRECTORY",
    ),
    Option(
        "Environment",
        ("-r", "--require"),
        "Require file with NAME",
        lambda builder, argument: builder.requires.append(argument),
        metavar="NAME",
    ),
    Option(
        "Options",
        ("--score",),
        "Fail unless COVERAGE is not reached exactly",
        _score,
        metavar="COVERAGE",
    ),
    Option("Options", ("--use",), "Use STRATEGY for killing mutations", _use, metavar="STRATEGY"),
    Option(
        "Options",
        ("--ignore-subject",),
        "Ignore subjects that match PATTERN",
        lambda builder, argument: builder.subject_ignores.append(_parse_expression(argument)),
        metavar="PATTERN",
    ),
    Option(
        "Options",
        ("--code",),
        "Scope execution to subjects with CODE",
        lambda builder, argument: builder.subject_selects.append(("code", argument)),
        metavar="CODE",
    ),
    Option("Options", ("--fail-fast",), "Fail fast", _set("fail_fast", True)),
    Option(
        "Options",
        ("--version",),
        "Print mutants version",
        lambda builder, argument: Terminate(f"mutant-{__version__}"),
    ),
    Option("Options", ("-d", "--debug"), "Enable debugging output", _set("debug", True)),
    Option(
        "Options",
        ("-h", "--help"),
        "Show this message",
        lambda builder, argument: Terminate(format_help()),
    ),
)

FLAGS: Dict[str, Option] = {flag: option for option in OPTIONS for flag in option.flags}


def format_help() -> str:
    lines = [USAGE]
    section = None
    for option in OPTIONS:
        if option.section != section:
            if section is not None:
                lines.append("")
            section = option.section
            lines.append(f"{section}:")
        lines.append(option.summary())
    return "\n".join(lines)


class _Apply(argparse.Action):
    """Feed one flag into the ConfigBuilder carried by the namespace."""

    def __init__(self, option_strings, dest, option: Option, **kwargs) -> None:
        self.option = option
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        if namespace.terminate is not None:
            return
        namespace.terminate = self.option.apply(namespace.builder, values)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise CLIError(message)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="mutant",
        usage=USAGE,
        add_help=False,
        allow_abbrev=False,
        exit_on_error=False,
    )
    for option in OPTIONS:
        parser.add_argument(
            *option.flags,
            dest=option.dest,
            action=_Apply,
            option=option,
            nargs=None if option.metavar else 0,
            metavar=option.metavar,
            default=argparse.SUPPRESS,
            help=option.help,
        )
    return parser


def _is_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def _attach(option: Option, value: str) -> str:
    return f"{option.flags[-1]}={value}"


def _normalize(arguments: Sequence[str]) -> List[str]:
    """
    Rewrite the line so every flag argument is attached to its long flag.

    A flag that takes an argument consumes the next token whatever it
    looks like, so argparse never has to guess. Unknown flags, needless
    arguments and flags at the end of the line without their argument
    raise CLIError. Everything after --help or --version is dropped.
    """

    tokens: List[str] = []
    index = 0
    while index < len(arguments):
        token = arguments[index]
        index += 1
        if token == "--":
            tokens.extend(arguments[index - 1:])
            break
        if not _is_flag(token):
            tokens.append(token)
            continue

        if token.startswith("--"):
            name, separator, value = token.partition("=")
            option = FLAGS.get(name)
            if option is None:
                raise CLIError(f"invalid option: {token}")
            if option.metavar is None:
                if separator:
                    raise CLIError(f"needless argument: {token}")
                tokens.append(name)
            elif separator:
                tokens.append(_attach(option, value))
            elif index < len(arguments):
                tokens.append(_attach(option, arguments[index]))
                index += 1
            else:
                raise CLIError(f"missing argument: {token}")
            if option.terminates:
                return tokens
            continue

        for position in range(1, len(token)):
            flag = f"-{token[position]}"
            option = FLAGS.get(flag)
            if option is None:
                raise CLIError(f"invalid option: {flag}")
            if option.metavar is None:
                tokens.append(option.flags[-1])
                if option.terminates:
                    return tokens
                continue
            value = token[position + 1:]
            if not value:
                if index == len(arguments):
                    raise CLIError(f"missing argument: {flag}")
                value = arguments[index]
                index += 1
            tokens.append(_attach(option, value))
            break
    return tokens


def parse(arguments: Sequence[str]) -> Union[Config, Terminate]:
    """
    Turn raw arguments into a Config.

    Raises CLIError on unknown flags, missing flag arguments and when no
    match expression is given. --help and --version return a Terminate
    instead; the first of them on the line wins.
    """

    namespace = argparse.Namespace(builder=ConfigBuilder(), terminate=None)
    try:
        _, positionals = build_arg_parser().parse_known_args(_normalize(arguments), namespace)
    except argparse.ArgumentError as exc:
        raise CLIError(str(exc)) from None

    if namespace.terminate is not None:
        return namespace.terminate

    builder = namespace.builder
    if "--" in positionals:
        positionals.remove("--")
    builder.match_expressions.extend(_parse_expression(text) for text in positionals)
    if not builder.match_expressions:
        raise CLIError("No expressions given")

    return builder.freeze()


def run(
    arguments: Sequence[str],
    env=default_env,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Parse arguments, hand the config to the environment and map the
    report to an exit code: 0 on success, 1 otherwise.
    """

    outcome = parse(arguments)
    if isinstance(outcome, Terminate):
        print(outcome.message, file=stdout if stdout is not None else sys.stdout)
        return outcome.code

    configure_logging(debug=outcome.debug)
    LOG.debug("running with %s", outcome)

    report = env.call(outcome)
    return 0 if report.success() else 1


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return run(sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except MutantError as exc:
        print(f"mutant: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
