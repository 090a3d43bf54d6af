"""
Test-framework integrations.

An integration decides whether a mutation is killed by the project's
test suite. Integrations are selected on the command line by name
through the registry below; the Null integration is the default and
kills nothing.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Callable, Dict, List, Tuple

from .errors import EnvironmentSetupError, IntegrationLookupError

LOG = logging.getLogger(__name__)


class Integration:
    """
    Base class for integrations.

    Integrations carry no state of their own, so two instances of the
    same class compare equal.
    """

    name = "base"

    def setup(self) -> None:
        """Prepare the integration before the first mutation is checked."""

    def kill(self, mutation) -> bool:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Null(Integration):
    name = "null"

    def kill(self, mutation) -> bool:
        return False


class Rspec2(Integration):
    """
    Run the rspec suite once per mutation.

    The mutation identification is handed to the test process through
    the MUTANT_MUTATION environment variable; activating the mutation is
    up to the test process. Any failing suite counts as a kill.
    """

    name = "rspec"
    command: Tuple[str, ...] = ("rspec", "--fail-fast")

    def setup(self) -> None:
        if shutil.which(self.command[0]) is None:
            raise EnvironmentSetupError(f"{self.command[0]} executable not found on PATH")

    def kill(self, mutation) -> bool:
        result = self._run(mutation.identification)
        LOG.debug("rspec exited with %d for %s", result.returncode, mutation.identification)
        return result.returncode != 0

    def _run(self, identification: str) -> subprocess.CompletedProcess[str]:
        env = os.environ.copy()
        env["MUTANT_MUTATION"] = identification
        return subprocess.run(
            list(self.command),
            env=env,
            text=True,
            capture_output=True,
            check=False,
        )


REGISTRY: Dict[str, Callable[[], Integration]] = {
    Null.name: Null,
    Rspec2.name: Rspec2,
}


def names() -> List[str]:
    return sorted(REGISTRY)


def resolve(name: str) -> Integration:
    """Build the integration registered under name."""

    try:
        factory = REGISTRY[name]
    except KeyError:
        raise IntegrationLookupError(
            f"unknown integration {name!r} (available: {', '.join(names())})"
        ) from None
    return factory()
