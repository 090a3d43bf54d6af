import subprocess

import pytest

from mutant import integration
from mutant.env import Mutation
from mutant.errors import EnvironmentSetupError, IntegrationLookupError


def test_resolve_known_integrations():
    assert integration.resolve("null") == integration.Null()
    assert integration.resolve("rspec") == integration.Rspec2()
    assert integration.resolve("rspec") is not integration.resolve("rspec")


def test_resolve_unknown_integration():
    with pytest.raises(IntegrationLookupError) as excinfo:
        integration.resolve("minitest")

    assert "minitest" in str(excinfo.value)
    assert "null, rspec" in str(excinfo.value)


def test_integrations_compare_by_type():
    assert integration.Null() != integration.Rspec2()
    assert repr(integration.Rspec2()) == "Rspec2()"


def test_null_integration_kills_nothing():
    mutation = Mutation(subject="Foo#bar", code="abc", identification="Foo#bar:abc")

    integration.Null().setup()
    assert integration.Null().kill(mutation) is False


def test_rspec_setup_requires_executable(monkeypatch):
    monkeypatch.setattr("mutant.integration.shutil.which", lambda name: None)

    with pytest.raises(EnvironmentSetupError):
        integration.Rspec2().setup()


def test_rspec_kill_reports_failing_suite_as_killed(monkeypatch):
    calls = []

    def fake_run(command, env, **kwargs):
        calls.append((command, env["MUTANT_MUTATION"]))
        return subprocess.CompletedProcess(command, 1, stdout="1 failure", stderr="")

    monkeypatch.setattr("mutant.integration.subprocess.run", fake_run)
    mutation = Mutation(subject="Foo#bar", code="abc", identification="Foo#bar:abc")

    assert integration.Rspec2().kill(mutation) is True
    assert calls == [(["rspec", "--fail-fast"], "Foo#bar:abc")]


def test_rspec_kill_reports_passing_suite_as_alive(monkeypatch):
    monkeypatch.setattr(
        "mutant.integration.subprocess.run",
        lambda command, **kwargs: subprocess.CompletedProcess(command, 0, stdout="", stderr=""),
    )
    mutation = Mutation(subject="Foo#bar", code="abc", identification="Foo#bar:abc")

    assert integration.Rspec2().kill(mutation) is False
