import io
import sys

import pytest

from mutant import env, expression
from mutant.config import Config
from mutant.errors import EnvironmentSetupError
from mutant.integration import Integration
from mutant.matcher import MatcherConfig
from mutant.reporter import CLIReporter


class _KillByCode(Integration):
    def __init__(self, killed_codes):
        self.killed_codes = killed_codes
        self.seen = []

    def kill(self, mutation):
        self.seen.append(mutation.code)
        return mutation.code in self.killed_codes


def _mutation(subject, code):
    return env.Mutation(subject=subject, code=code, identification=f"{subject}:{code}")


def _config(integration, **overrides):
    values = dict(
        integration=integration,
        reporter=CLIReporter(io.StringIO()),
        matcher_config=MatcherConfig.DEFAULT.update(match_expressions=[expression.parse("Foo*")]),
    )
    values.update(overrides)
    return Config(**values)


def test_report_success_without_expected_coverage():
    assert env.Report(killed=3).success()
    assert not env.Report(killed=3, alive=[_mutation("Foo#bar", "a")]).success()


def test_report_success_requires_exact_expected_coverage():
    alive = [_mutation("Foo#bar", "a")]

    assert env.Report(killed=1, alive=alive, expected_coverage=50.0).success()
    assert not env.Report(killed=3, alive=alive, expected_coverage=50.0).success()
    assert env.Report(killed=4, expected_coverage=100.0).success()


def test_call_kills_selected_mutations_and_reports():
    integration = _KillByCode({"aaa"})
    config = _config(integration)
    mutations = [_mutation("Foo#bar", "aaa"), _mutation("Other#bar", "bbb"), _mutation("Foo#baz", "ccc")]

    report = env.call(config, mutations)

    assert integration.seen == ["aaa", "ccc"]
    assert report.killed == 1
    assert [mutation.code for mutation in report.alive] == ["ccc"]
    assert report.coverage == 50.0
    assert not report.success()
    output = config.reporter.output.getvalue()
    assert "Mutations: 2 Kills: 1 Alive: 1 Coverage: 50.00%" in output
    assert "alive: Foo#baz:ccc" in output


def test_call_stops_at_first_alive_mutation_with_fail_fast():
    integration = _KillByCode(set())
    config = _config(integration, fail_fast=True)

    report = env.call(config, [_mutation("Foo#bar", "aaa"), _mutation("Foo#baz", "bbb")])

    assert integration.seen == ["aaa"]
    assert len(report.alive) == 1


def test_call_without_mutations_succeeds():
    report = env.call(_config(_KillByCode(set())))

    assert report.total == 0
    assert report.success()


def test_prepare_extends_load_path_and_requires_modules(tmp_path, monkeypatch):
    (tmp_path / "mutant_required_fixture.py").write_text("LOADED = True\n")
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.delitem(sys.modules, "mutant_required_fixture", raising=False)

    env.prepare(_config(_KillByCode(set()), includes=(str(tmp_path),), requires=("mutant_required_fixture",)))

    assert sys.path[0] == str(tmp_path)
    assert sys.modules["mutant_required_fixture"].LOADED is True


def test_prepare_rejects_missing_require():
    with pytest.raises(EnvironmentSetupError) as excinfo:
        env.prepare(_config(_KillByCode(set()), requires=("mutant_no_such_module",)))

    assert "mutant_no_such_module" in str(excinfo.value)
