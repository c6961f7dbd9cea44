"""End-to-end tests for the `strata chain` and `strata get` commands."""

import json

import pytest

from strata.entrypoints.cli.main import strata

# pylint: disable=unused-argument

pytestmark = [pytest.mark.e2e]


def invoke(runner, base_args, *args, env=None):
    return runner.invoke(strata, [*base_args, *args], env=env)


def test_chain_lists_sources_in_lookup_order(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "chain",
        "--config-dir",
        str(config_dir),
        "-n",
        "application",
        "-n",
        "db",
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "1. StrataPropertySources",
        "   - application",
        "   - db",
        "2. systemProperties",
        "3. systemEnvironment",
    ]


def test_chain_with_bootstrap_phase(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "chain",
        "--config-dir",
        str(config_dir),
        "-n",
        "application",
        "-D",
        "strata.bootstrap.enabled",
        "-D",
        "strata.bootstrap.namespaces=infra,db",
    )
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[:5] == [
        "1. StrataBootstrapPropertySources",
        "   - infra",
        "   - db",
        "2. StrataPropertySources",
        "   - application",
    ]


def test_chain_reads_config_dir_from_environment(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "chain",
        "-n",
        "db",
        env={"STRATA_CONFIG_DIR": str(config_dir)},
    )
    assert result.exit_code == 0, result.output
    assert "   - db" in result.stdout


def test_get_single_key(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "get",
        "--config-dir",
        str(config_dir),
        "-n",
        "application",
        "timeout",
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "timeout=30\t(StrataPropertySources/application)"


def test_get_reports_first_namespace_that_defines_key(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "get",
        "--config-dir",
        str(config_dir),
        "-n",
        "db",
        "-n",
        "application",
        "timeout",
        "server.port",
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "timeout=5\t(StrataPropertySources/db)",
        "server.port=8080\t(StrataPropertySources/application)",
    ]


def test_get_with_override_off_prefers_system_properties(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "get",
        "--config-dir",
        str(config_dir),
        "-n",
        "application",
        "-D",
        "strata.override-system-properties=false",
        "-D",
        "timeout=99",
        "timeout",
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "timeout=99\t(systemProperties)"


def test_get_missing_key_exits_non_zero(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "get",
        "--config-dir",
        str(config_dir),
        "-n",
        "application",
        "timeout",
        "nope",
    )
    assert result.exit_code == 1
    assert "timeout=30" in result.stdout
    assert "nope is not defined" in result.stderr


def test_unknown_namespace_is_reported(runner, base_args, config_dir):
    result = invoke(
        runner, base_args, "chain", "--config-dir", str(config_dir), "-n", "missing"
    )
    assert result.exit_code == 1
    assert "Namespace 'missing' not found" in result.stderr


def test_unresolvable_namespace_placeholder_is_reported(runner, base_args, config_dir):
    result = invoke(
        runner, base_args, "chain", "--config-dir", str(config_dir), "-n", "${app.ns}"
    )
    assert result.exit_code == 1
    assert "app.ns" in result.stderr


def test_namespace_placeholder_resolves_from_define(runner, base_args, config_dir):
    result = invoke(
        runner,
        base_args,
        "get",
        "--config-dir",
        str(config_dir),
        "-n",
        "${app.ns}",
        "-D",
        "app.ns=infra",
        "region",
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "region=eu-west\t(StrataPropertySources/infra)"


def test_invalid_namespace_file_is_reported(runner, base_args, tmp_path):
    bad = tmp_path / "conf"
    bad.mkdir()
    (bad / "application.json").write_text(json.dumps([1, 2]), encoding="utf-8")
    result = invoke(
        runner, base_args, "chain", "--config-dir", str(bad), "-n", "application"
    )
    assert result.exit_code == 1
    assert "must contain a JSON object" in result.stderr


def test_missing_config_dir_is_a_usage_error(runner, base_args, tmp_path):
    missing = str(tmp_path / "nope")
    result = invoke(
        runner, base_args, "chain", "--config-dir", missing, "-n", "application"
    )
    assert result.exit_code == 2
