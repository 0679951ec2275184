"""Tests for CLI dispatch, `flagfit expiry issues` and `flagfit config show`."""
from __future__ import annotations

import json
from pathlib import Path

import yaml

from flagfit.cli._dispatcher import build_parser, discover_commands, discover_domains, main

from helpers.records import write_project_config


def test_discovers_domains_and_commands() -> None:
    assert {"expiry", "config"} <= set(discover_domains())
    assert set(discover_commands("expiry")) == {"check", "issues"}
    assert set(discover_commands("config")) == {"show"}


def test_commands_expose_summary_and_handlers() -> None:
    for domain in discover_domains():
        for name, cmd in discover_commands(domain).items():
            assert cmd.summary, f"{domain} {name} has no SUMMARY"
            assert callable(cmd.register_args)
            assert callable(cmd.main)


def test_no_domain_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "flagfit" in capsys.readouterr().out


def test_domain_without_command_prints_domain_help(capsys) -> None:
    assert main(["expiry"]) == 0
    assert "check" in capsys.readouterr().out


def test_parser_builds() -> None:
    args = build_parser().parse_args(["expiry", "issues", "--json"])
    assert args.json is True


def test_issues_json(capsys) -> None:
    assert main(["expiry", "issues", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert [i["id"] for i in payload["issues"]] == [
        "FlagfitDeadlineExpired",
        "FlagfitDeadlineSoon",
        "FlagfitIllegalNoExpireParam",
    ]


def test_issues_text(capsys) -> None:
    assert main(["expiry", "issues", "--verbose"]) == 0
    out = capsys.readouterr().out

    assert "FlagfitIllegalNoExpireParam (error, priority 4)" in out
    assert "options: timeZone, currentTime" in out
    assert "explanation:" in out


def test_config_show_section_json(capsys, isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "expiry", {"expiry": {"warningWindowDays": 10}})

    assert main(["config", "show", "--section", "expiry.warningWindowDays", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {"expiry": {"warningWindowDays": 10}}


def test_config_show_yaml(capsys, isolated_project_env: Path) -> None:
    assert main(["config", "show", "--repo-root", str(isolated_project_env)]) == 0

    shown = yaml.safe_load(capsys.readouterr().out)
    assert shown["expiry"]["failOn"] == "error"
    assert shown["logging"]["stdlib"]["enabled"] is False


def test_config_show_null_value_is_found(capsys, isolated_project_env: Path) -> None:
    assert main(["config", "show", "--section", "expiry.timeZone", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {"expiry": {"timeZone": None}}


def test_config_show_missing_key(capsys, isolated_project_env: Path) -> None:
    assert main(["config", "show", "--section", "expiry.nope"]) == 1
    assert "Key not found: expiry.nope" in capsys.readouterr().err


def test_config_show_invalid_config(capsys, isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "expiry", {"expiry": {"failOn": "sometimes"}})

    assert main(["config", "show", "--json"]) == 2
    assert json.loads(capsys.readouterr().err)["error"] == "config_show_error"
    assert main(["config", "show", "--json", "--no-validate"]) == 0
