"""Tests for interactive prompts (questionary is never actually shown)."""

from unittest.mock import MagicMock, patch

from seedling.cli import prompts
from seedling.placeholders import validate_python_version

LAYOUTS = {"library": "Installable library", "cli": "Command-line application"}
FEATURES = {"github_actions": "CI workflow", "pre_commit": "Hooks"}

EMPTY = {
    "project_name": None,
    "package_name": None,
    "description": None,
    "python_version": None,
    "layout": "library",
    "features": ["pre_commit"],
}


def test_validator_adapter():
    validate = prompts._validator(validate_python_version)
    assert validate("3.12") is True
    assert "Unsupported Python version" in validate("3.8")


def test_ask_project_name_uses_questionary():
    question = MagicMock()
    question.ask.return_value = "my-lib"
    with patch("seedling.cli.prompts.questionary.text", return_value=question) as text:
        assert prompts.ask_project_name() == "my-lib"
    assert text.call_args.args[0] == "Project name:"
    assert isinstance(text.call_args.kwargs["validate"]("bad/name"), str)


def test_select_features_preselects_enabled():
    question = MagicMock()
    question.ask.return_value = ["pre_commit"]
    with patch("seedling.cli.prompts.questionary.checkbox", return_value=question) as checkbox:
        assert prompts.select_features(FEATURES, ["pre_commit"]) == ["pre_commit"]

    choices = checkbox.call_args.kwargs["choices"]
    checked = {c.value: c.checked for c in choices}
    assert checked == {"github_actions": False, "pre_commit": True}


def test_prompt_missing_asks_everything():
    with (
        patch.object(prompts, "ask_project_name", return_value="my-lib"),
        patch.object(prompts, "ask_package_name", return_value="my_lib") as ask_package,
        patch.object(prompts, "ask_description", return_value="A library"),
        patch.object(prompts, "ask_python_version", return_value="3.11"),
        patch.object(prompts, "select_layout", return_value="cli"),
        patch.object(prompts, "select_features", return_value=[]),
    ):
        result = prompts.prompt_missing(EMPTY, LAYOUTS, FEATURES)

    ask_package.assert_called_once_with("my-lib")
    assert result == {
        "project_name": "my-lib",
        "package_name": "my_lib",
        "description": "A library",
        "python_version": "3.11",
        "layout": "cli",
        "features": [],
    }


def test_prompt_missing_skips_given_values():
    given = {
        **EMPTY,
        "project_name": "given",
        "package_name": "pkg",
        "description": "d",
        "python_version": "3.12",
    }
    with (
        patch.object(prompts, "ask_project_name") as ask_name,
        patch.object(prompts, "ask_python_version") as ask_version,
        patch.object(prompts, "select_layout", return_value="library"),
        patch.object(prompts, "select_features", return_value=["pre_commit"]),
    ):
        result = prompts.prompt_missing(given, LAYOUTS, FEATURES)

    ask_name.assert_not_called()
    ask_version.assert_not_called()
    assert result["project_name"] == "given"


def test_prompt_missing_cancelled():
    with patch.object(prompts, "ask_project_name", return_value=None):
        assert prompts.prompt_missing(EMPTY, LAYOUTS, FEATURES) is None
