"""Tests for placeholder validation, context building and path substitution."""

import datetime

import pytest

from seedling import __version__
from seedling.errors import PlaceholderError
from seedling.placeholders import (
    PLACEHOLDERS,
    build_context,
    derive_package_name,
    python_version_matrix,
    substitute,
    validate_description,
    validate_package_name,
    validate_project_name,
    validate_python_version,
)


class TestPlaceholderTable:
    def test_four_placeholders(self):
        names = [p.name for p in PLACEHOLDERS]
        assert names == ["project_name", "package_name", "description", "python_version"]

    def test_only_project_name_required(self):
        required = [p.name for p in PLACEHOLDERS if p.required]
        assert required == ["project_name"]


class TestDerivePackageName:
    @pytest.mark.parametrize(
        "project_name, expected",
        [
            ("my-project", "my_project"),
            ("My-Project", "my_project"),
            ("acme.tools", "acme_tools"),
            ("data pipeline", "data_pipeline"),
            ("already_ok", "already_ok"),
            ("3d-tools", "_3d_tools"),
        ],
    )
    def test_derivation(self, project_name, expected):
        assert derive_package_name(project_name) == expected

    def test_derived_name_is_valid(self):
        assert validate_package_name(derive_package_name("Some.Mixed-Name")) == "some_mixed_name"


class TestValidators:
    def test_project_name_strips_whitespace(self):
        assert validate_project_name("  my-lib ") == "my-lib"

    @pytest.mark.parametrize("bad", ["", "   ", "../escape", "a/b", "a\\b", "-leading", "sp ace"])
    def test_project_name_rejected(self, bad):
        with pytest.raises(PlaceholderError) as exc_info:
            validate_project_name(bad)
        assert exc_info.value.placeholder == "project_name"

    @pytest.mark.parametrize("bad", ["my-lib", "1abc", "class", "MyLib", ""])
    def test_package_name_rejected(self, bad):
        with pytest.raises(PlaceholderError):
            validate_package_name(bad)

    def test_description_single_line(self):
        assert validate_description(" A tool ") == "A tool"
        with pytest.raises(PlaceholderError, match="single line"):
            validate_description("first\nsecond")

    @pytest.mark.parametrize("good", ["3.9", "3.12", "3.13", "3.14"])
    def test_python_version_accepted(self, good):
        assert validate_python_version(good) == good

    @pytest.mark.parametrize("bad", ["3", "3.12.1", "python3.12", "2.7", "3.8", "4.0", ""])
    def test_python_version_rejected(self, bad):
        with pytest.raises(PlaceholderError):
            validate_python_version(bad)

    def test_placeholder_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_python_version("2.7")


class TestPythonVersionMatrix:
    def test_matrix_up_to_latest(self):
        assert python_version_matrix("3.11") == ["3.11", "3.12", "3.13"]

    def test_matrix_for_newer_than_latest(self):
        assert python_version_matrix("3.14") == ["3.14"]


class TestBuildContext:
    def test_minimal_context(self):
        ctx = build_context("my-lib")

        assert ctx["project_name"] == "my-lib"
        assert ctx["package_name"] == "my_lib"
        assert ctx["description"] == "my-lib - a Python project"
        assert ctx["python_version"] == "3.12"
        assert ctx["python_version_nodot"] == "312"
        assert ctx["python_versions"] == ["3.12", "3.13"]
        assert ctx["license"] == "MIT"
        assert ctx["year"] == datetime.date.today().year
        assert ctx["seedling_version"] == __version__

    def test_explicit_values_win(self):
        ctx = build_context(
            "my-lib",
            package_name="core",
            description="Core utilities",
            python_version="3.10",
            defaults={"python_version": "3.11", "license": "Apache-2.0"},
        )
        assert ctx["package_name"] == "core"
        assert ctx["description"] == "Core utilities"
        assert ctx["python_version"] == "3.10"
        assert ctx["license"] == "Apache-2.0"

    def test_defaults_supply_python_version_and_author(self):
        ctx = build_context(
            "my-lib",
            defaults={"python_version": "3.11", "author": "Ada", "author_email": "ada@example.com"},
        )
        assert ctx["python_version"] == "3.11"
        assert ctx["author"] == "Ada"
        assert ctx["author_email"] == "ada@example.com"

    def test_author_falls_back_to_git(self, monkeypatch):
        monkeypatch.setattr(
            "seedling.placeholders.detect_author", lambda: ("Git User", "git@example.com")
        )
        ctx = build_context("my-lib")
        assert ctx["author"] == "Git User"
        assert ctx["author_email"] == "git@example.com"

    def test_extra_values_merged(self):
        ctx = build_context("my-lib", extra={"layout": "cli", "features": []})
        assert ctx["layout"] == "cli"
        assert ctx["features"] == []

    def test_empty_description_allowed(self):
        assert build_context("my-lib", description="")["description"] == ""

    def test_invalid_package_name_rejected(self):
        with pytest.raises(PlaceholderError, match="package name"):
            build_context("my-lib", package_name="Not-Valid")


class TestSubstitute:
    def test_replaces_tokens(self):
        assert substitute("src/{package_name}/__init__.py", {"package_name": "demo"}) == (
            "src/demo/__init__.py"
        )

    def test_multiple_tokens(self):
        text = "{project_name} uses {package_name}"
        assert substitute(text, {"project_name": "a-b", "package_name": "a_b"}) == "a-b uses a_b"

    def test_unknown_token_strict(self):
        with pytest.raises(PlaceholderError) as exc_info:
            substitute("{nope}.txt", {})
        assert exc_info.value.placeholder == "nope"

    def test_unknown_token_lenient(self):
        assert substitute("{nope}.txt", {}, strict=False) == "{nope}.txt"

    def test_text_without_tokens(self):
        assert substitute("README.md", {"package_name": "x"}) == "README.md"
