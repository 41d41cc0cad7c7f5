"""Template management for project scaffolding.

This module provides the TemplateManager class which handles:
- Discovery of bundled templates in the seedling package
- Composition of the base project, a source layout and optional features
- Rendering Jinja2 templates with the placeholder context
- Writing the complete project tree to disk
"""

import re
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from seedling.errors import TemplateError
from seedling.placeholders import substitute
from seedling.utils.logger import get_logger

logger = get_logger("templates")

# Path parts renamed on output. Package data cannot reliably ship dotfiles.
DOTFILE_NAMES = {
    "gitignore": ".gitignore",
    "github": ".github",
    "pre-commit-config.yaml": ".pre-commit-config.yaml",
}

# Overlay metadata, never written to the project
IGNORED_NAMES = {"DESCRIPTION", "__pycache__", ".DS_Store"}

# Written as \uXXXX, valid in both TOML basic strings and Python literals
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def escape_quotes(value: Any) -> str:
    """Backslash-escape a value for a double-quoted TOML string or Python docstring."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return _CONTROL_RE.sub(lambda m: f"\\u{ord(m.group()):04x}", escaped)


@dataclass(frozen=True)
class PlannedFile:
    """One file of a planned project.

    Attributes:
        template: Template path relative to the template root (posix style)
        output: Output path relative to the project directory
        rendered: True for Jinja2 templates, False for verbatim copies
    """

    template: str
    output: PurePosixPath
    rendered: bool


class TemplateManager:
    """Manages project templates and scaffolding.

    Templates live in three groups under the template root::

      project/         files every project receives
      layouts/<name>/   source layout (exactly one per project)
      features/<name>/  optional overlays (CI workflow, pre-commit, ...)

    Attributes:
        template_root: Path to the bundled templates directory
        jinja_env: Jinja2 environment for template rendering
    """

    def __init__(self, template_root: Path | None = None):
        """Initialize template manager.

        Args:
            template_root: Alternative template directory (defaults to the
                templates bundled with seedling)
        """
        self.template_root = Path(template_root) if template_root else self._get_template_root()
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_root)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.jinja_env.filters["escape_quotes"] = escape_quotes

    def _get_template_root(self) -> Path:
        """Get path to seedling templates directory.

        Raises:
            RuntimeError: If templates directory cannot be found
        """
        try:
            import seedling.templates

            template_path = Path(seedling.templates.__file__).parent
            if template_path.exists():
                return template_path
        except (ImportError, AttributeError):
            pass

        # Fallback for development: relative to this file
        fallback_path = Path(__file__).parent.parent / "templates"
        if fallback_path.exists():
            return fallback_path

        raise RuntimeError(
            "Could not locate seedling templates directory. Ensure seedling is properly installed."
        )

    def _list_overlays(self, group: str) -> list[str]:
        group_dir = self.template_root / group
        if not group_dir.exists():
            return []
        return sorted(
            d.name for d in group_dir.iterdir() if d.is_dir() and d.name not in IGNORED_NAMES
        )

    def list_layouts(self) -> list[str]:
        """List available source layouts.

        Examples:
            >>> TemplateManager().list_layouts()
            ['cli', 'library']
        """
        return self._list_overlays("layouts")

    def list_features(self) -> list[str]:
        """List available optional features.

        Examples:
            >>> TemplateManager().list_features()
            ['github_actions', 'pre_commit']
        """
        return self._list_overlays("features")

    def describe(self, group: str, name: str) -> str:
        """Return the one-line description of a layout or feature."""
        description_file = self.template_root / group / name / "DESCRIPTION"
        if not description_file.exists():
            return "No description available"
        lines = description_file.read_text(encoding="utf-8").strip().splitlines()
        return lines[0] if lines else "No description available"

    def validate_selection(self, layout: str, features: list[str] | tuple[str, ...]) -> None:
        """Check that a layout and feature list name bundled overlays.

        Raises:
            TemplateError: If the layout or any feature does not exist
        """
        layouts = self.list_layouts()
        if layout not in layouts:
            raise TemplateError(
                f"Layout '{layout}' not found. Available layouts: {', '.join(layouts)}"
            )

        available = self.list_features()
        unknown = [f for f in features if f not in available]
        if unknown:
            raise TemplateError(
                f"Feature(s) not found: {', '.join(unknown)}. "
                f"Available features: {', '.join(available)}"
            )

    def _overlay_dirs(self, layout: str, features: list[str] | tuple[str, ...]) -> list[Path]:
        dirs = [self.template_root / "project", self.template_root / "layouts" / layout]
        dirs.extend(self.template_root / "features" / name for name in features)
        return [d for d in dirs if d.exists()]

    def _iter_overlay(self, overlay_dir: Path):
        """Yield (file, relative posix path) for every template file of an overlay."""
        for template_file in sorted(overlay_dir.rglob("*")):
            if not template_file.is_file():
                continue
            rel_path = PurePosixPath(template_file.relative_to(overlay_dir).as_posix())
            if IGNORED_NAMES.intersection(rel_path.parts) or template_file.suffix == ".pyc":
                continue
            yield template_file, rel_path

    def overlay_files(self, group: str, name: str) -> list[str]:
        """List template files contributed by one layout or feature (relative paths)."""
        overlay_dir = self.template_root / group / name
        if not overlay_dir.is_dir():
            raise TemplateError(f"Unknown {group[:-1]} '{name}'")
        return [str(rel_path) for _, rel_path in self._iter_overlay(overlay_dir)]

    def _output_path(self, rel_path: PurePosixPath, context: dict[str, Any]) -> PurePosixPath:
        parts = []
        for part in rel_path.parts:
            if part.endswith(".j2"):
                part = part[: -len(".j2")]
            part = DOTFILE_NAMES.get(part, part)
            parts.append(substitute(part, context))
        return PurePosixPath(*parts)

    def plan_project(
        self,
        context: dict[str, Any],
        layout: str = "library",
        features: list[str] | tuple[str, ...] = (),
    ) -> list[PlannedFile]:
        """Compute the files a project would receive, without writing anything.

        Overlays are applied in order project -> layout -> features. When two
        overlays produce the same output path the later one wins, keeping the
        position of the first.

        Args:
            context: Template context from :func:`seedling.placeholders.build_context`
            layout: Source layout name
            features: Feature names, in application order

        Returns:
            Ordered list of planned files

        Raises:
            TemplateError: If the layout or a feature is unknown
            PlaceholderError: If a template path uses an unknown placeholder
        """
        self.validate_selection(layout, features)

        planned: dict[PurePosixPath, PlannedFile] = {}
        for overlay_dir in self._overlay_dirs(layout, features):
            for template_file, rel_path in self._iter_overlay(overlay_dir):
                output = self._output_path(rel_path, context)
                planned[output] = PlannedFile(
                    template=template_file.relative_to(self.template_root).as_posix(),
                    output=output,
                    rendered=template_file.suffix == ".j2",
                )

        return list(planned.values())

    def render_template(self, template_path: str, context: dict[str, Any], output_path: Path):
        """Render a single template file.

        Args:
            template_path: Relative path to template within templates directory
            context: Dictionary of variables for template rendering
            output_path: Path where rendered output should be written

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            template = self.jinja_env.get_template(template_path)
            rendered = template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template '{template_path}': {e}") from e

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")

    def create_project(
        self,
        project_name: str,
        output_dir: Path,
        context: dict[str, Any],
        layout: str = "library",
        features: list[str] | tuple[str, ...] = (),
        force: bool = False,
    ) -> Path:
        """Create complete project from templates.

        This is the main entry point for project creation. It:
        1. Validates the layout and features
        2. Creates the project directory
        3. Renders or copies every planned file

        Args:
            project_name: Name of the project directory (e.g., "my-tool")
            output_dir: Parent directory where project will be created
            context: Template context variables
            layout: Source layout to use (default: "library")
            features: Optional features to add
            force: Write into an existing directory, overwriting files

        Returns:
            Path to created project directory

        Raises:
            TemplateError: If a template doesn't exist or project directory exists

        Examples:
            >>> from seedling.placeholders import build_context
            >>> manager = TemplateManager()
            >>> ctx = build_context("my-tool")
            >>> manager.create_project("my-tool", Path("/projects"), ctx)
            PosixPath('/projects/my-tool')
        """
        features = list(features)
        ctx = {**context, "layout": layout, "features": features}
        planned = self.plan_project(ctx, layout, features)

        project_dir = Path(output_dir) / project_name
        if not force and project_dir.exists() and any(project_dir.iterdir()):
            raise TemplateError(
                f"Directory '{project_dir}' already exists. "
                "Please choose a different project name or location."
            )
        project_dir.mkdir(parents=True, exist_ok=True)

        for item in planned:
            output_path = project_dir / Path(*item.output.parts)
            if item.rendered:
                self.render_template(item.template, ctx, output_path)
            else:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy(self.template_root / item.template, output_path)
            logger.debug(f"Wrote {item.output}")

        logger.info(f"Created {len(planned)} files in {project_dir}")
        return project_dir
