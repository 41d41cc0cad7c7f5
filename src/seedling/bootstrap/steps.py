"""Bootstrap checklist steps.

Each :class:`BootstrapStep` wraps one external command (git, the package
manager, pre-commit, the test runner). Seedling never reimplements what
these tools do; it only decides which commands to run and in what order.

Examples:
    Build the default checklist for a project::

        from seedling.bootstrap.steps import default_steps

        steps = default_steps(ctx, package_manager="uv")
        # [git-init, install, pre-commit, tests]
"""

import os
import shutil
import sys
from dataclasses import dataclass, field
from typing import Any

PACKAGE_MANAGERS = ("uv", "pip")

DEFAULT_TIMEOUT = 600

VENV_DIR = ".venv"

# Tool name -> module name for "python -m"
MODULE_NAMES = {"pre-commit": "pre_commit"}


@dataclass(frozen=True)
class BootstrapStep:
    """One step of the bootstrap checklist.

    Attributes:
        name: Short identifier (e.g. ``"git-init"``)
        description: Human-readable summary shown by the CLI
        command: argv list passed to ``subprocess.run``
        tool: Executable that must be on PATH for the step to run
        required: A failure stops the remaining steps
        remediation: Manual fix shown when the step fails or is skipped
        timeout: Seconds before the command is killed
    """

    name: str
    description: str
    command: list[str] = field(default_factory=list)
    tool: str = ""
    required: bool = True
    remediation: str = ""
    timeout: int = DEFAULT_TIMEOUT

    @property
    def display_command(self) -> str:
        return " ".join(self.command)


def detect_package_manager(preferred: str | None = None) -> str:
    """Choose the package manager used for dependency installation.

    Checks SEEDLING_PACKAGE_MANAGER, then ``preferred``; ``auto`` (or
    nothing) selects uv when it is on PATH and pip otherwise.

    Args:
        preferred: "uv", "pip" or "auto"

    Returns:
        "uv" or "pip"

    Raises:
        ValueError: If an unknown package manager is requested
    """
    choice = (os.environ.get("SEEDLING_PACKAGE_MANAGER") or preferred or "auto").strip().lower()

    if choice in PACKAGE_MANAGERS:
        return choice
    if choice != "auto":
        raise ValueError(
            f"Unknown package manager '{choice}'. Choose one of: auto, {', '.join(PACKAGE_MANAGERS)}"
        )

    return "uv" if shutil.which("uv") else "pip"


def venv_python() -> str:
    """Interpreter of the project virtual environment, relative to the project root."""
    if os.name == "nt":
        return f"{VENV_DIR}\\Scripts\\python.exe"
    return f"{VENV_DIR}/bin/python"


def _tool_command(package_manager: str, tool: str, *args: str) -> list[str]:
    """Command that runs a development tool inside the project environment."""
    if package_manager == "uv":
        return ["uv", "run", tool, *args]
    return [venv_python(), "-m", MODULE_NAMES.get(tool, tool), *args]


def venv_step(timeout: int = DEFAULT_TIMEOUT) -> BootstrapStep:
    return BootstrapStep(
        name="venv",
        description="Create virtual environment",
        command=[sys.executable, "-m", "venv", VENV_DIR],
        tool=sys.executable,
        remediation=(
            f"Run 'python -m venv {VENV_DIR}' from the project root. On Debian/Ubuntu "
            "install the python3-venv package first."
        ),
        timeout=timeout,
    )


def install_step(package_manager: str, timeout: int = DEFAULT_TIMEOUT) -> BootstrapStep:
    if package_manager == "uv":
        return BootstrapStep(
            name="install",
            description="Install project and development dependencies",
            command=["uv", "sync", "--all-extras"],
            tool="uv",
            remediation=(
                "Install uv (https://docs.astral.sh/uv/getting-started/installation/) "
                "or re-run with --package-manager pip. If the Python version is missing, "
                "run 'uv python install <version>'."
            ),
            timeout=timeout,
        )
    # Runs the venv interpreter; the venv step already failed if it is missing
    return BootstrapStep(
        name="install",
        description="Install project and development dependencies",
        command=[venv_python(), "-m", "pip", "install", "-e", ".[dev]"],
        remediation=(
            f"Run '{venv_python()} -m pip install -e \".[dev]\"' from the project root."
        ),
        timeout=timeout,
    )


def default_steps(
    context: dict[str, Any],
    *,
    package_manager: str = "uv",
    git: bool = True,
    install: bool = True,
    hooks: bool = True,
    run_tests: bool = True,
    initial_commit: bool = False,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[BootstrapStep]:
    """Build the ordered bootstrap checklist for a generated project.

    Order: git init, virtual environment (pip only), dependency install,
    pre-commit install, test run, initial commit. Steps are dropped when
    disabled; the pre-commit step additionally requires the ``pre_commit``
    feature in ``context``. With pip, the project gets its own ``.venv`` and
    every later step runs its interpreter. The hook and test steps run inside
    the project environment and are dropped when installation is disabled.

    Args:
        context: Template context (uses ``features``)
        package_manager: "uv" or "pip"
        git: Initialise a git repository
        install: Install dependencies
        hooks: Install pre-commit hooks
        run_tests: Run the generated test suite
        initial_commit: Commit the generated files
        timeout: Per-step timeout in seconds

    Returns:
        Steps in execution order
    """
    if package_manager not in PACKAGE_MANAGERS:
        raise ValueError(f"Unknown package manager '{package_manager}'")

    features = context.get("features") or []
    steps: list[BootstrapStep] = []

    if git:
        steps.append(
            BootstrapStep(
                name="git-init",
                description="Initialise git repository",
                command=["git", "init"],
                tool="git",
                remediation="Install git (https://git-scm.com/downloads) and run 'git init'.",
                timeout=timeout,
            )
        )

    if install:
        if package_manager == "pip":
            steps.append(venv_step(timeout))
        steps.append(install_step(package_manager, timeout))

        tool = "uv" if package_manager == "uv" else ""
        if hooks and "pre_commit" in features:
            hook_command = _tool_command(package_manager, "pre-commit", "install")
            steps.append(
                BootstrapStep(
                    name="pre-commit",
                    description="Install pre-commit hooks",
                    command=hook_command,
                    tool=tool,
                    required=False,
                    remediation=(
                        "Hooks need a git repository. Run 'git init' first, then "
                        f"'{' '.join(hook_command)}'."
                    ),
                    timeout=timeout,
                )
            )

        if run_tests:
            test_command = _tool_command(package_manager, "pytest", "-q")
            steps.append(
                BootstrapStep(
                    name="tests",
                    description="Run the test suite",
                    command=test_command,
                    tool=tool,
                    required=False,
                    remediation=(
                        f"Run '{' '.join(test_command)}' and check the package imports "
                        "from src/ (editable install)."
                    ),
                    timeout=timeout,
                )
            )

    if git and initial_commit:
        steps.append(
            BootstrapStep(
                name="git-add",
                description="Stage generated files",
                command=["git", "add", "-A"],
                tool="git",
                required=False,
                remediation="Run 'git add -A' from the project root.",
                timeout=timeout,
            )
        )
        steps.append(
            BootstrapStep(
                name="git-commit",
                description="Create the initial commit",
                command=["git", "commit", "-m", "Initial commit"],
                tool="git",
                required=False,
                remediation=(
                    "Set your identity with 'git config --global user.name/user.email'. "
                    "If a pre-commit hook modified files, 'git add -A' and commit again."
                ),
                timeout=timeout,
            )
        )

    return steps
