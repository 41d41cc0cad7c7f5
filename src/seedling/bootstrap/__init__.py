"""Bootstrap checklist execution.

Modules:
    steps: Step definitions and the default checklist
    runner: Sequential step runner and results
"""

from .runner import StepResult, StepRunner, failed_required
from .steps import BootstrapStep, default_steps, detect_package_manager

__all__ = [
    "BootstrapStep",
    "StepResult",
    "StepRunner",
    "default_steps",
    "detect_package_manager",
    "failed_required",
]
