"""Bundled project templates.

This package contains the files rendered into every generated project.
Files ending in ``.j2`` are Jinja2 templates; everything else is copied
verbatim.

Layout
------
project/
    Files every project receives (pyproject.toml, README.md, CLAUDE.md, ...)
layouts/<name>/
    Source layout overlay. Exactly one is applied per project.
features/<name>/
    Optional overlays (GitHub Actions workflow, pre-commit configuration).

Naming Conventions
------------------
- Output filename = template name without ``.j2``
- ``{placeholder}`` tokens in paths are substituted (``src/{package_name}/``)
- ``gitignore``, ``github`` and ``pre-commit-config.yaml`` are written with a
  leading dot
- ``DESCRIPTION`` holds an overlay's one-line summary and is never written

Template Context
----------------
See :func:`seedling.placeholders.build_context`.
"""
