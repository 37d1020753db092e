"""
kickstart package

This package implements kickstart as a CLI-first project scaffolder.

Key responsibilities are split across modules:
- `registry.py`: the immutable template registry (loaded from YAML)
- `resolver.py`: template identifier -> local path or remote URL, validated before mutation
- `renderer.py`: non-clobbering copy (or clone) of a template into the target directory
- `metadata.py`: `.gitignore` and `LICENSE` generation
- `vcs.py`: git init / clone / history detaching
- `installer.py`: dependency installation through the project's package manager
- `pipeline.py`: ordered task runner with enabled/skip predicates
- `options.py`: CLI flag parsing and interactive prompts
- `cli.py`: CLI entrypoint and orchestration (options -> resolve -> pipeline)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
