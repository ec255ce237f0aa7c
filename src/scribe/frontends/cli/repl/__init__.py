"""Interactive terminal REPL.

Public API:
    run_interactive: Main interactive REPL function
    TranscriptView: Renders engine transcript changes to a console
    build_key_bindings: Up/Down history navigation bindings
"""

from __future__ import annotations

from scribe.frontends.cli.repl.core import build_key_bindings, run_interactive
from scribe.frontends.cli.repl.display import TranscriptView

__all__ = [
    "run_interactive",
    "TranscriptView",
    "build_key_bindings",
]
