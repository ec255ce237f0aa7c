"""CLI frontend for scribe.

Commands:
    scribe repl      Interactive session
    scribe eval      Evaluate one expression
    scribe history   Show or clear persisted command history
    scribe flavors   List REPL flavors

Example:
    $ scribe repl --flavor python
    $ scribe history --last 10
"""

from scribe.frontends.cli.main import main

__all__ = ["main"]
