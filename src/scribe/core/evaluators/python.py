"""Python flavor - evaluates Python in a persistent namespace.

Expressions are evaluated and their repr returned; statements are
executed and whatever they print is returned. Names defined in one
call stay visible in later calls, and the last expression value is
bound to ``_``.

``exit()`` and ``quit()`` raise SystemExit like any other error, so the
session renders them instead of ending the process.

No sandboxing: code runs in-process with full privileges.
"""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from scribe.core.flavor import ReplFlavor, default_format_error

if TYPE_CHECKING:
    from scribe.core.config import ScribeConfig

PYTHON_TITLE = "Python REPL"
PYTHON_PROMPT = ">>>"


def _exit(code: Any = None) -> None:
    # site's exit()/quit() close sys.stdin before raising
    raise SystemExit(code)


def _default_namespace() -> dict[str, Any]:
    return {"__name__": "__scribe_repl__", "exit": _exit, "quit": _exit}


@dataclass
class PythonEvaluator:
    """Evaluates Python source strings.

    State: namespace (shared by every call on this evaluator)
    """

    namespace: dict[str, Any] = field(default_factory=_default_namespace)

    def execute(self, expression: str) -> str:
        """Run ``expression`` and render its result.

        Raises:
            SyntaxError: If the source doesn't compile.
            Exception: Whatever the code itself raises.
        """
        if not expression.strip():
            return ""

        stdout_capture = io.StringIO()
        with redirect_stdout(stdout_capture):
            result = self._run(expression)

        output = stdout_capture.getvalue().rstrip("\n")
        if result is None:
            return output

        self.namespace["_"] = result
        rendered = repr(result)
        return f"{output}\n{rendered}" if output else rendered

    def _run(self, source: str) -> Any:
        try:
            code = compile(source, "<repl>", "eval")
        except SyntaxError:
            # Not an expression - run as statements
            exec(compile(source, "<repl>", "exec"), self.namespace)
            return None
        return eval(code, self.namespace)


def python_flavor(config: ScribeConfig | None = None) -> ReplFlavor:
    """Build the Python REPL flavor."""
    return ReplFlavor(
        evaluator=PythonEvaluator(),
        title=PYTHON_TITLE,
        prompt=PYTHON_PROMPT,
        grammar_name="Python",
        format_error=default_format_error,
    )
