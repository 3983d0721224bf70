"""Execution of panel behavior scripts.

A behavior script is the body of a function with exactly two parameters,
`container` and `context`, run in a fresh globals namespace. It may end
with `return <cleanup>` where the cleanup is a zero-argument callable or
an object exposing a callable `cleanup` attribute. Both shapes are
normalized into the `Cleanup` sum type here.
"""

import ast
import builtins
import textwrap
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from unfold.models import Node
from unfold.panels.surface import PanelContainer

_ENTRYPOINT = "__panel_behavior__"


@dataclass(frozen=True)
class PanelContext:
    """Second binding handed to behavior scripts."""

    panel_id: str
    node: Node | None


@dataclass(frozen=True)
class NoCleanup:
    """The script left nothing to tear down."""

    def __call__(self) -> None:
        return None


@dataclass(frozen=True)
class CleanupFn:
    """Teardown callback returned by a script."""

    fn: Callable[[], Any]

    def __call__(self) -> None:
        self.fn()


Cleanup = NoCleanup | CleanupFn

NO_CLEANUP = NoCleanup()


def normalize_cleanup(result: Any) -> Cleanup:
    """Map a script's return value onto the Cleanup type."""
    if callable(result):
        return CleanupFn(result)
    cleanup = getattr(result, "cleanup", None)
    if result is not None and callable(cleanup):
        return CleanupFn(cleanup)
    return NO_CLEANUP


def compile_behavior(source: str, filename: str = "<panel>") -> Callable[[PanelContainer, PanelContext], Any]:
    """Wrap script source into a two-parameter function.

    The parsed statements become the function body as they are, so string
    literals and comments in the script are left untouched.

    Raises:
        SyntaxError: If the source does not compile
    """
    module = ast.parse(textwrap.dedent(source), filename=filename)
    wrapper = ast.parse(f"def {_ENTRYPOINT}(container, context):\n    pass\n", filename=filename)
    wrapper.body[0].body = module.body or [ast.Pass()]
    ast.fix_missing_locations(wrapper)

    code = compile(wrapper, filename, "exec")
    namespace: dict[str, Any] = {"__builtins__": builtins, "__name__": f"panel:{filename}"}
    exec(code, namespace)
    return namespace[_ENTRYPOINT]


def run_behavior(
    source: str,
    container: PanelContainer,
    context: PanelContext,
    filename: str = "<panel>",
) -> Cleanup:
    """Compile and run a behavior script against a mounted container.

    Exceptions raised by the script propagate to the caller.
    """
    behavior = compile_behavior(source, filename)
    return normalize_cleanup(behavior(container, context))
