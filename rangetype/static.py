"""Check range literals in Python source without running it.

Python evaluates nothing at build time, so a `construct(300, 0, 255)` in a
module only fails once that line executes. This checker parses source files
and applies the same interval rules to every call whose arguments are
integer literals, so an out-of-range literal can fail a build or CI step
instead of a running program.

Recognized forms:
- `construct(value, low, high)` and `try_construct(value, low, high)`
- `Interval(low=..., high=...)`
- `RangeType(low, high)`, and `Name(value)` where `Name` was assigned a
  literal `RangeType(...)`
- the predefined machine types (`UINT8(256)`), but only when imported from
  `rangetype` (`from rangetype import UINT8` or `rangetype.UINT8`)

Anything that is not a literal is left to the run-time check. Bindings are
tracked per module by name only; scopes and reassignment are not followed.
"""

import ast
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from rangetype.errors import OutOfRange, RangeTypeError
from rangetype.interval import Interval
from rangetype.types import MACHINE_TYPES
from rangetype.util import is_integer

logger = logging.getLogger(__name__)

CONSTRUCTORS = {"construct", "try_construct"}


@dataclass(frozen=True, kw_only=True)
class Violation:
    filename: str
    line: int
    col: int
    kind: str
    message: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.col}: {self.kind}: {self.message}"


def _literal_int(node: ast.expr | None) -> int | None:
    """Return the integer a literal expression denotes, or None."""
    if isinstance(node, ast.Constant) and is_integer(node.value):
        return node.value
    if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
        inner = _literal_int(node.operand)
        if inner is None:
            return None
        return -inner if isinstance(node.op, ast.USub) else inner
    return None


def _callee_name(call: ast.Call) -> str | None:
    if isinstance(call.func, ast.Name):
        return call.func.id
    if isinstance(call.func, ast.Attribute):
        return call.func.attr
    return None


def _argument(call: ast.Call, index: int | None, keyword: str) -> ast.expr | None:
    """Find an argument by position or keyword; None if it can't be pinned down."""
    if any(isinstance(arg, ast.Starred) for arg in call.args):
        return None
    if index is not None and index < len(call.args):
        return call.args[index]
    for kw in call.keywords:
        if kw.arg == keyword:
            return kw.value
    return None


def _interval_error(low: int, high: int) -> RangeTypeError | None:
    try:
        Interval(low=low, high=high)
    except RangeTypeError as e:
        return e
    return None


def _membership_error(value: int, interval: Interval) -> RangeTypeError | None:
    if value in interval:
        return None
    return OutOfRange(value, interval)


def _literal_bounds(
    call: ast.Call, low_index: int | None, high_index: int | None
) -> tuple[int, int] | None:
    low = _literal_int(_argument(call, low_index, "low"))
    high = _literal_int(_argument(call, high_index, "high"))
    if low is None or high is None:
        return None
    return low, high


def _is_rangetype_module(name: str | None) -> bool:
    return name == "rangetype" or (name or "").startswith("rangetype.")


def _collect_modules(tree: ast.AST) -> set[str]:
    """Names the `rangetype` package itself is bound to (`import rangetype as rt`)."""
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == "rangetype":
                    modules.add(alias.asname or alias.name)
    return modules


def _collect_bindings(tree: ast.AST) -> dict[str, Interval]:
    """Map names bound to a known range type to its interval.

    Covers literal `RangeType(low, high)` assignments and machine types
    imported from `rangetype`.
    """
    bindings: dict[str, Interval] = {}
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and _is_rangetype_module(node.module):
            for alias in node.names:
                if alias.name in MACHINE_TYPES:
                    bindings[alias.asname or alias.name] = MACHINE_TYPES[alias.name].interval
            continue
        if isinstance(node, ast.Assign) and len(node.targets) == 1:
            target, value = node.targets[0], node.value
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            target, value = node.target, node.value
        else:
            continue
        if not isinstance(target, ast.Name) or not isinstance(value, ast.Call):
            continue
        if _callee_name(value) != "RangeType":
            continue
        bounds = _literal_bounds(value, 0, 1)
        if bounds is None or _interval_error(*bounds) is not None:
            continue
        bindings[target.id] = Interval(low=bounds[0], high=bounds[1])
    return bindings


class _LiteralChecker(ast.NodeVisitor):
    def __init__(
        self, filename: str, bindings: dict[str, Interval], modules: set[str]
    ):
        self.filename: str = filename
        self.bindings: dict[str, Interval] = bindings
        self.modules: set[str] = modules
        self.violations: list[Violation] = []

    def _report(self, node: ast.expr, error: RangeTypeError) -> None:
        self.violations.append(
            Violation(
                filename=self.filename,
                line=node.lineno,
                col=node.col_offset,
                kind=type(error).__name__,
                message=str(error).splitlines()[0],
            )
        )

    def visit_Call(self, node: ast.Call) -> None:
        name = _callee_name(node)
        if name in CONSTRUCTORS:
            self._check_construct(node)
        elif name == "Interval":
            self._check_interval(node, low_index=None, high_index=None)
        elif name == "RangeType":
            self._check_interval(node, low_index=0, high_index=1)
        elif isinstance(node.func, ast.Name) and name in self.bindings:
            self._check_value(node, self.bindings[name])
        elif self._is_machine_attribute(node.func):
            self._check_value(node, MACHINE_TYPES[node.func.attr].interval)  # type: ignore[attr-defined]
        self.generic_visit(node)

    def _is_machine_attribute(self, func: ast.expr) -> bool:
        return (
            isinstance(func, ast.Attribute)
            and isinstance(func.value, ast.Name)
            and func.value.id in self.modules
            and func.attr in MACHINE_TYPES
        )

    def _check_interval(
        self, node: ast.Call, low_index: int | None, high_index: int | None
    ) -> Interval | None:
        bounds = _literal_bounds(node, low_index, high_index)
        if bounds is None:
            return None
        error = _interval_error(*bounds)
        if error is not None:
            self._report(node, error)
            return None
        return Interval(low=bounds[0], high=bounds[1])

    def _check_construct(self, node: ast.Call) -> None:
        interval = self._check_interval(node, low_index=1, high_index=2)
        if interval is not None:
            self._check_value(node, interval)

    def _check_value(self, node: ast.Call, interval: Interval) -> None:
        value = _literal_int(_argument(node, 0, "value"))
        if value is None:
            return
        error = _membership_error(value, interval)
        if error is not None:
            self._report(node, error)


def check_source(source: str | bytes, filename: str = "<string>") -> list[Violation]:
    """Return every literal range violation found in `source`.

    Bytes are decoded the way the interpreter would, honoring an encoding
    declaration.

    Raises:
        SyntaxError: If `source` is not valid Python
    """
    tree = ast.parse(source, filename=filename)
    checker = _LiteralChecker(filename, _collect_bindings(tree), _collect_modules(tree))
    checker.visit(tree)
    return checker.violations


def check_file(path: str | Path) -> list[Violation]:
    """Check one file.

    A file that can't be read, decoded or parsed is reported as a single
    violation rather than raised.
    """
    path = Path(path)
    logger.debug("checking %s", path)
    try:
        source = path.read_bytes()
    except OSError as e:
        return [_file_violation(path, type(e).__name__, e.strerror or str(e))]
    try:
        return check_source(source, filename=str(path))
    except SyntaxError as e:
        return [
            Violation(
                filename=str(path),
                line=e.lineno or 0,
                col=e.offset or 0,
                kind="SyntaxError",
                message=e.msg,
            )
        ]
    except ValueError as e:
        # undecodable bytes or null bytes, depending on the interpreter
        return [_file_violation(path, type(e).__name__, str(e))]


def _file_violation(path: Path, kind: str, message: str) -> Violation:
    return Violation(filename=str(path), line=0, col=0, kind=kind, message=message)


def iter_python_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Yield the given files, and every `*.py` below the given directories."""
    for path in map(Path, paths):
        if path.is_dir():
            yield from sorted(path.rglob("*.py"))
        else:
            yield path


def check_paths(paths: Iterable[str | Path]) -> list[Violation]:
    violations: list[Violation] = []
    for path in iter_python_files(paths):
        violations.extend(check_file(path))
    return violations
