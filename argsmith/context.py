# argsmith — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Invocation-scoped state for command actions.

- `ResultsView`: A read-only window onto a `Results` that is only usable while
  the command invocation it was handed to is running.
- `ExecutionContext`: Captures timing, result and exception of one command
  invocation for logging and introspection.
"""
from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict

from argsmith.exceptions import ResultsStateError
from argsmith.parser.grammar import Grammar
from argsmith.parser.results import Results


class ResultsView:
    """
    Read-only proxy for a `Results`, valid only during one command invocation.

    Every accessor raises `ResultsStateError` once `detach()` has been called.
    Nested views returned by `command` share the lifetime of the view that
    produced them.
    """

    __slots__ = ("_results", "_label", "_root", "_attached")

    def __init__(self, results: Results, label: str, root: ResultsView | None = None):
        self._results = results
        self._label = label
        self._root = root
        self._attached = True

    @property
    def attached(self) -> bool:
        if self._root is not None:
            return self._root.attached
        return self._attached

    def detach(self) -> None:
        self._attached = False

    def _resolve(self) -> Results:
        if not self.attached:
            raise ResultsStateError(
                f"{self._label} can only be accessed while Command.run is executing."
            )
        return self._results

    def __getitem__(self, name: str) -> Any:
        return self._resolve()[name]

    def __contains__(self, name: object) -> bool:
        return name in self._resolve()

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolve())

    def flag(self, name: str) -> bool:
        return self._resolve().flag(name)

    def option(self, name: str) -> str | None:
        return self._resolve().option(name)

    def multi_option(self, name: str) -> list[str]:
        return self._resolve().multi_option(name)

    def was_parsed(self, name: str) -> bool:
        return self._resolve().was_parsed(name)

    @property
    def options(self) -> list[str]:
        return self._resolve().options

    @property
    def name(self) -> str | None:
        return self._resolve().name

    @property
    def rest(self) -> list[str]:
        return self._resolve().rest

    @property
    def arguments(self) -> list[str]:
        return self._resolve().arguments

    @property
    def grammar(self) -> Grammar:
        return self._resolve().grammar

    @property
    def command(self) -> ResultsView | None:
        child = self._resolve().command
        if child is None:
            return None
        return ResultsView(child, self._label, root=self._root or self)

    def as_dict(self) -> dict[str, Any]:
        return self._resolve().as_dict()

    def __repr__(self) -> str:
        state = "attached" if self.attached else "detached"
        return f"ResultsView({self._label}, {state})"


class ExecutionContext(BaseModel):
    """
    Runtime metadata for a single command invocation.

    Attributes:
        name (str): Space separated command path, e.g. "git remote add".
        result (Any | None): The value returned by the action.
        exception (BaseException | None): The exception raised by the action.
        start_time (float | None): High-resolution start time.
        end_time (float | None): High-resolution end time.
        start_wall (datetime | None): Wall-clock time the invocation began.
        end_wall (datetime | None): Wall-clock time the invocation ended.
    """

    name: str
    result: Any | None = None
    exception: BaseException | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "result": self.result,
            "exception": repr(self.exception) if self.exception else None,
            "duration": self.duration,
        }

    def to_log_line(self) -> str:
        """Structured flat-line format for logging."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"result={self.result!r} exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        result_str = (
            f"Result: {self.result!r}" if self.success else f"Exception: {self.exception}"
        )
        return (
            f"<ExecutionContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {result_str}>"
        )
