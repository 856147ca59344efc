"""
Wall-clock timing for solver stages.

analyze() and posthoc() time their stages (validate, decompose, posthoc)
and store the breakdown in Result.timing, keyed by stage name, next to
the overall 'total_seconds'.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Stage timer for one solver call.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('validate'):
            design = AnovaDesign.for_matrix(matrix, 'RBD')
        with timer.section('decompose'):
            params, warnings = decompose(design)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.0004, 'validate': 0.0001, 'decompose': 0.0003}

    A stage entered more than once accumulates; a stage that raises is
    still recorded.
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under `name`."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - began
            )

    def result(self) -> dict[str, float]:
        """
        Timing breakdown: 'total_seconds' followed by each stage.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a whole block.

    Usage:
        with timed() as timer:
            result = analyze(matrix, design='CRD')
        print(f"{timer.result()['total_seconds']:.6f}s")
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
