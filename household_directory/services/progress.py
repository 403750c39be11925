from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Shows row progress while a sheet is normalized. In non-TTY environments
(pipes, CI) the bar is disabled so no control sequences reach the output.
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class RowProgress:
    """Row progress bar for a single ingestion.

    Wrap the row iterable with ``track()``; the bar advances as the consumer
    pulls rows, so the normalizer does not need to know about it.
    """

    def __init__(self, total_rows: int, *, description: str = "Normalizing rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.processed = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def track(self, rows: Iterable[T]) -> Iterator[T]:
        for row in rows:
            yield row
            self.processed += 1
            if self.pbar is not None:
                self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
