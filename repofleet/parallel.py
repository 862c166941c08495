"""Fan-out/fan-in execution of per-repository work across a thread pool."""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, Sequence, TypeVar, Union

from .logging import get_logger
from .models import RepoDescriptor

T = TypeVar("T")
S = TypeVar("S")

logger = get_logger("parallel")


@dataclass(frozen=True)
class Success(Generic[T]):
    repo: RepoDescriptor
    value: T


@dataclass(frozen=True)
class Skip:
    repo: RepoDescriptor


@dataclass(frozen=True)
class Failure:
    repo: RepoDescriptor
    message: str
    error: Optional[BaseException] = None


Outcome = Union[Success[T], Skip, Failure]


class SharedState(Generic[S]):
    """Mutable accumulator shared by every unit of work in ``execute_with_state``.

    Work functions hold the lock only while merging their contribution; the
    I/O-bound part of each task runs unlocked.
    """

    def __init__(self, value: S) -> None:
        self._value = value
        self._lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator[S]:
        with self._lock:
            yield self._value

    def update(self, func: Callable[[S], S]) -> None:
        with self._lock:
            self._value = func(self._value)

    def into_inner(self) -> S:
        with self._lock:
            return self._value


class ParallelExecutor:
    """Applies a unit of work to each repository concurrently.

    A work function returns a value to contribute a result, ``None`` to skip
    the repository, or raises to report a failure. Failures are logged with the
    repository slug and never affect sibling work.
    """

    def __init__(
        self,
        repos: Sequence[RepoDescriptor],
        *,
        max_workers: int | None = None,
    ) -> None:
        self._repos = list(repos)
        self._max_workers = max_workers or os.cpu_count() or 1

    @property
    def repos(self) -> List[RepoDescriptor]:
        return list(self._repos)

    def __len__(self) -> int:
        return len(self._repos)

    def is_empty(self) -> bool:
        return not self._repos

    def execute(self, work_fn: Callable[[RepoDescriptor], Optional[T]]) -> List[T]:
        """Collect successful, non-skipped results in completion order."""
        results: List[T] = []
        if not self._repos:
            return results
        with self._pool() as pool:
            futures = [pool.submit(_invoke, work_fn, repo) for repo in self._repos]
            for future in as_completed(futures):
                outcome = future.result()
                if isinstance(outcome, Success):
                    results.append(outcome.value)
        return results

    def execute_all(self, work_fn: Callable[[RepoDescriptor], Optional[T]]) -> List[Outcome[T]]:
        """Return one outcome per repository, in input order."""
        if not self._repos:
            return []
        with self._pool() as pool:
            return list(pool.map(lambda repo: _invoke(work_fn, repo), self._repos))

    def execute_with_state(
        self,
        state: S,
        work_fn: Callable[[RepoDescriptor, SharedState[S]], object],
    ) -> S:
        """Run ``work_fn`` with access to a lock-guarded accumulator and return it."""
        shared = SharedState(state)
        if self._repos:
            with self._pool() as pool:
                futures = [
                    pool.submit(_invoke, lambda repo: work_fn(repo, shared), repo)
                    for repo in self._repos
                ]
                for future in as_completed(futures):
                    future.result()
        return shared.into_inner()

    def _pool(self) -> ThreadPoolExecutor:
        workers = max(1, min(self._max_workers, len(self._repos)))
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="repofleet")


def _invoke(work_fn: Callable[[RepoDescriptor], Optional[T]], repo: RepoDescriptor) -> Outcome[T]:
    try:
        value = work_fn(repo)
    except Exception as exc:
        logger.error("%s: %s", repo.slug, exc)
        logger.debug("Work function failed for %s", repo.slug, exc_info=True)
        return Failure(repo=repo, message=str(exc), error=exc)
    if value is None:
        return Skip(repo=repo)
    return Success(repo=repo, value=value)


__all__ = [
    "Failure",
    "Outcome",
    "ParallelExecutor",
    "SharedState",
    "Skip",
    "Success",
]
