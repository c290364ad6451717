"""Order-preserving parallel map.

Work is fanned out to a :mod:`concurrent.futures` pool with each input
tagged by its position, collected in completion order, then sorted back into
input order. Ordering never depends on how the pool schedules work.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from operator import itemgetter
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from rotoscale.config import RenderConfig

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _make_pool(max_workers: Optional[int], processes: bool) -> Executor:
    if processes:
        return ProcessPoolExecutor(max_workers=max_workers)
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="rotoscale")


def parallel_map(
    inputs: Iterable[T],
    func: Callable[[T], R],
    *,
    max_workers: Optional[int] = None,
    processes: bool = False,
    config: Optional[RenderConfig] = None,
) -> List[R]:
    """Apply ``func`` to every input concurrently; results keep input order.

    Args:
        inputs: Items to process. Consumed once.
        func: Pure function applied to each item. Must not share mutable state
            across calls.
        max_workers: Pool size. Falls back to ``config.max_workers`` and then
            to the executor's default.
        processes: Use a process pool instead of threads. ``func`` and the
            inputs must then be picklable.
        config: Render settings; read from the environment when omitted and
            ``max_workers`` is None.

    Returns:
        ``[func(x) for x in inputs]``, computed in parallel.

    Raises:
        Whatever the first failing ``func`` call raised. Work not yet started
        is cancelled and no partial results are returned.
    """
    indexed: List[Tuple[int, T]] = list(enumerate(inputs))
    if not indexed:
        return []
    if max_workers is None:
        max_workers = (config or RenderConfig.from_env()).max_workers

    log.debug("parallel_map: %d item(s), max_workers=%s, processes=%s", len(indexed), max_workers, processes)
    results: List[Tuple[int, R]] = []
    with _make_pool(max_workers, processes) as pool:
        futures: Dict[Future, int] = {pool.submit(func, item): index for index, item in indexed}
        try:
            for future in as_completed(futures):
                results.append((futures[future], future.result()))
        except BaseException:
            cancelled = sum(1 for future in futures if future.cancel())
            log.warning(
                "parallel_map aborted after %d of %d item(s); %d pending cancelled",
                len(results), len(indexed), cancelled,
            )
            raise

    results.sort(key=itemgetter(0))
    return [result for _, result in results]
