"""Bounded-concurrency fetching of entry points for a gameweek."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable

from .constants import BATCH_TIMEOUT_SECONDS, FETCH_WORKERS

logger = logging.getLogger('fplpairs.points')

PointsFetcher = Callable[[int, int], int]


def fetch_points_batch(
    fetch: PointsFetcher,
    entry_ids: Iterable[int],
    gw: int,
    workers: int = FETCH_WORKERS,
    timeout: float = BATCH_TIMEOUT_SECONDS,
) -> dict[int, int]:
    """
    Fetch points for many entries with a fixed pool of worker threads.

    A failed or unfinished fetch scores 0 for that entry only; the rest of
    the batch is unaffected.

    Args:
        fetch: Callable (entry_id, gw) -> points, e.g. FPLClient.fetch_entry_points
        entry_ids: Entries to fetch; duplicates are fetched once
        gw: Gameweek number
        workers: Pool width
        timeout: Seconds to wait for the whole batch before giving up

    Returns:
        Dict mapping every requested entry id to its points
    """
    unique_ids = list(dict.fromkeys(entry_ids))
    if not unique_ids:
        return {}

    points: dict[int, int] = {}
    executor = ThreadPoolExecutor(
        max_workers=max(1, min(workers, len(unique_ids))), thread_name_prefix='fpl-points'
    )
    try:
        future_to_entry = {
            executor.submit(fetch, entry_id, gw): entry_id for entry_id in unique_ids
        }
        done, not_done = wait(future_to_entry, timeout=timeout)

        for future in done:
            entry_id = future_to_entry[future]
            try:
                points[entry_id] = future.result()
            except Exception as exc:
                logger.warning(f'Points fetch failed for entry {entry_id} GW{gw}: {exc}')
                points[entry_id] = 0

        for future in not_done:
            future.cancel()
            entry_id = future_to_entry[future]
            logger.warning(f'Points fetch timed out for entry {entry_id} GW{gw}')
            points[entry_id] = 0
    finally:
        # Don't block on stragglers past the deadline
        executor.shutdown(wait=False, cancel_futures=True)

    return points
