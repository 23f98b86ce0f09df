# logic/scheduling.py

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import date
from typing import Callable, Optional, Sequence

from .engine import find_top_collaboration
from .parser import AssignmentRecord

DEFAULT_DEFER_THRESHOLD = 5000  # records


def should_defer(row_count: int, threshold: Optional[int] = DEFAULT_DEFER_THRESHOLD) -> bool:
    if threshold is None:
        return False
    return row_count > threshold


def submit_analysis(
    records: Sequence[AssignmentRecord],
    today: Optional[date] = None,
    *,
    defer_threshold: Optional[int] = DEFAULT_DEFER_THRESHOLD,
    executor: Optional[Executor] = None,
    log_func: Optional[Callable[[str], None]] = None,
    analysis: Callable = find_top_collaboration,
) -> Future:
    """
    Run ``analysis(records, today, log_func)`` and return a Future for its result.

    Small batches run inline (the returned future is already done). Batches
    above ``defer_threshold`` go to ``executor``, or to a one-off worker
    thread. There is no cancellation once started.
    """
    log = (lambda m: None) if log_func is None else log_func
    today = date.today() if today is None else today

    if not should_defer(len(records), defer_threshold):
        fut: Future = Future()
        try:
            fut.set_result(analysis(records, today, log))
        except Exception as exc:
            fut.set_exception(exc)
        return fut

    log(f"⏳ {len(records)} record(s) > {defer_threshold}: running in a worker thread.")
    if executor is not None:
        return executor.submit(analysis, records, today, log)

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="collab")
    try:
        return pool.submit(analysis, records, today, log)
    finally:
        pool.shutdown(wait=False)
