"""Worker thread for the hashing pool.

Each worker:
1. Pulls a (HashJob, OneShotChannel) pair from the shared work queue
2. Hashes the job
3. Sends the OrderedResult on the job's own channel

Workers finish in any order; the consumer restores input order by
reading the channels in sequence.
"""

import logging
import threading
from queue import Empty, Queue
from typing import Callable

from ..models import HashJob, HashOutcome, OrderedResult

logger = logging.getLogger(__name__)

HashFunc = Callable[[HashJob], HashOutcome]


def worker_thread_main(
    thread_id: int,
    work_queue: Queue,
    hash_func: HashFunc,
    shutdown_event: threading.Event,
) -> None:
    """Main function for a hashing worker thread.

    Runs until it receives a ``None`` sentinel or the shutdown event is
    set. A job whose hashing raises (anything beyond the I/O failures
    hash_func already folds into its outcome) gets its channel closed
    without a value, so the consumer fails loudly instead of waiting.

    Args:
        thread_id: Unique identifier for this worker thread
        work_queue: Queue of (HashJob, OneShotChannel) pairs
        hash_func: Computes the outcome of one job
        shutdown_event: Event to signal shutdown
    """
    logger.debug(f"Worker thread {thread_id} started")

    processed_count = 0
    failed_count = 0
    crashed_count = 0

    while not shutdown_event.is_set():
        try:
            work_item = work_queue.get(timeout=0.1)
        except Empty:
            continue

        if work_item is None:
            logger.debug(f"Worker thread {thread_id} received shutdown sentinel")
            work_queue.task_done()
            break

        job, channel = work_item

        try:
            outcome = hash_func(job)
            channel.send(OrderedResult(job=job, outcome=outcome))
            processed_count += 1
            if not outcome.ok:
                failed_count += 1
        except Exception as e:
            crashed_count += 1
            logger.error(
                f"Worker {thread_id} crashed on job {job.index} ({job.display_name}): {e}",
                exc_info=True
            )
        finally:
            if not channel.completed:
                channel.close()
            work_queue.task_done()

    logger.debug(
        f"Worker thread {thread_id} shutting down "
        f"(processed={processed_count}, failed={failed_count}, crashed={crashed_count})"
    )
