"""Concurrent dispatcher with ordered fan-in.

Coordinates the hashing pool:
- A feeder thread fills the bounded work queue, then adds one sentinel
  per worker
- N worker threads hash jobs in whatever order they pick them up
- The calling thread reads each job's one-shot channel in input order

Output order therefore always matches input order, whichever file
finishes first.
"""

import logging
import threading
from queue import Empty, Full, Queue
from typing import Iterator, List, Optional, Sequence

from .engine import hash_job
from .errors import ChannelClosedError, DispatchError
from .models import HashJob, OrderedResult
from .parallel.channel import OneShotChannel
from .parallel.queue_manager import QueueManager
from .parallel.worker_thread import HashFunc, worker_thread_main

logger = logging.getLogger(__name__)


class OrderedDispatcher:
    """Hashes many jobs in parallel and yields results in input order.

    Configuration:
    - worker_threads: upper bound on pool size (never more than the job count)
    - queue_maxsize: work queue bound for backpressure
    - hash_func: job -> outcome, hash_job unless overridden
    """

    def __init__(
        self,
        worker_threads: int,
        queue_maxsize: int = 1000,
        hash_func: HashFunc = hash_job,
        poll_interval: float = 0.1,
    ):
        if worker_threads < 1:
            raise ValueError(f"worker_threads must be at least 1, got {worker_threads}")
        self.worker_threads = worker_threads
        self.queue_maxsize = queue_maxsize
        self.hash_func = hash_func
        self.poll_interval = poll_interval

        self.queue_manager: Optional[QueueManager] = None
        self.worker_thread_list: List[threading.Thread] = []
        self.feeder_thread: Optional[threading.Thread] = None
        self.shutdown_event: Optional[threading.Event] = None

    def run(self, jobs: Sequence[HashJob]) -> Iterator[OrderedResult]:
        """Hash all jobs and yield one OrderedResult per job, in input order.

        Raises:
            DispatchError: If a job's outcome is lost inside the pool
        """
        jobs = list(jobs)
        if not jobs:
            return

        channels: List[OneShotChannel] = [OneShotChannel() for _ in jobs]
        self._start(jobs, channels)

        try:
            for job, channel in zip(jobs, channels):
                yield self._await_result(job, channel)
        finally:
            self._shutdown()

    def _start(self, jobs: List[HashJob], channels: List[OneShotChannel]) -> None:
        pool_size = min(self.worker_threads, len(jobs))

        self.queue_manager = QueueManager(work_queue_maxsize=self.queue_maxsize)
        work_queue = self.queue_manager.create_queue()
        self.shutdown_event = threading.Event()

        self.worker_thread_list = []
        for thread_id in range(pool_size):
            worker = threading.Thread(
                target=worker_thread_main,
                args=(thread_id, work_queue, self.hash_func, self.shutdown_event),
                name=f"namecrc-worker-{thread_id}",
                daemon=True,
            )
            worker.start()
            self.worker_thread_list.append(worker)

        self.feeder_thread = threading.Thread(
            target=self._feed,
            args=(work_queue, jobs, channels, pool_size),
            name="namecrc-feeder",
            daemon=True,
        )
        self.feeder_thread.start()

        logger.debug(
            f"Dispatching {len(jobs)} jobs: {{'threads': {pool_size}, "
            f"'queue_maxsize': {self.queue_maxsize}}}"
        )

    def _feed(
        self,
        work_queue: Queue,
        jobs: List[HashJob],
        channels: List[OneShotChannel],
        pool_size: int,
    ) -> None:
        """Queue every job, then one sentinel per worker."""
        items = list(zip(jobs, channels)) + [None] * pool_size
        for item in items:
            if not self._put(work_queue, item):
                logger.debug("Feeder stopped early: dispatcher shutting down")
                return
        logger.debug("All jobs queued")

    def _put(self, work_queue: Queue, item) -> bool:
        while not self.shutdown_event.is_set():
            try:
                work_queue.put(item, timeout=self.poll_interval)
                return True
            except Full:
                continue
        return False

    def _await_result(self, job: HashJob, channel: OneShotChannel) -> OrderedResult:
        """Block until the job's channel delivers, failing if it never can."""
        while True:
            try:
                return channel.recv(timeout=self.poll_interval)
            except ChannelClosedError as e:
                raise ChannelClosedError(
                    f"Job {job.index} ({job.display_name}) produced no outcome: {e}",
                    index=job.index,
                    path=job.path,
                ) from e
            except Empty:
                pass

            if any(worker.is_alive() for worker in self.worker_thread_list):
                continue

            # Workers are gone; the value may have landed just before they exited
            try:
                return channel.try_recv()
            except Empty:
                raise DispatchError(
                    f"Job {job.index} ({job.display_name}) was never processed: "
                    f"all worker threads exited",
                    index=job.index,
                    path=job.path,
                )

    def _shutdown(self) -> None:
        """Stop the feeder and workers and wait for them.

        On normal completion every worker has already consumed its
        sentinel; after an early exit, in-flight jobs still run to
        completion before their worker notices the shutdown event.
        """
        self.shutdown_event.set()
        self.feeder_thread.join()
        for worker in self.worker_thread_list:
            worker.join()

        if self.queue_manager is not None:
            logger.debug(f"Queue stats at shutdown: {self.queue_manager.get_queue_stats()}")
            self.queue_manager.shutdown()
        logger.debug("Dispatcher shut down")


def dispatch(
    jobs: Sequence[HashJob],
    worker_threads: int,
    queue_maxsize: int = 1000,
    hash_func: HashFunc = hash_job,
) -> Iterator[OrderedResult]:
    """Hash jobs and yield results in input order.

    Zero or one job is hashed on the calling thread; a pool has nothing
    to overlap there.
    """
    if len(jobs) <= 1:
        for job in jobs:
            yield OrderedResult(job=job, outcome=hash_func(job))
        return

    dispatcher = OrderedDispatcher(
        worker_threads=worker_threads,
        queue_maxsize=queue_maxsize,
        hash_func=hash_func,
    )
    yield from dispatcher.run(jobs)
