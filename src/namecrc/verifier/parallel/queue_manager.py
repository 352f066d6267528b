"""Work queue management for the hashing pool.

The work queue is bounded so the feeder thread blocks instead of
buffering every job up front.
"""

import logging
from queue import Queue
from typing import Optional

logger = logging.getLogger(__name__)


class QueueManager:
    """Creates and tracks the work queue shared by the worker threads.

    Items are ``(HashJob, OneShotChannel)`` pairs, followed by one
    ``None`` sentinel per worker.
    """
    
    def __init__(self, work_queue_maxsize: int = 1000):
        """Initialize queue manager.
        
        Args:
            work_queue_maxsize: Maximum size of work queue (backpressure limit)
        """
        self.work_queue_maxsize = work_queue_maxsize
        self.work_queue: Optional[Queue] = None
        
        logger.debug(f"QueueManager initialized (work_maxsize={work_queue_maxsize})")
    
    def create_queue(self) -> Queue:
        """Create the work queue."""
        self.work_queue = Queue(maxsize=self.work_queue_maxsize)
        return self.work_queue
    
    def get_work_queue_depth(self) -> int:
        """Number of items currently waiting in the work queue."""
        if self.work_queue is None:
            return 0
        return self.work_queue.qsize()
    
    def get_queue_stats(self) -> dict:
        return {
            "work_queue_depth": self.get_work_queue_depth(),
            "work_queue_maxsize": self.work_queue_maxsize,
        }
    
    def shutdown(self) -> None:
        logger.debug("QueueManager shutdown")
        self.work_queue = None
