"""Parallel hashing components.

- Channel: single-use completion signal per job
- Queue manager: bounded work queue
- Worker threads: pull jobs, hash them, send outcomes
"""

from .channel import OneShotChannel
from .queue_manager import QueueManager
from .worker_thread import worker_thread_main

__all__ = [
    "OneShotChannel",
    "QueueManager",
    "worker_thread_main",
]
