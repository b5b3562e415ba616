"""
=============================================================================
THREAD POOL
=============================================================================

A fixed set of worker threads pulling connection tasks from one queue.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        Thread Pool                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   submit(func, args)                                                 │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌───────────────────────────────┐                                  │
    │   │  Task Queue (bounded)         │  full + block=False → rejected  │
    │   └───────────────┬───────────────┘                                  │
    │        ┌──────────┼──────────┐                                       │
    │        ▼          ▼          ▼                                       │
    │   Worker-0    Worker-1    Worker-N   (min_workers .. max_workers)   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The pool starts `min_workers` threads. When every worker is busy and work
is still queued, submit() adds one more, up to `max_workers`.

Shutdown uses poison pills: one None per worker. A worker that pulls None
leaves its loop.

=============================================================================
INTERVIEW QUESTIONS ABOUT THREAD POOLS
=============================================================================

Q: "Why a bounded queue?"
A: "An unbounded queue turns overload into unbounded memory growth and
   unbounded latency. A bounded queue lets the server say 503 early."

Q: "Python has a GIL. Why threads at all?"
A: "The GIL is released during blocking I/O (recv, send, file reads).
   An HTTP server spends most of its time there."

=============================================================================
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


logger = logging.getLogger(__name__)


class WorkerState(Enum):
    IDLE = "idle"
    BUSY = "busy"
    STOPPED = "stopped"


@dataclass
class Task:
    """A deferred call: func(*args, **kwargs)."""

    func: Callable[..., Any]
    args: tuple = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)


class Worker(threading.Thread):
    """Pulls tasks until it receives a poison pill (None)."""

    def __init__(self, task_queue: "queue.Queue[Optional[Task]]", worker_id: int, idle_timeout: float = 1.0):
        super().__init__(name=f"Worker-{worker_id}", daemon=True)
        self.task_queue = task_queue
        self.worker_id = worker_id
        self.idle_timeout = idle_timeout

        self.state = WorkerState.IDLE
        self._stop_requested = threading.Event()

    def run(self):
        logger.debug(f"Worker {self.worker_id} started")

        while not self._stop_requested.is_set():
            try:
                task = self.task_queue.get(timeout=self.idle_timeout)
            except queue.Empty:
                continue

            try:
                if task is None:
                    break
                self._execute(task)
            finally:
                self.task_queue.task_done()

        self.state = WorkerState.STOPPED
        logger.debug(f"Worker {self.worker_id} stopped")

    def _execute(self, task: Task):
        self.state = WorkerState.BUSY
        start = time.time()

        try:
            task.func(*task.args, **task.kwargs)
            logger.debug(f"Worker {self.worker_id} completed task in {time.time() - start:.3f}s")
        except Exception as e:
            # One bad task must not take the worker down with it
            logger.exception(f"Worker {self.worker_id} task failed: {e}")
        finally:
            self.state = WorkerState.IDLE

    def stop(self):
        self._stop_requested.set()


class ThreadPool:
    """
    Bounded pool of Worker threads.

    Usage:
        pool = ThreadPool(min_workers=2, max_workers=8)
        pool.start()
        accepted = pool.submit(handle, args=(conn,), block=False)
        pool.shutdown()
    """

    def __init__(self, min_workers: int = 4, max_workers: int = 16, queue_size: int = 100,
                 idle_timeout: float = 1.0):
        if min_workers < 1:
            raise ValueError("min_workers must be >= 1")
        if max_workers < min_workers:
            raise ValueError("max_workers must be >= min_workers")

        self.min_workers = min_workers
        self.max_workers = max_workers
        self.idle_timeout = idle_timeout

        self._task_queue: "queue.Queue[Optional[Task]]" = queue.Queue(maxsize=queue_size)
        self._workers: List[Worker] = []
        self._lock = threading.Lock()
        self._next_worker_id = 0
        self._started = False
        self._shutting_down = False

    @property
    def is_running(self) -> bool:
        return self._started and not self._shutting_down

    def start(self):
        if self._started:
            return

        logger.info(f"Starting thread pool with {self.min_workers} workers")
        with self._lock:
            for _ in range(self.min_workers):
                self._spawn_worker()
        self._started = True

    def _spawn_worker(self) -> Worker:
        # Caller holds self._lock
        worker = Worker(self._task_queue, self._next_worker_id, self.idle_timeout)
        self._next_worker_id += 1
        self._workers.append(worker)
        worker.start()
        return worker

    def submit(self, func: Callable[..., Any], args: tuple = (), kwargs: Optional[dict] = None,
               block: bool = True, queue_timeout: Optional[float] = None) -> bool:
        """
        Queue func(*args, **kwargs).

        Returns:
            True if queued, False if the queue was full.

        Raises:
            RuntimeError: Pool not started or shutting down.
        """
        if not self._started:
            raise RuntimeError("Thread pool not started")
        if self._shutting_down:
            raise RuntimeError("Thread pool is shutting down")

        task = Task(func=func, args=args, kwargs=kwargs or {})
        try:
            self._task_queue.put(task, block=block, timeout=queue_timeout)
        except queue.Full:
            return False

        self._maybe_scale_up()
        return True

    def _maybe_scale_up(self):
        with self._lock:
            total = len(self._workers)
            busy = sum(1 for w in self._workers if w.state == WorkerState.BUSY)
            if busy == total and total < self.max_workers and self._task_queue.qsize() > 0:
                logger.debug(f"Scaling up: {total} -> {total + 1} workers")
                self._spawn_worker()

    def shutdown(self, wait: bool = True, timeout: float = 5.0):
        """
        Stop all workers.

        Args:
            wait: Let queued tasks finish (up to `timeout` seconds) first.
            timeout: Upper bound on the drain wait.
        """
        if not self._started:
            return

        logger.info("Shutting down thread pool...")
        self._shutting_down = True

        if wait:
            deadline = time.time() + timeout
            while self._task_queue.unfinished_tasks and time.time() < deadline:
                time.sleep(0.05)

        with self._lock:
            workers = list(self._workers)
            self._workers.clear()

        for _ in workers:
            try:
                self._task_queue.put(None, block=False)
            except queue.Full:
                break  # workers also stop on their own via stop()

        for worker in workers:
            worker.stop()
            worker.join(timeout=2.0)

        self._started = False
        self._shutting_down = False
        logger.info("Thread pool shutdown complete")
