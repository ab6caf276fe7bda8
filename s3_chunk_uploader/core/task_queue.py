"""同時実行数を制限したタスクキュー"""
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from ..errors import QueueFinalizedError
from ..utils.logger import LoggerManager


T = TypeVar("T")


class QueueOutcome(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class BoundedTaskQueue(Generic[T]):
    """最大 concurrency 個のタスクを並行実行し、結果を投入順に返す

    ワーカースレッドは共有のバックログからカーソル順にタスクを取り出す。
    最初に失敗したタスクの例外で Future を reject し、以降は新しいタスクを開始しない。
    実行中のタスクは最後まで走るが、その結果は捨てられる。
    """

    def __init__(self, concurrency: int, name: str = "task-queue"):
        self.concurrency = concurrency
        self.name = name
        self.logger = LoggerManager.get_logger()

        self._backlog: List[Callable[[], T]] = []
        self._results: List[Optional[T]] = []
        self._cursor = 0
        self._started = 0
        self._in_flight = 0
        self._live_workers = 0
        self._outcome = QueueOutcome.PENDING
        self._lock = threading.Lock()
        self._future: Optional["Future[List[T]]"] = None
        self._workers: List[threading.Thread] = []

    def add(self, task: Callable[[], T]) -> None:
        """引数なしのタスクをバックログに追加"""
        with self._lock:
            if self._future is not None:
                raise QueueFinalizedError(
                    "Attempted to add to a task queue that has already been finalized."
                )
            self._backlog.append(task)

    def execute(self) -> "Future[List[T]]":
        """タスクの実行を開始（2回目以降は同じ Future を返す）"""
        with self._lock:
            if self._future is not None:
                return self._future

            future: "Future[List[T]]" = Future()
            future.set_running_or_notify_cancel()
            self._future = future
            self._results = [None] * len(self._backlog)
            worker_count = max(0, min(self.concurrency, len(self._backlog)))

            if worker_count == 0:
                self._outcome = QueueOutcome.RESOLVED
                self._backlog = []
            else:
                self._live_workers = worker_count

        if worker_count == 0:
            future.set_result([])
            return future

        self.logger.debug(
            f"{self.name}: starting {worker_count} workers for {len(self._results)} tasks"
        )
        for i in range(worker_count):
            worker = threading.Thread(
                target=self._worker, name=f"{self.name}-{i}", daemon=True
            )
            self._workers.append(worker)
            worker.start()

        return future

    def run(self) -> List[T]:
        """実行して結果を待つ"""
        return self.execute().result()

    def join(self, timeout: Optional[float] = None) -> None:
        """全ワーカーの終了を待つ（reject 後も実行中のタスクは最後まで走る）"""
        for worker in list(self._workers):
            worker.join(timeout)

    @property
    def outcome(self) -> QueueOutcome:
        return self._outcome

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def started(self) -> int:
        return self._started

    def _next_task(self):
        """次のタスクを取り出す（ロック内で呼ぶ）"""
        if self._outcome is not QueueOutcome.PENDING or self._cursor >= len(self._backlog):
            return None
        index = self._cursor
        self._cursor += 1
        self._started += 1
        self._in_flight += 1
        return index, self._backlog[index]

    def _worker(self) -> None:
        while True:
            with self._lock:
                item = self._next_task()
                if item is None:
                    self._live_workers -= 1
                    finished = (
                        self._live_workers == 0
                        and self._outcome is QueueOutcome.PENDING
                    )
                    if finished:
                        self._outcome = QueueOutcome.RESOLVED
                        self._backlog = []
                    results = list(self._results)
                    break

            index, task = item
            try:
                result = task()
            except Exception as e:
                if self._reject(e):
                    self.logger.error(f"{self.name}: task {index} failed: {e}")
                    self._future.set_exception(e)
                continue

            with self._lock:
                self._in_flight -= 1
                if self._outcome is QueueOutcome.PENDING:
                    self._results[index] = result

        if finished:
            self._future.set_result(results)

    def _reject(self, error: Exception) -> bool:
        """最初の失敗なら True"""
        with self._lock:
            self._in_flight -= 1
            if self._outcome is not QueueOutcome.PENDING:
                return False
            self._outcome = QueueOutcome.REJECTED
            self._backlog = []
            self._cursor = 0
            return True
