"""アップロード進捗管理"""
import time
import threading


class PartProgress:
    """マルチパートアップロードの完了パート数とバイト数を数える"""

    def __init__(self, total_parts: int, total_size: int, filename: str, enabled: bool = True):
        self.total_parts = total_parts
        self.total_size = total_size
        self.filename = filename
        self.enabled = enabled
        self.completed_parts = 0
        self.uploaded_size = 0
        self.lock = threading.Lock()
        self.start_time = time.time()

    def __call__(self, part_size: int):
        """パート完了時に呼ばれる"""
        with self.lock:
            self.completed_parts += 1
            self.uploaded_size += part_size
            if self.enabled:
                self._display_progress()

    def _display_progress(self):
        """進捗を表示"""
        if self.total_size == 0:
            return

        progress = (self.uploaded_size / self.total_size) * 100
        elapsed_time = time.time() - self.start_time
        speed = self.uploaded_size / elapsed_time / 1024 / 1024 if elapsed_time > 0 else 0  # MB/s

        print(f"\r{self.filename}: {progress:.1f}% "
              f"({self.completed_parts}/{self.total_parts} parts) - {speed:.2f} MB/s",
              end="", flush=True)

    def complete(self):
        """アップロード完了"""
        if not self.enabled:
            return
        elapsed_time = time.time() - self.start_time
        speed = self.total_size / elapsed_time / 1024 / 1024 if elapsed_time > 0 else 0
        print(f"\r{self.filename}: Complete! - {speed:.2f} MB/s - {elapsed_time:.1f}s")
