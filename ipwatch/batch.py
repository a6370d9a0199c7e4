"""
IPWatch Batch Re-encoder

Re-encodes a batch of images with Pillow, one task per file, on a
bounded pool of worker threads. Small batches run sequentially.
"""

import logging
import os
import queue
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tif", ".tiff", ".webp"}

PIL_FORMATS = {
    "jpg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
}


class BatchError(Exception):
    """Exception raised for invalid batch input."""
    pass


@dataclass
class BatchResult:
    """Outcome of a batch run."""
    total: int
    succeeded: int
    errors: List[Tuple[Path, str]] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    parallel: bool = False
    
    @property
    def failed(self) -> int:
        return len(self.errors)


def collect_images(source: Path, recursive: bool = True) -> List[Path]:
    """Find image files at a path (a single file or a directory)."""
    if not source.exists():
        raise BatchError(f"Source does not exist: {source}")
    
    if source.is_file():
        return [source] if source.suffix.lower() in IMAGE_EXTENSIONS else []
    
    pattern = source.rglob("*") if recursive else source.glob("*")
    return sorted(p for p in pattern if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS)


def reencode_image(
    source_path: Path,
    target_format: str = "jpg",
    quality: int = 85,
    output_dir: Optional[Path] = None,
) -> Path:
    """Re-encode one image. Returns the path written."""
    target_format = target_format.lower()
    if target_format not in PIL_FORMATS:
        raise BatchError(f"Unsupported target format: {target_format}")
    
    destination_dir = output_dir or source_path.parent
    new_path = destination_dir / f"{source_path.stem}.{target_format}"
    
    with Image.open(source_path) as img:
        # JPEG has no alpha channel
        if target_format == "jpg" and img.mode in ("RGBA", "LA", "P"):
            if img.mode == "P":
                img = img.convert("RGBA")
            rgb_img = Image.new("RGB", img.size, (255, 255, 255))
            rgb_img.paste(img, mask=img.split()[-1])
            img = rgb_img
        elif target_format == "jpg" and img.mode != "RGB":
            img = img.convert("RGB")
        
        if target_format == "png":
            img.save(new_path, PIL_FORMATS[target_format], optimize=True)
        else:
            img.save(new_path, PIL_FORMATS[target_format], quality=quality)
    
    return new_path


class BatchProcessor:
    """
    Runs one task per file and collects the results.
    
    Features:
    - Sequential run for batches below parallel_threshold or one worker
    - Fixed pool of worker threads fed from a FIFO queue otherwise
    - Progress counter and error list guarded by a single lock
    """
    
    def __init__(
        self,
        task: Callable[[Path], object],
        max_workers: Optional[int] = None,
        parallel_threshold: int = 2,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Initialize the batch processor.
        
        Args:
            task: Function called once per file; an exception marks it failed
            max_workers: Worker thread count (default: logical CPU count)
            parallel_threshold: Minimum batch size to use worker threads
            on_progress: Optional callback(done, total) after each file
        """
        self.task = task
        self.max_workers = max(1, max_workers or os.cpu_count() or 1)
        self.parallel_threshold = parallel_threshold
        self.on_progress = on_progress
        
        self._lock = threading.Lock()
        self._done = 0
        self._errors: List[Tuple[Path, str]] = []
    
    def _run_one(self, path: Path, total: int) -> None:
        try:
            self.task(path)
            error = None
        except Exception as e:
            error = str(e)
            logger.warning(f"Failed: {path.name}: {e}")
        
        # Progress callbacks run under the lock, in count order
        with self._lock:
            if error is not None:
                self._errors.append((path, error))
            self._done += 1
            if self.on_progress:
                self.on_progress(self._done, total)
    
    def _worker_loop(self, jobs: "queue.Queue[Optional[Path]]", total: int) -> None:
        while True:
            path = jobs.get()
            try:
                if path is None:  # Poison pill
                    break
                self._run_one(path, total)
            finally:
                jobs.task_done()
    
    def run(self, files: List[Path]) -> BatchResult:
        """Process all files and wait for every task to finish."""
        with self._lock:
            self._done = 0
            self._errors = []
        
        total = len(files)
        parallel = self.max_workers > 1 and total >= self.parallel_threshold
        started = time.monotonic()
        
        if parallel:
            worker_count = min(self.max_workers, total)
            jobs: "queue.Queue[Optional[Path]]" = queue.Queue()
            for path in files:
                jobs.put(path)
            
            workers = []
            for i in range(worker_count):
                jobs.put(None)
                worker = threading.Thread(
                    target=self._worker_loop,
                    args=(jobs, total),
                    name=f"BatchWorker-{i}",
                    daemon=True
                )
                worker.start()
                workers.append(worker)
            
            for worker in workers:
                worker.join()
            logger.debug(f"Ran {total} task(s) on {worker_count} worker(s)")
        else:
            for path in files:
                self._run_one(path, total)
        
        elapsed = time.monotonic() - started
        with self._lock:
            errors = list(self._errors)
        
        result = BatchResult(
            total=total,
            succeeded=total - len(errors),
            errors=errors,
            elapsed_seconds=elapsed,
            parallel=parallel,
        )
        logger.info(f"Batch finished: {result.succeeded}/{total} succeeded in {elapsed:.1f}s")
        return result
