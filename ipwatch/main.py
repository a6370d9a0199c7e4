"""
IPWatch - IP Address Change Monitor

Entry point for the application. Supports:
- check:    one-shot check, suitable for a scheduled task
- show:     newest recorded snapshot
- history:  list of recorded snapshots
- watch:    daemon mode, checks on an interval until stopped
- reencode: batch image re-encoding
"""

import argparse
import logging
import signal
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .batch import BatchError, BatchProcessor, collect_images, reencode_image
from .config import Config, load_config, validate_config
from .history import LogStoreError
from .monitor import IPMonitor
from .network import SnapshotError

__version__ = "1.0.0"

logger = logging.getLogger("ipwatch")

EXIT_CHANGED = 0
EXIT_UNCHANGED = 1
EXIT_ERROR = 2


def setup_logging(config: Config, quiet: bool = False) -> None:
    """Configure logging based on config. Quiet mode logs to file only."""
    log_format = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    
    handlers: List[logging.Handler] = []
    if not quiet:
        handlers.append(logging.StreamHandler(sys.stdout))
    
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    
    if not handlers:
        handlers.append(logging.NullHandler())
    
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
        force=True
    )


class IPWatch:
    """Main application class."""
    
    def __init__(self, config: Config):
        self.config = config
        self.running = False
        self.last_check: Optional[datetime] = None
    
    def _monitor(self) -> IPMonitor:
        """Fresh monitor for each operation."""
        return IPMonitor.from_config(self.config)
    
    def run_check(self, show_current: bool, show_change: bool, silent: bool) -> int:
        """Run a single check. Returns the process exit code."""
        try:
            changed = self._monitor().check_and_record(
                show_current=show_current,
                show_change=show_change,
                silent=silent
            )
        except (SnapshotError, LogStoreError) as e:
            logger.error(str(e))
            return EXIT_ERROR
        
        return EXIT_CHANGED if changed else EXIT_UNCHANGED
    
    def run_show(self) -> int:
        self._monitor().show_latest()
        return 0
    
    def run_history(self, limit: int) -> int:
        try:
            self._monitor().show_history(limit)
        except LogStoreError as e:
            logger.error(str(e))
            return EXIT_ERROR
        return 0
    
    def run_watch(self) -> int:
        """Check on an interval until SIGINT/SIGTERM."""
        self.running = True
        
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)
        
        logger.info(f"Watching for IP changes every {self.config.watch_interval_minutes} min "
                    f"(history: {self.config.history_path})")
        
        while self.running:
            try:
                self._watch_tick(datetime.now())
            except Exception as e:
                logger.error(f"Watch error: {e}")
            time.sleep(1)
        
        logger.info("Watch stopped")
        return 0
    
    def _watch_tick(self, now: datetime) -> None:
        """Run one check if the interval has elapsed."""
        if not self._should_check(now):
            return
        self.last_check = now
        if self._monitor().check_and_record(silent=True):
            logger.info("IP configuration changed")

    def _should_check(self, now: datetime) -> bool:
        """Check if the watch interval has elapsed."""
        if self.last_check is None:
            return True  # First check
        
        elapsed = (now - self.last_check).total_seconds() / 60
        return elapsed >= self.config.watch_interval_minutes
    
    def _signal_handler(self, signum, frame) -> None:
        """Handle shutdown signals."""
        logger.info("Shutdown signal received")
        self.running = False
    
    def run_reencode(self, source: Path, target_format: str, quality: int,
                     workers: Optional[int], output_dir: Optional[Path]) -> int:
        """Re-encode every image under source."""
        try:
            files = collect_images(source)
        except BatchError as e:
            logger.error(str(e))
            return EXIT_ERROR
        
        if not files:
            print(f"No images found in {source}")
            return 0
        
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)
        
        def task(path: Path) -> Path:
            return reencode_image(path, target_format, quality, output_dir)
        
        def progress(done: int, total: int) -> None:
            print(f"\r  {done}/{total} processed", end="", flush=True)
        
        processor = BatchProcessor(task, max_workers=workers, on_progress=progress)
        result = processor.run(files)
        print()
        
        print(f"Re-encoded {result.succeeded}/{result.total} image(s) in {result.elapsed_seconds:.1f}s")
        for path, error in result.errors:
            print(f"  ❌ {path}: {error}")
        
        return 0 if not result.errors else EXIT_ERROR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="IPWatch - IP address change monitor"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"IPWatch {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    check = subparsers.add_parser("check", help="Check for IP changes and record them")
    check.add_argument("--show-current", action="store_true", help="Print the current addresses")
    check.add_argument("--show-change", action="store_true", help="Print the result and newest entry")
    check.add_argument("--silent", action="store_true", help="No console output")
    
    subparsers.add_parser("show", help="Show the newest recorded snapshot")
    
    history = subparsers.add_parser("history", help="List recorded snapshots")
    history.add_argument("--limit", "-n", type=int, default=10, help="Entries to show (default 10)")
    
    subparsers.add_parser("watch", help="Check repeatedly until stopped")
    
    reencode = subparsers.add_parser("reencode", help="Re-encode images in a file or directory")
    reencode.add_argument("source", type=Path, help="Image file or directory")
    reencode.add_argument("--format", "-f", dest="target_format", choices=["jpg", "png", "webp"], default="jpg")
    reencode.add_argument("--quality", "-q", type=int, default=85, help="JPEG/WebP quality (default 85)")
    reencode.add_argument("--workers", "-w", type=int, default=None, help="Worker threads (default: CPU count)")
    reencode.add_argument("--output", "-o", type=Path, default=None, help="Output directory")
    
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    
    # Load configuration
    config = load_config()
    
    # Setup logging
    setup_logging(config, quiet=getattr(args, "silent", False))
    
    # Validate configuration
    if not validate_config(config):
        sys.exit(EXIT_ERROR)
    
    app = IPWatch(config)
    
    if args.command == "check":
        code = app.run_check(args.show_current, args.show_change, args.silent)
    elif args.command == "show":
        code = app.run_show()
    elif args.command == "history":
        code = app.run_history(args.limit)
    elif args.command == "watch":
        code = app.run_watch()
    else:
        code = app.run_reencode(args.source, args.target_format, args.quality, args.workers, args.output)
    
    sys.exit(code)


if __name__ == "__main__":
    main()
