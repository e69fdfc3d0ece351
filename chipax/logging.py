"""Console output for Chipax.

``ConsoleLogger`` prints levelled, timestamped messages for the interpreter
and the frontend. ``FrameProgress`` drives a tqdm bar from inside a jitted
frame scan through io_callback.
"""

import sys
import time

import jax
from jax.experimental import io_callback
from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "ERROR", "CRITICAL")

COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Console logger with levels, colors and run-relative timestamps."""

    def __init__(self, name: str = "Chipax", log_level: str = "INFO", use_colors: bool = True):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.use_colors = use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.start_time = time.time()

    def log(self, level: str, message: str):
        """Print ``message`` if ``level`` is at or above the configured level."""
        if LEVELS.index(level) < LEVELS.index(self.log_level):
            return
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{COLORS[level]}{level_str}{RESET}"
        print(f"[{time.time() - self.start_time:8.2f}s]{level_str}[{self.name}] {message}", flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class FrameProgress:
    """tqdm bar for a scan over ``num_frames`` frames.

    Call the instance with the frame number inside the scanned step. The bar
    opens on frame 0, moves in chunks of up to 50 frames and is topped up and
    closed on the last frame.
    """

    def __init__(self, num_frames: int, desc: str = None):
        self.num_frames = num_frames
        self.desc = desc or f"Running ({num_frames:,} frames)"
        self.chunk = max(1, min(num_frames // 20, 50))
        self.bar = None

    def _open(self):
        self.bar = tqdm(total=self.num_frames, desc=self.desc, unit="frame")

    def _advance(self):
        self.bar.update(self.chunk)

    def _close(self):
        self.bar.update(self.num_frames - self.bar.n)
        self.bar.close()

    def __call__(self, frame):
        last = self.num_frames - 1
        _ = jax.lax.cond(
            frame == 0,
            lambda _: io_callback(self._open, None, ordered=True),
            lambda _: None,
            operand=None,
        )
        _ = jax.lax.cond(
            ((frame + 1) % self.chunk == 0) & (frame < last),
            lambda _: io_callback(self._advance, None, ordered=True),
            lambda _: None,
            operand=None,
        )
        _ = jax.lax.cond(
            frame == last,
            lambda _: io_callback(self._close, None, ordered=True),
            lambda _: None,
            operand=None,
        )
