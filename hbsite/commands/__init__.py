"""CLI commands"""

from .build import build_command
from .dist import dist_command
from .verify import verify_command
from .watch import watch_command

__all__ = ["build_command", "dist_command", "verify_command", "watch_command"]
