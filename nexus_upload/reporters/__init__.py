"""Reporter modules for upload progress output."""

from .base import Reporter
from .console import ConsoleReporter

__all__ = ["Reporter", "ConsoleReporter"]
