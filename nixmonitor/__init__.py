"""nixmonitor: live progress display for structured build logs.

Reads a build tool's log stream, in which some lines carry a structured
``@nix {...}`` event (activity start, result, stop, message), and renders
it as a live multi-line display: one line per running build, download or
copy, nested under their group, updating in place.  Plain lines pass
through above the display.
"""

__version__ = "0.1.0"
__description__ = "Live progress display for structured build logs"

from nixmonitor.core.tracker import ActivityTracker
from nixmonitor.protocol.decoder import decode_line

__all__ = ["ActivityTracker", "decode_line", "__version__"]
