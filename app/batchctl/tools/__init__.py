"""External tool resolution."""

from batchctl.tools.locator import FFMPEG, SEVEN_ZIP, ToolBinding, ToolLocator, ToolSpec

__all__ = ["FFMPEG", "SEVEN_ZIP", "ToolBinding", "ToolLocator", "ToolSpec"]
