"""Video transcode transform backed by FFmpeg."""

import logging
from pathlib import Path

from batchctl.filesystem.models import FileSystemEntry
from batchctl.models.outcome import FailureKind, OperationOutcome, SkipReason
from batchctl.tools.locator import ToolBinding
from batchctl.transforms.base import Transform
from batchctl.utils.shell import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_EXTENSION = "webm"

# AV1 video + Opus audio, medium quality (CRF 33), medium speed.
DEFAULT_TRANSCODE_PARAMS: tuple[str, ...] = (
    "-c:v", "libaom-av1",
    "-c:a", "libopus",
    "-crf", "33",
    "-b:v", "0",
    "-b:a", "128k",
    "-cpu-used", "4",
    "-threads", "4",
    "-tile-columns", "2",
    "-row-mt", "1",
)  # fmt: skip

DEFAULT_INPUT_EXTENSIONS: tuple[str, ...] = (
    "avi",
    "mov",
    "mts",
    "vob",
    "mpg",
    "mpeg",
    "3gp",
    "wmv",
)


class TranscodeTransform(Transform):
    """Transcodes a video file next to itself with a new extension.

    ``clip.MOV`` becomes ``clip.webm``. The transcoder's exit status alone
    is not trusted: a zero-length or missing output counts as a failure.

    Args:
        tool: Resolved transcoder binding.
        output_extension: Extension of the produced file.
        params: Codec/quality/performance switches placed between input and output.
        runner: Process capability (see :class:`Transform`).
    """

    def __init__(
        self,
        tool: ToolBinding,
        *,
        output_extension: str = DEFAULT_OUTPUT_EXTENSION,
        params: tuple[str, ...] = DEFAULT_TRANSCODE_PARAMS,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(runner)
        self._tool = tool
        self._output_extension = output_extension.lstrip(".").lower()
        self._params = params

    @property
    def name(self) -> str:
        return "transcode"

    @property
    def output_extension(self) -> str:
        return self._output_extension

    def precheck(self, entry: FileSystemEntry) -> OperationOutcome | None:
        if entry.extension == self._output_extension:
            return OperationOutcome.skipped(
                SkipReason.ALREADY_TARGET_FORMAT, artifact_path=entry.path
            )
        return None

    def target_for(self, entry: FileSystemEntry) -> Path:
        return entry.path.with_suffix(f".{self._output_extension}")

    def build_command(self, source: Path, target: Path) -> list[str]:
        """Build the transcoder argument vector (``-y`` overwrites the output)."""
        return [self._tool.executable, "-i", str(source), *self._params, "-y", str(target)]

    def _run(self, entry: FileSystemEntry, target: Path) -> OperationOutcome:
        args = self.build_command(entry.path, target)
        logger.info("Transcoding: %s -> %s", entry.path, target)
        logger.debug("Executing: %s", " ".join(args))
        result = self._runner(args)

        if not result.success:
            message = result.stderr.strip() or f"{self._tool.name} exited with {result.returncode}"
            logger.warning("Transcode failed for %s", entry.path)
            return OperationOutcome.failed(FailureKind.PROCESS_ERROR, message)

        try:
            size = target.stat().st_size
        except FileNotFoundError:
            return OperationOutcome.failed(
                FailureKind.EMPTY_OUTPUT, f"Output file was not created: {target}"
            )

        if size == 0:
            return OperationOutcome.failed(
                FailureKind.EMPTY_OUTPUT, f"Output file is empty: {target}", artifact_path=target
            )

        return OperationOutcome.succeeded(target)
