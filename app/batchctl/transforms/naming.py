"""Content-addressed file naming.

Maps a byte stream to a deterministic, filesystem-safe token: a BLAKE3
digest of the full content encoded with the Bitcoin base-58 alphabet
(no padding, none of the ambiguous characters ``0OIl``).
"""

from pathlib import Path
from typing import BinaryIO

import base58
from blake3 import blake3

CHUNK_SIZE = 1024 * 1024


class HashNamer:
    """Computes content fingerprints used as file names.

    Identical content always yields the identical name, so two copies of
    the same file converge on one target path.

    Args:
        chunk_size: Bytes read per iteration; bounds memory for large files.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self._chunk_size = chunk_size

    def name(self, stream: BinaryIO) -> str:
        """Fingerprint a binary stream read to exhaustion.

        Args:
            stream: Readable binary stream.

        Returns:
            Base-58 encoded BLAKE3 digest.
        """
        hasher = blake3()
        while chunk := stream.read(self._chunk_size):
            hasher.update(chunk)
        return base58.b58encode(hasher.digest()).decode("ascii")

    def name_file(self, path: Path) -> str:
        """Fingerprint the content of a file.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(path, "rb") as f:
            return self.name(f)

    def filename_for(self, path: Path) -> str:
        """Build the content-addressed file name for ``path``.

        The original extension is preserved in lower case; a file without
        an extension is named by its fingerprint alone.
        """
        fingerprint = self.name_file(path)
        suffix = path.suffix.lower()
        return f"{fingerprint}{suffix}" if suffix else fingerprint
