"""Transforms that turn one source item into one derived artifact."""

from batchctl.transforms.archive import ArchiveTransform
from batchctl.transforms.base import Transform, TransformSpec
from batchctl.transforms.naming import HashNamer
from batchctl.transforms.rename import HashRenameTransform
from batchctl.transforms.transcode import TranscodeTransform

__all__ = [
    "ArchiveTransform",
    "HashNamer",
    "HashRenameTransform",
    "Transform",
    "TransformSpec",
    "TranscodeTransform",
]
