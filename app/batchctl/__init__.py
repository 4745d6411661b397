"""batchctl - safe destructive batch operations on file trees.

Archive, transcode or content-address files in place, deleting each
original only after its artifact has been verified.
"""

__version__ = "0.1.0"
