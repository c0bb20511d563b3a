"""media-queue: play queue sequencing with shuffle, repeat and a manual queue."""

__version__ = "0.1.0"
