"""ClipFinder: relay uploaded audio clips to ACRCloud for music recognition."""

__version__ = "1.0.0"
