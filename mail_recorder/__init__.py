"""Mail recorder: persist outgoing email through pluggable record factories."""

__version__ = "0.1.0"
