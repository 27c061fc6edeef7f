"""Build and decode SPUD binary files: type tags, a builder and a decoder."""

__version__ = "0.1.0"
__all__ = ["builder", "decoder", "types"]