"""oncomerge: mutation merge-and-classify core for cancer genomics portals."""

__version__ = "0.1.0"
