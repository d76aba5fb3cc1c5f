"""Campus Tour - navigation core for a 360° panoramic campus tour."""

__version__ = "0.1.0"
