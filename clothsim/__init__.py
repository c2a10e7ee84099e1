"""2D cloth simulation with position-based dynamics and spatial hashing."""

__version__ = "0.1.0"