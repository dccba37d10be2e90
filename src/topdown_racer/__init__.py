"""Top-down racing game core: track model, car physics, AI and race progress."""

__version__ = "0.1.0"
