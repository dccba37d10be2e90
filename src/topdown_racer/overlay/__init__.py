"""HUD formatting for external renderers."""

from topdown_racer.overlay.renderer import HudData, HudRenderer

__all__ = ["HudData", "HudRenderer"]
