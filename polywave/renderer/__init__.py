"""
Pygame Renderer for wave rings.

Main classes:
- Renderer: pygame-based drawing of rings, particles and the pointer cursor
"""

from .renderer import Renderer

__all__ = ['Renderer']
