"""
Pygame Renderer for wave rings

Draws the simulation output only; nothing here feeds back into the physics.

Features:
1. Background fill
2. Wave rings as translucent filled polygons
3. Optional particle markers (free / fixed)
4. Pointer cursor ring
5. Info text lines

Usage:
    from polywave.renderer import Renderer

    renderer = Renderer(window_width=1000, window_height=600)

    # In render loop:
    canvas = renderer.create_canvas()
    for ring in rings:
        renderer.draw_wave(canvas, ring.boundary(), ring.color)
    renderer.draw_cursor(canvas, pointer.position)
"""

import numpy as np
import pygame
from typing import List, Tuple


class Renderer:
    """
    Pygame renderer for wave ring visualization.

    Positions are taken as screen pixels (y down), exactly as the rings were built.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (100, 100, 100)

    BACKGROUND = (37, 47, 61)      # Slate
    CURSOR = (123, 196, 162)       # Mint
    TITLE = (237, 176, 123)        # Peach

    PARTICLE_FREE = (255, 255, 255)
    PARTICLE_FIXED = (209, 96, 96)

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        window_width: int = 1000,
        window_height: int = 600,
        wave_alpha: int = 230,
        cursor_radius: int = 10,
        cursor_width: int = 2,
        particle_size: int = 4,
        font_size_small: int = 18,
    ):
        """
        Initialize the renderer.

        Args:
            window_width: Window width in pixels
            window_height: Window height in pixels
            wave_alpha: Opacity of wave fills (0-255)
            cursor_radius: Cursor circle radius
            cursor_width: Cursor stroke width
            particle_size: Side of the square particle markers
            font_size_small: Font size for info text
        """
        self.window_width = window_width
        self.window_height = window_height
        self.wave_alpha = wave_alpha
        self.cursor_radius = cursor_radius
        self.cursor_width = cursor_width
        self.particle_size = particle_size

        self._font_small = None
        self._font_size_small = font_size_small

    @property
    def font_small(self):
        """Lazy small font initialization."""
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    # ========================================================================
    # CANVAS CREATION
    # ========================================================================

    def create_canvas(self, background_color=None) -> pygame.Surface:
        """
        Create a new canvas (pygame Surface) filled with the background color.

        Args:
            background_color: RGB tuple or None for the default slate

        Returns:
            pygame.Surface
        """
        canvas = pygame.Surface((self.window_width, self.window_height))
        canvas.fill(background_color or self.BACKGROUND)
        return canvas

    # ========================================================================
    # WAVE RENDERING
    # ========================================================================

    def draw_wave(self, canvas: pygame.Surface, positions: np.ndarray, color):
        """
        Fill the closed polygon through ``positions`` with a translucent color.

        Rings with fewer than three points or non-finite coordinates are skipped.

        Args:
            canvas: pygame Surface to draw on
            positions: Array of shape (N, 2) in ring order
            color: Hex string ("#d16060") or RGB tuple
        """
        if len(positions) < 3 or not np.all(np.isfinite(positions)):
            return

        fill = pygame.Color(color)
        fill.a = self.wave_alpha

        layer = pygame.Surface((self.window_width, self.window_height), pygame.SRCALPHA)
        points = [(int(x), int(y)) for x, y in positions]
        pygame.draw.polygon(layer, fill, points)
        canvas.blit(layer, (0, 0))

    def draw_particles(self, canvas: pygame.Surface, positions: np.ndarray, fixed_mask=None):
        """
        Draw particles as small squares; fixed particles in red when a mask is given.

        Args:
            canvas: pygame Surface to draw on
            positions: Array of shape (N, 2)
            fixed_mask: Optional bool array of shape (N,)
        """
        half = self.particle_size // 2
        for i, pos in enumerate(positions):
            if np.isnan(pos[0]) or np.isnan(pos[1]):
                continue

            is_fixed = fixed_mask is not None and fixed_mask[i]
            color = self.PARTICLE_FIXED if is_fixed else self.PARTICLE_FREE
            rect = (int(pos[0]) - half, int(pos[1]) - half, self.particle_size, self.particle_size)
            pygame.draw.rect(canvas, color, rect)

    # ========================================================================
    # CURSOR
    # ========================================================================

    def draw_cursor(self, canvas: pygame.Surface, position):
        """
        Draw the pointer as an outlined circle.

        Args:
            canvas: pygame Surface to draw on
            position: Object with x, y attributes (e.g. Point)
        """
        center = (int(position.x), int(position.y))
        pygame.draw.circle(canvas, self.CURSOR, center, self.cursor_radius, self.cursor_width)

    # ========================================================================
    # UI TEXT
    # ========================================================================

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Tuple[int, int, int]]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 17,
    ):
        """
        Draw multiple lines of info text.

        Args:
            canvas: pygame Surface to draw on
            lines: List of (text, color) tuples
            position: Top-left position
            line_spacing: Vertical spacing between lines
        """
        x, y = position

        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))
