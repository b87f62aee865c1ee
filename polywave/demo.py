#!/usr/bin/env python3
"""
Wave Demo

Stack of spring-edged waves that ripple as the pointer moves through them.
Until the mouse moves, a scripted sweep drives the pointer up and down the
middle of the window.

Usage:
    polywave-demo
    polywave-demo --waves 6 --resolution 30
    polywave-demo --no-render --steps 600
"""

import argparse

import warp as wp

from .geometry import Bounds
from .models import create_waves, RESOLUTION
from .pointer import Pointer, SweepPath, MOUSE_RADIUS, MOUSE_STRENGTH
from .simulation import Scene


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Spring-mass wave demo")
    parser.add_argument('--waves', type=int, default=4,
                        help='Number of stacked waves (default: 4)')
    parser.add_argument('--resolution', type=float, default=RESOLUTION,
                        help=f'Particle spacing along the wave edge (default: {RESOLUTION})')
    parser.add_argument('--mouse-radius', type=float, default=MOUSE_RADIUS,
                        help=f'Pointer influence radius (default: {MOUSE_RADIUS})')
    parser.add_argument('--mouse-strength', type=float, default=MOUSE_STRENGTH,
                        help=f'Pointer force multiplier (default: {MOUSE_STRENGTH})')
    parser.add_argument('--sweep-period', type=float, default=20.0,
                        help='Frames per radian of the scripted sweep (default: 20)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for per-wave elasticity/damping')
    parser.add_argument('--window-width', type=int, default=1000,
                        help='Window width (default: 1000)')
    parser.add_argument('--window-height', type=int, default=600,
                        help='Window height (default: 600)')
    parser.add_argument('--steps', type=int, default=0,
                        help='Stop after this many frames (default: 0 = run until closed)')
    parser.add_argument('--device', type=str, default='cpu',
                        choices=['cuda', 'cpu'], help='Computation device')
    parser.add_argument('--show-points', action='store_true',
                        help='Draw particle markers on top of the waves')
    parser.add_argument('--no-render', action='store_true',
                        help='Run without visualization')
    return parser.parse_args(argv)


def build_scene(args) -> Scene:
    """Create the waves and a pointer driven by the scripted sweep."""
    bounds = Bounds(0, 0, args.window_width, args.window_height)

    waves = create_waves(
        args.waves,
        bounds,
        seed=args.seed,
        resolution=args.resolution,
        padding=args.resolution,
        device=args.device,
        verbose=True,
    )

    pointer = Pointer(bounds.center.x, bounds.center.y)
    pointer.set_modifier(SweepPath(
        bounds.center.x,
        bounds.center.y,
        amplitude=args.window_height / 4.0,
        period=args.sweep_period,
    ))

    return Scene(waves, pointer, mouse_radius=args.mouse_radius, mouse_strength=args.mouse_strength)


def main(argv=None):
    args = parse_args(argv)

    wp.init()

    print("\n" + "=" * 60)
    print("  WAVES")
    print("=" * 60)
    print(f"Waves: {args.waves}, resolution: {args.resolution}")
    print(f"Pointer: radius={args.mouse_radius}, strength={args.mouse_strength}")
    print("-" * 40)

    scene = build_scene(args)

    if not args.no_render:
        import pygame
        from .renderer import Renderer

        pygame.init()
        screen = pygame.display.set_mode((args.window_width, args.window_height))
        pygame.display.set_caption("Waves")
        clock = pygame.time.Clock()
        renderer = Renderer(window_width=args.window_width, window_height=args.window_height)
        fixed_masks = [ring.fixed_mask() for ring in scene.rings]

        print("Controls:")
        print("  Mouse: push the waves (stops the scripted sweep)")
        print("  R: Reset waves to rest")
        print("  Q/ESC: Quit")
        print("-" * 40 + "\n")

    running = True
    while running and (args.steps <= 0 or scene.tick < args.steps):
        if not args.no_render:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    scene.pointer.record_motion(*event.pos)
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_q, pygame.K_ESCAPE):
                        running = False
                    elif event.key == pygame.K_r:
                        scene.reset()
                        print("Reset waves to rest")

            canvas = renderer.create_canvas()
            for ring, positions, fixed_mask in zip(scene.rings, scene.boundaries(), fixed_masks):
                renderer.draw_wave(canvas, positions, ring.color)
                if args.show_points:
                    renderer.draw_particles(canvas, positions, fixed_mask)
            renderer.draw_cursor(canvas, scene.pointer.position)

            vx, vy = scene.pointer.delta()
            renderer.draw_info_text(canvas, [
                (f"Frame: {scene.tick}", renderer.WHITE),
                (f"Pointer: {scene.pointer.driven_by} | v=({vx:.1f}, {vy:.1f})", renderer.GREY),
            ])

            screen.blit(canvas, (0, 0))
            pygame.display.flip()
            clock.tick(60)

        scene.update()

        if scene.tick % 300 == 0:
            print(f"Frame {scene.tick:5d}: pointer driven by {scene.pointer.driven_by}")

    if not args.no_render:
        pygame.quit()

    print("\nDone!")


if __name__ == "__main__":
    main()
