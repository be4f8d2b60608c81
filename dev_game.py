#!/usr/bin/env python3
"""
Development Mode Game Launcher

Plays a generated game locally with keyboard input and flat-colored
rectangles. No asset loading, lighting or server - just the runtime core
with a minimal tile collision stand-in.

Usage:
    # Procedural arena level with a random seed
    python dev_game.py

    # Pick genre and seed
    python dev_game.py --genre maze --seed 42

    # Play a manifest file, or a manifest by slug from a directory
    python dev_game.py manifests/spooky_dungeon.yaml
    python dev_game.py spooky_dungeon --manifests-dir manifests
    python dev_game.py --list --manifests-dir manifests

    # Print the generated level as text and exit
    python dev_game.py --genre platformer --seed 7 --print-level
"""

import argparse
from pathlib import Path
import sys
from typing import Iterable, Mapping, Tuple

import pygame

from models import CollectibleKind, CollectibleSpawn, GameState, LevelDescription, Manifest

from arcadegen import config
from arcadegen.generation import Genre
from arcadegen.logging import close_all_sinks, configure_logging, create_sink, get_logger, register_sink
from arcadegen.manifests import ManifestLoader, SchemaValidationError, load_manifest_file
from arcadegen.movement import InputState
from arcadegen.palette import GamePalette
from arcadegen.session import GameSession, TickResult

log = get_logger('dev_game')

# Half extents of the player and entity boxes, in world units
BODY_HALF = config.TILE_SIZE * 0.4

_COLLECTIBLE_GLYPHS = {
    CollectibleKind.COIN: 'o',
    CollectibleKind.RARE_COIN: '$',
    CollectibleKind.HEALTH: '+',
}


# =============================================================================
# Helpers
# =============================================================================

def input_state_from_keys(pressed: Mapping[int, bool]) -> InputState:
    """Map held keys (arrows, WASD, space) to an InputState."""
    return InputState(
        left=bool(pressed[pygame.K_LEFT] or pressed[pygame.K_a]),
        right=bool(pressed[pygame.K_RIGHT] or pressed[pygame.K_d]),
        up=bool(pressed[pygame.K_UP] or pressed[pygame.K_w]),
        down=bool(pressed[pygame.K_DOWN] or pressed[pygame.K_s]),
        jump=bool(pressed[pygame.K_SPACE]),
    )


def format_level(level: LevelDescription, collectibles: Iterable[CollectibleSpawn] = ()) -> str:
    """Render a level as text: P player, E enemies, o/$/+ pickups."""
    rows = [list(row) for row in level.layout]
    for item in collectibles:
        rows[item.y][item.x] = _COLLECTIBLE_GLYPHS[item.kind]
    for enemy in level.spawn.enemies:
        rows[enemy.y][enemy.x] = 'E'
    rows[level.spawn.player.y][level.spawn.player.x] = 'P'
    return '\n'.join(''.join(row) for row in rows)


def boxes_overlap(ax: float, ay: float, bx: float, by: float, half: float = BODY_HALF) -> bool:
    """True if two equal square boxes centered at a and b overlap."""
    return abs(ax - bx) < half * 2 and abs(ay - by) < half * 2


def _touches_wall(level: LevelDescription, x: float, y: float, tile_size: float) -> bool:
    corners = (
        (x - BODY_HALF, y - BODY_HALF), (x + BODY_HALF, y - BODY_HALF),
        (x - BODY_HALF, y + BODY_HALF), (x + BODY_HALF, y + BODY_HALF),
    )
    for cx, cy in corners:
        tx, ty = int(cx // tile_size), int(cy // tile_size)
        if not level.in_bounds(tx, ty) or level.is_wall(tx, ty):
            return True
    return False


def resolve_walls(session: GameSession, previous: Tuple[float, float]) -> None:
    """Undo the part of this tick's move that entered a wall, then report ground contact."""
    body = session.body
    level = session.level
    size = session.tile_size
    px, py = previous

    if _touches_wall(level, body.x, body.y, size):
        if not _touches_wall(level, px, body.y, size):
            body.x, body.vx = px, 0.0
        elif not _touches_wall(level, body.x, py, size):
            body.y, body.vy = py, 0.0
        else:
            body.x, body.y = px, py
            body.vx, body.vy = 0.0, 0.0

    session.set_player_grounded(_touches_wall(level, body.x, body.y + 1.0, size))


def report_overlaps(session: GameSession, result: TickResult) -> None:
    """Feed enemy and pickup overlaps back into the session."""
    player = result.player_position
    for entity in result.entities:
        if boxes_overlap(player.x, player.y, entity.x, entity.y):
            session.handle_enemy_overlap(entity.id)
    for item in list(session.collectibles.values()):
        center = item.position.to_world(session.tile_size)
        if boxes_overlap(player.x, player.y, center.x, center.y, half=BODY_HALF * 0.75):
            session.handle_collectible_overlap(item.id)


# =============================================================================
# Rendering
# =============================================================================

def render(screen: pygame.Surface, session: GameSession, result: TickResult,
           palette: GamePalette, scale: float, font: pygame.font.Font) -> None:
    screen.fill(palette.background)
    tile = session.tile_size * scale

    level = session.level
    for y, row in enumerate(level.layout):
        for x in range(len(row)):
            color = palette.wall if level.is_wall(x, y) else palette.floor
            pygame.draw.rect(screen, color, pygame.Rect(x * tile, y * tile, tile, tile))

    for item in session.collectibles.values():
        center = item.position.to_world(session.tile_size)
        color = palette.health if item.kind == CollectibleKind.HEALTH else palette.coin
        radius = tile * (0.3 if item.kind == CollectibleKind.RARE_COIN else 0.2)
        pygame.draw.circle(screen, color, (int(center.x * scale), int(center.y * scale)), int(radius))

    half = BODY_HALF * scale
    for entity in result.entities:
        rect = pygame.Rect(entity.x * scale - half, entity.y * scale - half, half * 2, half * 2)
        pygame.draw.rect(screen, palette.enemy, rect)

    pos = result.player_position
    pygame.draw.rect(screen, palette.player,
                     pygame.Rect(pos.x * scale - half, pos.y * scale - half, half * 2, half * 2))

    hud = f"Health: {result.player.health}   Score: {result.player.score}   Seed: {session.seed}"
    screen.blit(font.render(hud, True, palette.player), (8, 8))

    if result.state == GameState.GAME_OVER:
        text = font.render("GAME OVER - press R to restart", True, palette.player)
        screen.blit(text, text.get_rect(center=screen.get_rect().center))


# =============================================================================
# Entry point
# =============================================================================

def _load_manifest(args: argparse.Namespace) -> Manifest:
    if args.manifest is None:
        game_id = args.game_id or f"dev-{args.genre}"
        return Manifest(game_id=game_id, genre=args.genre)

    path = Path(args.manifest)
    if path.suffix in ('.json', '.yaml', '.yml'):
        return load_manifest_file(path)
    return ManifestLoader(args.manifests_dir).load_manifest(args.manifest)


def main() -> int:
    """Main entry point for development game launcher."""
    parser = argparse.ArgumentParser(
        description='Development Mode Game Launcher - play a generated game with the keyboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  Arrows / WASD   move (up or space jumps in platformers)
  R               restart with a new seed
  ESC             quit
        """
    )
    parser.add_argument('manifest', nargs='?', help='Manifest file, or slug in --manifests-dir')
    parser.add_argument('--manifests-dir', default='manifests', help='Directory of manifest files')
    parser.add_argument('--list', '-l', action='store_true', help='List manifests and exit')
    parser.add_argument('--genre', default=Genre.ARENA.value, choices=[g.value for g in Genre],
                        help='Genre when no manifest is given (default: arena)')
    parser.add_argument('--game-id', help='Game id when no manifest is given')
    parser.add_argument('--seed', type=int, help='Level seed (default: random)')
    parser.add_argument('--authored', action='store_true',
                        help="Play the manifest's first authored level instead of generating one")
    parser.add_argument('--print-level', action='store_true', help='Print the level as text and exit')
    parser.add_argument('--scale', type=float, default=0.75, help='Pixels per world unit (default: 0.75)')
    parser.add_argument('--log-level', default='INFO', help='Console log level (default: INFO)')
    parser.add_argument('--record', action='store_true',
                        help='Write session records (level, restart, game over) as JSONL')
    args = parser.parse_args()

    configure_logging(level=args.log_level, record=['session'] if args.record else None)
    register_sink('session', create_sink('session'))

    if args.list:
        loader = ManifestLoader(args.manifests_dir)
        print(f"\nManifests in {loader.manifests_dir}")
        print("=" * 50)
        for slug, info in sorted(loader.get_all_info().items()):
            print(f"  {slug:24} {info.game_id} ({info.genre}, {info.level_count} levels)")
        print()
        return 0

    try:
        manifest = _load_manifest(args)
    except (FileNotFoundError, ValueError, SchemaValidationError) as e:
        print(f"ERROR: Failed to load manifest: {e}")
        return 1

    session = GameSession(manifest, seed=args.seed, procedural=not args.authored)

    if args.print_level:
        print(f"{session.level.id} ({session.genre.value})")
        print(format_level(session.level, session.collectibles.values()))
        close_all_sinks()
        return 0

    pygame.init()
    window = (int(session.world_width * args.scale), int(session.world_height * args.scale))
    screen = pygame.display.set_mode(window)
    pygame.display.set_caption(f"{manifest.game_id} - Development Mode")
    font = pygame.font.Font(None, 24)
    palette = GamePalette(manifest.palette)

    print("=" * 60)
    print(f"Development Mode: {manifest.game_id} ({session.genre.value})")
    print(f"Level: {session.level.id}  Seed: {session.seed}")
    print("=" * 60)

    clock = pygame.time.Clock()
    running = True
    announced_game_over = False

    while running:
        dt = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    seed = session.restart()
                    announced_game_over = False
                    print(f"\n--- RESTARTED (seed {seed}) ---\n")

        previous = (session.body.x, session.body.y)
        result = session.tick(dt, input_state_from_keys(pygame.key.get_pressed()))
        resolve_walls(session, previous)
        report_overlaps(session, result)

        for game_event in result.events:
            log.debug("%s", game_event.model_dump_json())

        if result.state == GameState.GAME_OVER and not announced_game_over:
            announced_game_over = True
            print("\n" + "=" * 60)
            print("GAME OVER!")
            print(f"Final Score: {result.player.score}")
            print("=" * 60)
            print("\nPress R to restart or ESC to quit")

        render(screen, session, result, palette, args.scale, font)
        pygame.display.flip()

    pygame.quit()
    close_all_sinks()
    return 0


if __name__ == "__main__":
    sys.exit(main())
