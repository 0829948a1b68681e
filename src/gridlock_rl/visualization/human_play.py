from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

import pygame

from gridlock_rl.game import GameConfig, GridlockGame, LevelCatalog, Piece
from gridlock_rl.logging_config import setup_logging
from .renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Gridlock levels with the mouse")
    p.add_argument("--levels", type=str, default=None, help="Level file (blank-line separated grids)")
    p.add_argument("--level", type=int, default=0, help="Index of the first level to play")
    p.add_argument("--progress", type=str, default=None, help="JSON file for solved-level progress")
    p.add_argument("--cell-size", type=int, default=80)
    p.add_argument("--debug", action="store_true")
    return p


def run(game: GridlockGame) -> None:
    renderer = Renderer(cell_size=game.config.cell_size, margin=game.config.margin)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.level))
        font = pygame.font.SysFont(None, 24)

        def set_caption() -> None:
            pygame.display.set_caption(f"Gridlock - level {game.level_index + 1}/{len(game.catalog)}")

        set_caption()

        # Grab state: the cell under the pointer when the drag started (tracks the piece)
        grabbed: Optional[Piece] = None
        grab_cell: Optional[Tuple[int, int]] = None

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    grabbed, grab_cell = None, None
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    if event.key == pygame.K_n:
                        game.next_level()
                    elif event.key == pygame.K_p:
                        game.previous_level()
                    elif event.key == pygame.K_r:
                        game.restart()
                    else:
                        continue
                    screen = pygame.display.set_mode(renderer.window_size(game.level))
                    set_caption()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    grab_cell = renderer.cell_at(*event.pos)
                    grabbed = game.piece_at(*grab_cell)
                    if grabbed is None:
                        grab_cell = None
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    grabbed, grab_cell = None, None
                elif event.type == pygame.MOUSEMOTION:
                    if grabbed is None or grab_cell is None:
                        continue
                    cx, cy = renderer.cell_at(*event.pos)
                    gx, gy = grab_cell
                    # Project the pointer onto the piece axis
                    to = (cx, gy) if grabbed.horizontal else (gx, cy)
                    if to == grab_cell:
                        continue
                    before = (grabbed.x, grabbed.y)
                    game.try_move(gx, gy, *to)
                    grab_cell = (gx + grabbed.x - before[0], gy + grabbed.y - before[1])

            renderer.draw(screen, game.level, selected=grabbed)
            info = f"moves {game.moves}   solved {game.progress.solved_count()}/{len(game.catalog)}"
            screen.blit(font.render(info, True, (230, 230, 230)), (game.config.margin, screen.get_height() - 30))
            if game.solved:
                text = font.render("Solved! N: next level, R: replay", True, (120, 230, 140))
                screen.blit(text, (game.config.margin, 2))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    config = GameConfig(cell_size=args.cell_size, progress_path=args.progress)
    catalog = LevelCatalog.from_file(args.levels, config.main_char) if args.levels else LevelCatalog.default()
    game = GridlockGame(config, catalog)
    game.on_solved(lambda index, g: print(f"Level {index + 1} solved in {g.moves} moves"))
    if args.level:
        game.load_level(args.level)
    run(game)


if __name__ == "__main__":  # pragma: no cover
    main()
