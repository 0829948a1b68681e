from __future__ import annotations

from typing import Optional, Tuple

import pygame

from gridlock_rl.game import ExitEdge, Level, Piece


def _color_for_piece(idx: int, piece: Piece) -> Tuple[int, int, int]:
    if piece.main:
        return (220, 40, 40)
    palette = [
        (0, 170, 220),
        (240, 200, 0),
        (160, 90, 230),
        (0, 190, 110),
        (240, 140, 0),
        (60, 90, 230),
        (200, 100, 160),
        (120, 160, 60),
    ]
    return palette[idx % len(palette)]


class Renderer:
    def __init__(self, cell_size: int = 80, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, level: Level) -> Tuple[int, int]:
        side = level.n * self.cell_size + self.margin * 2
        return side, side + self.margin * 2

    def cell_at(self, px: int, py: int) -> Tuple[int, int]:
        """Pixel position -> grid cell (may lie outside the board)."""
        return (px - self.margin) // self.cell_size, (py - self.margin) // self.cell_size

    def _draw_exit(self, screen: pygame.Surface, level: Level) -> None:
        main = level.main_piece
        board = level.n * self.cell_size
        thickness = max(4, self.margin // 3)
        if level.exit is ExitEdge.RIGHT:
            rect = pygame.Rect(self.margin + board, self.margin + main.y * self.cell_size, thickness, self.cell_size)
        elif level.exit is ExitEdge.LEFT:
            rect = pygame.Rect(self.margin - thickness, self.margin + main.y * self.cell_size, thickness, self.cell_size)
        elif level.exit is ExitEdge.TOP:
            rect = pygame.Rect(self.margin + main.x * self.cell_size, self.margin - thickness, self.cell_size, thickness)
        else:
            rect = pygame.Rect(self.margin + main.x * self.cell_size, self.margin + board, self.cell_size, thickness)
        pygame.draw.rect(screen, (240, 240, 240), rect)

    def draw(self, screen: pygame.Surface, level: Level, selected: Optional[Piece] = None) -> None:
        screen.fill((10, 10, 14))
        board = level.n * self.cell_size
        pygame.draw.rect(screen, (30, 30, 36), pygame.Rect(self.margin, self.margin, board, board))
        for y in range(level.n):
            for x in range(level.n):
                rect = pygame.Rect(
                    self.margin + x * self.cell_size,
                    self.margin + y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(screen, (40, 40, 48), rect, 1)
        self._draw_exit(screen, level)

        inset = max(2, self.cell_size // 10)
        for idx, piece in enumerate(level.pieces):
            w = piece.size if piece.horizontal else 1
            h = 1 if piece.horizontal else piece.size
            rect = pygame.Rect(
                self.margin + piece.x * self.cell_size + inset,
                self.margin + piece.y * self.cell_size + inset,
                w * self.cell_size - 2 * inset,
                h * self.cell_size - 2 * inset,
            )
            pygame.draw.rect(screen, _color_for_piece(idx, piece), rect, border_radius=inset)
            if piece is selected:
                pygame.draw.rect(screen, (255, 255, 255), rect, 2, border_radius=inset)
