from __future__ import annotations

from typing import Optional, Tuple

import pygame

from reverse_blockblast.game import GameSnapshot, Shape

COLOR_BG = (17, 24, 39)
COLOR_BOARD = (31, 41, 55)
COLOR_EMPTY = (40, 40, 48)
COLOR_FILLED = (59, 130, 246)
COLOR_COMPLETED = (34, 197, 94)
COLOR_PREVIEW = (37, 99, 235)
COLOR_PREVIEW_CURRENT = (96, 165, 250)
COLOR_TEXT = (230, 230, 230)
COLOR_GAME_OVER = (255, 100, 100)


def _color_for_cell(occupied: bool, completed: bool) -> Tuple[int, int, int]:
    if not occupied:
        return COLOR_EMPTY
    return COLOR_COMPLETED if completed else COLOR_FILLED


class Renderer:
    """Draws a `GameSnapshot`: board, preview queue, score and game over banner."""

    def __init__(self, grid_size: int, cell_size: int = 32, margin: int = 20,
                 preview_cell: int = 12) -> None:
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = preview_cell
        self.header = 40
        self._font: Optional[pygame.font.Font] = None

    @property
    def board_px(self) -> int:
        return self.grid_size * self.cell_size

    def window_size(self) -> Tuple[int, int]:
        width = self.margin * 2 + self.board_px
        height = self.header + self.margin * 3 + self.board_px + self.preview_cell * 8
        return width, height

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Map a pixel position to (row, col), or None outside the board."""
        x = pos[0] - self.margin
        y = pos[1] - self.header
        if x < 0 or y < 0:
            return None
        row, col = y // self.cell_size, x // self.cell_size
        if row >= self.grid_size or col >= self.grid_size:
            return None
        return int(row), int(col)

    def draw_board(self, surface: pygame.Surface, state: GameSnapshot) -> None:
        board = pygame.Rect(self.margin, self.header, self.board_px, self.board_px)
        pygame.draw.rect(surface, COLOR_BOARD, board)
        h, w = state.grid.shape
        for y in range(h):
            for x in range(w):
                color = _color_for_cell(bool(state.grid[y, x]), y in state.completed_rows)
                rect = pygame.Rect(
                    self.margin + x * self.cell_size,
                    self.header + y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surface, color, rect)

    def draw_queue(self, surface: pygame.Surface, state: GameSnapshot) -> None:
        x0 = self.margin
        y0 = self.header + self.board_px + self.margin
        slot_w = self.preview_cell * 9
        for idx, shape in enumerate(state.queue):
            color = COLOR_PREVIEW_CURRENT if idx == state.cursor else COLOR_PREVIEW
            self._draw_shape(surface, shape, x0 + idx * slot_w, y0, color)

    def _draw_shape(self, surface: pygame.Surface, shape: Shape, x0: int, y0: int,
                    color: Tuple[int, int, int]) -> None:
        c = self.preview_cell
        for py in range(shape.height):
            for px in range(shape.width):
                if shape.mask[py, px]:
                    rect = pygame.Rect(x0 + px * c, y0 + py * c, c - 1, c - 1)
                    pygame.draw.rect(surface, color, rect)

    def draw(self, screen: pygame.Surface, state: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill(COLOR_BG)
        title = self._font.render(f"Reverse BlockBlast    Score: {state.score}", True, COLOR_TEXT)
        screen.blit(title, (self.margin, 10))
        self.draw_board(screen, state)
        self.draw_queue(screen, state)
        if state.game_over:
            lines = ["Game Over!", f"Final Score: {state.score}", "Press R to play again"]
            overlay = pygame.Surface((self.board_px, self.board_px), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 170))
            screen.blit(overlay, (self.margin, self.header))
            for i, txt in enumerate(lines):
                img = self._font.render(txt, True, COLOR_GAME_OVER if i == 0 else COLOR_TEXT)
                rect = img.get_rect(center=(self.margin + self.board_px // 2,
                                            self.header + self.board_px // 2 + (i - 1) * 32))
                screen.blit(img, rect)
        pygame.display.flip()
