from __future__ import annotations

import argparse
import logging

import pygame

from reverse_blockblast.game import ClickResult, GameConfig, ManualScheduler, ReverseBlockBlastGame
from .renderer import Renderer

logger = logging.getLogger("play")

TICK_EVENT = pygame.USEREVENT + 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--interval", type=int, default=GameConfig.tick_interval_ms,
                   help="milliseconds between automatic placements")
    p.add_argument("--delay", type=int, default=GameConfig.placement_delay_ms,
                   help="milliseconds between choosing and committing a placement")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell", type=int, default=32)
    return p


def run(config: GameConfig, cell_size: int = 32) -> None:
    pygame.init()
    try:
        scheduler = ManualScheduler()
        game = ReverseBlockBlastGame(config, scheduler=scheduler)
        renderer = Renderer(config.grid_size, cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size())
        pygame.display.set_caption("Reverse BlockBlast")

        dirty = True

        def on_change(state) -> None:
            nonlocal dirty
            dirty = True
            if state.game_over:
                # The core ignores ticks from here on; stop the timer anyway
                pygame.time.set_timer(TICK_EVENT, 0)

        game.subscribe(on_change)
        pygame.time.set_timer(TICK_EVENT, config.tick_interval_ms)

        running = True
        clock = pygame.time.Clock()
        while running:
            dt = clock.tick(60)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == TICK_EVENT:
                    game.tick()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        pygame.time.set_timer(TICK_EVENT, config.tick_interval_ms)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    cell = renderer.cell_at(event.pos)
                    if cell is not None:
                        result = game.click_cell(*cell)
                        if result is ClickResult.ILLEGAL:
                            logger.info("clicked an unfinished row at %s", cell)

            # Let the pending placement land once its delay has passed
            scheduler.advance(dt)

            if dirty:
                renderer.draw(screen, game.get_state())
                dirty = False
        logger.info("session stats: %s", game.get_game_stats())
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")
    config = GameConfig(
        tick_interval_ms=args.interval,
        placement_delay_ms=args.delay,
        random_seed=args.seed,
    )
    run(config, cell_size=args.cell)


if __name__ == "__main__":  # pragma: no cover
    main()
