from __future__ import annotations

import logging
import os
import sys

import pygame

from .config import CFG
from .constants import FPS
from .game import Game
from .gpio import init_gpio
from .input_queue import InputQueue

# ============================== MAIN LOOP ============================== #
def main():
    logging.basicConfig(
        level=os.environ.get("SHADOWCLONE_LOG", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    pygame.init()
    fullscreen = bool(CFG.get("display", {}).get("fullscreen", False))
    screen = pygame.display.set_mode((1, 1))  # tiny placeholder; real size set next
    game = Game(screen)
    game._set_display_mode(fullscreen)
    iq = InputQueue()
    _ = init_gpio(iq)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            game.handle_event(event, iq)
        game.update(iq)
        game.draw()
        game.clock.tick(int(game.settings.get("fps", FPS)))

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pygame.quit(); sys.exit(0)
