"""
pygame window for looking at a finished frame.

pygame's surfarray is indexed [x, y], the frame buffer [y, x]; to_surface
swaps the axes.
"""
import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)


def to_surface(frame: np.ndarray) -> pygame.Surface:
    """(H, W, 3) uint8 frame -> pygame Surface of size (W, H)."""
    return pygame.surfarray.make_surface(np.ascontiguousarray(frame.swapaxes(0, 1)))


def show(frame: np.ndarray, title: str = "softraster"):
    """Display the frame until the window is closed or ESC is pressed."""
    h, w, _ = frame.shape

    pygame.init()
    try:
        screen = pygame.display.set_mode((w, h))
        pygame.display.set_caption(title)
        screen.blit(to_surface(frame), (0, 0))
        pygame.display.flip()
        logger.info("preview open (%dx%d), ESC or close to exit", w, h)

        clock = pygame.time.Clock()
        running = True
        while running:
            clock.tick(30)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
    finally:
        pygame.quit()
