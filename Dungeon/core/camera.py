import math

import pygame


class GridCamera:
    """
    Caméra fixe centrée sur le donjon.
    monde -> écran: (case - dims/2) * cell + viewport/2
    écran -> monde: (pointeur - viewport/2) / cell + dims/2
    """

    def __init__(self, viewport, world_w: int, world_h: int, cell_size: int = 35):
        self.viewport = pygame.Vector2(viewport)
        self.world_w = world_w
        self.world_h = world_h
        self.cell_size = cell_size

    def set_viewport(self, viewport):
        self.viewport = pygame.Vector2(viewport)

    @property
    def origin(self):
        """Coin haut-gauche de la case (0, 0) à l'écran."""
        half = self.viewport / 2
        return (half.x - self.world_w * self.cell_size / 2,
                half.y - self.world_h * self.cell_size / 2)

    def world_to_screen(self, tx: float, ty: float):
        ox, oy = self.origin
        return int(round(ox + tx * self.cell_size)), int(round(oy + ty * self.cell_size))

    def screen_to_world(self, sx: float, sy: float):
        half = self.viewport / 2
        tx = (sx - half.x) / self.cell_size + self.world_w / 2
        ty = (sy - half.y) / self.cell_size + self.world_h / 2
        return tx, ty

    def screen_to_cell(self, sx: float, sy: float):
        tx, ty = self.screen_to_world(sx, sy)
        return math.floor(tx), math.floor(ty)

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        sx, sy = self.world_to_screen(x, y)
        return pygame.Rect(sx, sy, self.cell_size, self.cell_size)
