# GRID.PY
# Stockage plat des tuiles du donjon, adressé par (x, y)


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations
from typing import Iterator, List, Tuple

from Dungeon.world.tiles import EMPTY, WALL, DOOR_CLOSED, DOOR_OPEN


class GridError(IndexError):
    """Accès hors limites ou transition de tuile interdite (erreur de programmation)."""


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


# --------------- CLASSE PRINCIPALE ---------------
class Grid:
    """
    Tableau plat de largeur*hauteur tuiles, index = y*width + x.
    Aucun clamp implicite: l'appelant doit vérifier in_bounds() avant chaque accès.
    """

    def __init__(self, width: int, height: int, fill: int = EMPTY):
        if width <= 0 or height <= 0:
            raise ValueError(f"[Grid] Dimensions invalides: {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[int] = [fill] * (width * height)

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.width, self.height)

    def index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise GridError(f"[Grid] ({x}, {y}) hors de la grille {self.width}x{self.height}")
        return y * self.width + x

    def at(self, x: int, y: int) -> int:
        return self.cells[self.index(x, y)]

    def set(self, x: int, y: int, tile: int) -> None:
        self.cells[self.index(x, y)] = tile

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def open_door(self, x: int, y: int) -> None:
        """Seule mutation autorisée après génération: porte fermée -> porte ouverte."""
        if self.at(x, y) != DOOR_CLOSED:
            raise GridError(f"[Grid] Pas de porte fermée en ({x}, {y})")
        self.set(x, y, DOOR_OPEN)

    def coords(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def fill_border(self, tile: int = WALL) -> None:
        for x, y in self.coords():
            if self.is_border(x, y):
                self.set(x, y, tile)
