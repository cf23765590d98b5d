# FOG_OF_WAR.PY
# Brouillard de guerre: opacité par case + compteurs de dangers "sentis"


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from Dungeon.world.grid import GridError, in_bounds

METRICS = ("euclidean", "manhattan")
COUNTERS = ("enemies", "traps", "treasures")

# Fréquence de référence pour le mode "epsilon proportionnel au temps"
REFERENCE_FPS = 60.0


@dataclass
class FogCell:
    opacity: float = 1.0   # 1 = caché, 0 = révélé
    enemies: int = 0
    traps: int = 0
    treasures: int = 0

    def sensed(self) -> int:
        return self.enemies + self.traps + self.treasures

    def hidden(self) -> bool:
        return self.opacity == 1

    def clear_counts(self) -> None:
        self.enemies = 0
        self.traps = 0
        self.treasures = 0


class FogOfWar:
    """
    Champ de brouillard parallèle à la grille (éventuellement subdivisé).

    `subdivision` = r: chaque case (x, y) de la grille couvre r*r sous-cases.
    Toutes les coordonnées "grille" passent par cell_at / is_hidden / reveal_cell,
    les coordonnées de sous-cases par cell().
    """

    def __init__(
        self,
        width: int,
        height: int,
        subdivision: int = 1,
        metric: str = "euclidean",
        reveal_epsilon: float = 0.0001,
        decay_rate: float = 5.0,
        scale_epsilon_by_delta: bool = False,
        count_only_hidden_cells: bool = False,
    ):
        if subdivision < 1:
            raise ValueError(f"[Fog] Subdivision invalide: {subdivision}")
        if metric not in METRICS:
            raise ValueError(f"[Fog] Métrique inconnue: '{metric}'. Valeurs: {METRICS}")
        self.width = width
        self.height = height
        self.subdivision = subdivision
        self.fog_width = width * subdivision
        self.fog_height = height * subdivision
        self.metric = metric
        self.reveal_epsilon = reveal_epsilon
        self.decay_rate = decay_rate
        self.scale_epsilon_by_delta = scale_epsilon_by_delta
        self.count_only_hidden_cells = count_only_hidden_cells

        self.cells: List[FogCell] = [FogCell() for _ in range(self.fog_width * self.fog_height)]

    # ----------------- Accès -----------------

    def in_bounds(self, sx: int, sy: int) -> bool:
        return in_bounds(sx, sy, self.fog_width, self.fog_height)

    def cell(self, sx: int, sy: int) -> FogCell:
        """Sous-case (coordonnées du champ de brouillard)."""
        if not self.in_bounds(sx, sy):
            raise GridError(f"[Fog] ({sx}, {sy}) hors du brouillard {self.fog_width}x{self.fog_height}")
        return self.cells[sy * self.fog_width + sx]

    def center_of(self, x: int, y: int) -> Tuple[int, int]:
        r = self.subdivision
        return x * r + r // 2, y * r + r // 2

    def cell_at(self, x: int, y: int) -> FogCell:
        """Sous-case centrale de la case (x, y) de la grille."""
        if not in_bounds(x, y, self.width, self.height):
            raise GridError(f"[Fog] ({x}, {y}) hors de la grille {self.width}x{self.height}")
        return self.cell(*self.center_of(x, y))

    def subcells(self, x: int, y: int) -> Iterator[FogCell]:
        if not in_bounds(x, y, self.width, self.height):
            raise GridError(f"[Fog] ({x}, {y}) hors de la grille {self.width}x{self.height}")
        r = self.subdivision
        for sy in range(y * r, y * r + r):
            for sx in range(x * r, x * r + r):
                yield self.cells[sy * self.fog_width + sx]

    def is_hidden(self, x: int, y: int) -> bool:
        return self.cell_at(x, y).hidden()

    def reveal_cell(self, x: int, y: int) -> None:
        """Révèle entièrement une case de la grille (toutes ses sous-cases)."""
        for c in self.subcells(x, y):
            c.opacity = 0.0

    def sensed(self, x: int, y: int) -> Tuple[int, int, int]:
        c = self.cell_at(x, y)
        return c.enemies, c.traps, c.treasures

    # ----------------- Révélation -----------------

    def distance(self, dx: int, dy: int) -> float:
        if self.metric == "manhattan":
            return abs(dx) + abs(dy)
        return math.hypot(dx, dy)

    def _has_open_neighbour(self, sx: int, sy: int) -> bool:
        # au moins un voisin déjà entamé et sans danger senti
        for ny in range(sy - 1, sy + 2):
            for nx in range(sx - 1, sx + 2):
                if (nx, ny) == (sx, sy) or not self.in_bounds(nx, ny):
                    continue
                n = self.cells[ny * self.fog_width + nx]
                if n.sensed() == 0 and n.opacity != 1:
                    return True
        return False

    def reveal(self, px: int, py: int, fov: float, delta: float = 0.0) -> None:
        """
        Révélation directe + propagée autour d'un observateur en (px, py).
        La case de l'observateur est révélée immédiatement; les autres cases
        du champ de vision perdent `reveal_epsilon` si un voisin est déjà ouvert.
        """
        if not in_bounds(px, py, self.width, self.height):
            raise GridError(f"[Fog] Observateur ({px}, {py}) hors de la grille")

        self.reveal_cell(px, py)

        eps = self.reveal_epsilon
        if self.scale_epsilon_by_delta:
            eps *= delta * REFERENCE_FPS

        r = self.subdivision
        reach = fov * r
        span = math.ceil(reach)
        cx, cy = self.center_of(px, py)

        for dy in range(-span, span + 1):
            for dx in range(-span, span + 1):
                dist = self.distance(dx, dy)
                if dist > reach:
                    continue
                sx, sy = cx + dx, cy + dy
                if not self.in_bounds(sx, sy):
                    continue
                cur = self.cells[sy * self.fog_width + sx]
                if cur.opacity == 0:
                    continue
                if dist == 0:
                    cur.opacity = 0.0
                    continue
                if self._has_open_neighbour(sx, sy):
                    cur.opacity = max(0.0, cur.opacity - eps)

    def decay(self, delta: float) -> None:
        """Les cases entamées finissent de se dévoiler à vitesse constante."""
        step = self.decay_rate * delta
        for c in self.cells:
            if 0 < c.opacity < 1:
                c.opacity = max(c.opacity - step, 0.0)

    # ----------------- Dangers sentis -----------------

    def recompute(self, entities: Iterable) -> None:
        """
        Recalcule depuis zéro les compteurs de dangers.
        Seuls les dangers dont la propre case est encore cachée contribuent,
        sur leur voisinage 3x3 (3r x 3r en sous-cases).
        """
        for c in self.cells:
            c.clear_counts()

        r = self.subdivision
        for ent in entities:
            if ent.deleted:
                continue
            counter = ent.sensed_as()
            if counter is None:
                continue
            if counter not in COUNTERS:
                raise ValueError(f"[Fog] Compteur inconnu: '{counter}'")
            if not self.is_hidden(ent.x, ent.y):
                continue
            for sy in range((ent.y - 1) * r, (ent.y + 2) * r):
                for sx in range((ent.x - 1) * r, (ent.x + 2) * r):
                    if not self.in_bounds(sx, sy):
                        continue
                    c = self.cells[sy * self.fog_width + sx]
                    if self.count_only_hidden_cells and c.opacity != 1:
                        continue
                    setattr(c, counter, getattr(c, counter) + 1)
