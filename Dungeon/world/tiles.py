# TILES.PY
# Gère les tiles du donjon


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations
from typing import Dict, Optional, Tuple

# --------------- ID DU TERRAIN ---------------
VOID        = -1   # hors du monde (aucune tuile)
EMPTY       = 0
WALL        = 1
DOOR_CLOSED = 2
DOOR_OPEN   = 3

Color = Tuple[int, int, int]

# --------------- CATALOGUE ---------------
_DEFAULT_COLORS: Dict[int, Color] = {
    VOID:        (20, 20, 20),
    EMPTY:       (235, 235, 235),
    WALL:        (15, 15, 15),
    DOOR_CLOSED: (120, 72, 30),
    DOOR_OPEN:   (200, 160, 110),
}

_DEFAULT_NAME_TO_ID: Dict[str, int] = {
    "void": VOID,
    "empty": EMPTY,
    "wall": WALL,
    "door_closed": DOOR_CLOSED,
    "door_open": DOOR_OPEN,
}

# Seules ces tuiles laissent passer le joueur et les monstres
_DEFAULT_PASSABLE = {EMPTY, DOOR_OPEN}


# --------------- CLASSE PRINCIPALE ---------------
class Tiles:
    """
    Fournit:
      - mapping id <-> nom logique
      - couleur de rendu par id
      - passabilité
      - variante d'orientation des murs (pour le rendu)
    """

    def __init__(self):
        self._id_to_color: Dict[int, Color] = dict(_DEFAULT_COLORS)
        self._name_to_id: Dict[str, int] = dict(_DEFAULT_NAME_TO_ID)
        self._passable = set(_DEFAULT_PASSABLE)

    # Enregistrement / modification

    def register_tile(self, tile_id: int, color: Color, logical_name: Optional[str] = None, passable: bool = False) -> None:
        """Ajoute ou modifie une tuile (id -> couleur), et nom logique optionnel (name -> id)."""
        self._id_to_color[tile_id] = color
        if logical_name:
            self._name_to_id[logical_name.lower()] = tile_id
        if passable:
            self._passable.add(tile_id)
        else:
            self._passable.discard(tile_id)

    # ----------------- Query de base -----------------

    def get_tile_id(self, logical_name: str) -> int:
        """Ex: 'wall' -> 1. Lève KeyError si inconnu."""
        ln = logical_name.lower()
        if ln not in self._name_to_id:
            raise KeyError(f"[Tiles] Nom logique inconnu: '{logical_name}'. Clés: {list(self._name_to_id.keys())}")
        return self._name_to_id[ln]

    def get_tile_name(self, tile_id: int) -> str:
        for name, tid in self._name_to_id.items():
            if tid == tile_id:
                return name
        raise KeyError(f"[Tiles] ID inconnu: {tile_id}. IDs: {list(self._id_to_color.keys())}")

    def get_color(self, tile_id: int) -> Color:
        if tile_id not in self._id_to_color:
            raise KeyError(f"[Tiles] ID inconnu: {tile_id}. IDs: {list(self._id_to_color.keys())}")
        return self._id_to_color[tile_id]

    def is_passable(self, tile_id: int) -> bool:
        return tile_id in self._passable

    # ----------------- Variantes de murs -----------------

    def wall_variant(self, grid, x: int, y: int) -> Optional[str]:
        """
        Orientation d'un mur selon ses voisins murés (4-voisinage).
        Retourne None si la case n'est pas un mur.
        Codes: "pillar", "horizontal", "vertical", "corner", "cross", "end".
        """
        if grid.at(x, y) != WALL:
            return None

        def wall(nx, ny):
            return grid.in_bounds(nx, ny) and grid.at(nx, ny) == WALL

        n, s = wall(x, y - 1), wall(x, y + 1)
        w, e = wall(x - 1, y), wall(x + 1, y)
        count = n + s + w + e
        if count == 0:
            return "pillar"
        if count >= 3:
            return "cross"
        if count == 1:
            return "end"
        if w and e:
            return "horizontal"
        if n and s:
            return "vertical"
        return "corner"


# Instance partagée + raccourcis
_TILES = Tiles()


def get_tile_id(logical_name: str) -> int:
    return _TILES.get_tile_id(logical_name)


def get_tile_color(tile_id: int) -> Color:
    return _TILES.get_color(tile_id)


def is_passable(tile_id: int) -> bool:
    return _TILES.is_passable(tile_id)


def wall_variant(grid, x: int, y: int) -> Optional[str]:
    return _TILES.wall_variant(grid, x, y)
