from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from Dungeon.gameplay.entities import PLAYER, Player
from Dungeon.gameplay.input_latch import InputLatch
from Dungeon.world.fog_of_war import FogCell, FogOfWar
from Dungeon.world.grid import Grid

if TYPE_CHECKING:
    from Dungeon.world.world_gen import WorldParams

# --------------- ETATS DU MONDE ---------------
PLAYING = "playing"
PAUSED  = "paused"
WIN     = "win"
LOSE    = "lose"


@dataclass(frozen=True)
class WorldSnapshot:
    """Copie figée d'un monde stabilisé, lue par le rendu."""
    width: int
    height: int
    subdivision: int
    tiles: Tuple[int, ...]
    fog: Tuple[FogCell, ...]
    entities: Tuple[Any, ...]
    hud: Dict[str, Any]
    state: str

    def tile(self, x: int, y: int) -> int:
        return self.tiles[y * self.width + x]

    # même interface de lecture que Grid (variantes de murs)
    at = tile

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def player(self) -> Optional[Player]:
        for e in self.entities:
            if e.kind == PLAYER:
                return e
        return None


@dataclass
class World:
    """
    Unique état mutable de la partie. Passé explicitement à chaque fonction,
    jamais stocké dans une variable globale.
    """
    params: "WorldParams"
    grid: Grid
    fog: FogOfWar
    rng: random.Random = field(default_factory=random.Random)
    entities: List[Any] = field(default_factory=list)
    pending: List[Any] = field(default_factory=list)  # créées pendant le tick
    input: InputLatch = field(default_factory=InputLatch)
    state: str = PLAYING
    clock: float = 0.0
    ticks: int = 0
    attack_cooldown: float = 0.0
    spell_charges: int = -1
    spell_recharge: float = 0.0

    def __post_init__(self):
        if self.spell_charges < 0:
            self.spell_charges = self.params.spell_max_charges

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def player(self) -> Optional[Player]:
        for e in self.entities:
            if e.kind == PLAYER and not e.deleted:
                return e
        return None

    def entities_at(self, x: int, y: int, include_deleted: bool = False) -> List[Any]:
        """Recherche par position: une liste vide n'est pas une erreur."""
        return [e for e in self.entities
                if e.x == x and e.y == y and (include_deleted or not e.deleted)]

    def entities_of(self, kind: str) -> List[Any]:
        return [e for e in self.entities if e.kind == kind and not e.deleted]

    def spawn(self, ent) -> None:
        """Les entités créées en cours de tick ne rejoignent la collection qu'au compactage."""
        self.pending.append(ent)

    # ---------- Pause ----------
    def pause(self) -> None:
        if self.state == PLAYING:
            self.state = PAUSED

    def resume(self) -> None:
        if self.state == PAUSED:
            self.state = PLAYING

    def toggle_pause(self) -> None:
        if self.state == PLAYING:
            self.pause()
        else:
            self.resume()

    @property
    def finished(self) -> bool:
        return self.state in (WIN, LOSE)

    # ---------- Rendu ----------
    def hud(self) -> Dict[str, Any]:
        p = self.player
        params = self.params
        attack_ready = 1.0
        if params.attack_cooldown > 0:
            attack_ready = 1.0 - min(1.0, self.attack_cooldown / params.attack_cooldown)
        recharge = 0.0
        if self.spell_charges < params.spell_max_charges and params.spell_recharge > 0:
            recharge = 1.0 - min(1.0, self.spell_recharge / params.spell_recharge)
        return {
            "health": p.health if p else 0,
            "max_health": p.max_health if p else 0,
            "wealth": p.wealth if p else 0,
            "player_state": p.state if p else None,
            "attack_ready": attack_ready,
            "spell_charges": self.spell_charges,
            "spell_max_charges": params.spell_max_charges,
            "spell_recharge": recharge,
        }

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            width=self.grid.width,
            height=self.grid.height,
            subdivision=self.fog.subdivision,
            tiles=tuple(self.grid.cells),
            fog=tuple(copy.copy(c) for c in self.fog.cells),
            entities=tuple(copy.deepcopy(e) for e in self.entities if not e.deleted),
            hud=self.hud(),
            state=self.state,
        )
