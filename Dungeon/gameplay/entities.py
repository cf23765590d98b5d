from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Union

# --------------- TAGS ---------------
PLAYER      = "player"
MONSTER     = "monster"
LOOT        = "loot"
TREASURE    = "treasure"
TRAP        = "trap"
SWORD_SLASH = "sword_slash"
FIREBALL    = "fireball"
FLAG        = "flag"

KINDS = (PLAYER, MONSTER, LOOT, TREASURE, TRAP, SWORD_SLASH, FIREBALL, FLAG)

# --------------- ETATS DU JOUEUR ---------------
NORMAL    = "normal"
ATTACKING = "attacking"
LOOTING   = "looting"
HURTING   = "hurting"

PLAYER_STATES = (NORMAL, ATTACKING, LOOTING, HURTING)


class UnknownEntityError(Exception):
    """Tag d'entité non géré: erreur de programmation, jamais rattrapée."""


def unknown_kind(ent) -> UnknownEntityError:
    return UnknownEntityError(f"[Entities] Type d'entité non géré: {getattr(ent, 'kind', ent)!r}")


# ---------- Data classes ----------
@dataclass
class Entity:
    kind: ClassVar[str] = ""
    x: int = 0
    y: int = 0
    deleted: bool = False

    @property
    def pos(self) -> Tuple[int, int]:
        return self.x, self.y

    def sensed_as(self) -> Optional[str]:
        """Compteur de brouillard alimenté par cette entité tant qu'elle est cachée."""
        return None


@dataclass
class Animation:
    from_pos: Tuple[float, float] = (0.0, 0.0)
    t: float = 1.0  # 0..1, purement visuel


@dataclass
class Player(Entity):
    kind: ClassVar[str] = PLAYER
    fov: float = 2.5
    health: int = 3
    max_health: int = 3
    wealth: int = 0
    speed: float = 4.0           # cases / seconde
    state: str = NORMAL
    state_timer: float = 0.0
    lock: float = 0.0            # verrou d'action (animation en cours)
    facing: Tuple[int, int] = (0, 1)
    animation: Animation = field(default_factory=Animation)

    def set_state(self, state: str, duration: float) -> None:
        if state not in PLAYER_STATES:
            raise ValueError(f"[Player] Etat inconnu: {state!r}")
        self.state = state
        self.state_timer = duration

    def render_pos(self) -> Tuple[float, float]:
        a = self.animation
        t = max(0.0, min(1.0, a.t))
        fx, fy = a.from_pos
        return fx + (self.x - fx) * t, fy + (self.y - fy) * t


@dataclass
class Monster(Entity):
    kind: ClassVar[str] = MONSTER
    health: int = 2
    damage: int = 1
    cooldown: float = 1.0
    target: Optional[Tuple[int, int]] = None  # case annoncée (telegraph)

    def sensed_as(self) -> Optional[str]:
        return "enemies"


@dataclass
class Loot(Entity):
    kind: ClassVar[str] = LOOT
    value: int = 1


@dataclass
class Treasure(Entity):
    kind: ClassVar[str] = TREASURE
    value: int = 3
    health: int = 2  # solidité du coffre

    @property
    def spent(self) -> bool:
        return self.value <= 0

    def sensed_as(self) -> Optional[str]:
        return None if self.spent else "treasures"


@dataclass
class Trap(Entity):
    kind: ClassVar[str] = TRAP
    damage: int = 1
    armed: bool = True

    def sensed_as(self) -> Optional[str]:
        return "traps" if self.armed else None


@dataclass
class SwordSlash(Entity):
    kind: ClassVar[str] = SWORD_SLASH
    damage: int = 1
    countdown: float = 0.15


@dataclass
class FireBall(Entity):
    kind: ClassVar[str] = FIREBALL
    damage: int = 1
    countdown: float = 0.0
    duration: float = 0.0
    origin: Tuple[int, int] = (0, 0)

    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return max(0.0, min(1.0, 1.0 - self.countdown / self.duration))


@dataclass
class Flag(Entity):
    kind: ClassVar[str] = FLAG


AnyEntity = Union[Player, Monster, Loot, Treasure, Trap, SwordSlash, FireBall, Flag]
