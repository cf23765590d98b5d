from __future__ import annotations

from typing import Optional, Tuple

from Dungeon.core.utils import sign
from Dungeon.gameplay.combat import hurt_player
from Dungeon.gameplay.entities import MONSTER, PLAYER, TRAP, TREASURE
from Dungeon.world.tiles import is_passable

# Entités qui empêchent un monstre d'entrer dans une case
_BLOCKING = (MONSTER, PLAYER, TREASURE, TRAP)


def step_toward(pos: Tuple[int, int], target: Tuple[int, int]) -> Tuple[int, int]:
    """Pas orthogonal vers la cible, sur l'axe où l'écart est le plus grand."""
    dx = target[0] - pos[0]
    dy = target[1] - pos[1]
    if dx == 0 and dy == 0:
        return 0, 0
    if abs(dx) >= abs(dy):
        return sign(dx), 0
    return 0, sign(dy)


def _cell_free(world, x: int, y: int, monster) -> bool:
    if not world.grid.in_bounds(x, y) or not is_passable(world.grid.at(x, y)):
        return False
    for ent in world.entities_at(x, y):
        if ent is not monster and ent.kind in _BLOCKING:
            return False
    return True


def telegraph(world, monster, player) -> Optional[Tuple[int, int]]:
    dx, dy = step_toward(monster.pos, player.pos)
    if (dx, dy) == (0, 0):
        return None
    return monster.x + dx, monster.y + dy


def commit(world, monster, player) -> None:
    tx, ty = monster.target
    if player is not None and player.pos == (tx, ty):
        hurt_player(world, player, monster.damage)
    elif _cell_free(world, tx, ty, monster):
        monster.x, monster.y = tx, ty


def update_monster(world, monster, delta: float) -> None:
    """
    Un monstre encore caché par le brouillard reste inerte.
    Une fois vu: alternance "annonce" (case cible marquée) puis "exécution".
    """
    if monster.deleted or world.fog.is_hidden(monster.x, monster.y):
        return

    monster.cooldown = max(0.0, monster.cooldown - delta)
    if monster.cooldown > 0:
        return

    player = world.player
    params = world.params
    if monster.target is None:
        if player is None:
            return
        monster.target = telegraph(world, monster, player)
        monster.cooldown = params.monster_telegraph
    else:
        commit(world, monster, player)
        monster.target = None
        monster.cooldown = params.monster_cooldown


def update_monsters(world, delta: float) -> None:
    for ent in world.entities:
        if ent.kind == MONSTER:
            update_monster(world, ent, delta)
