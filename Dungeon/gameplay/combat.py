from __future__ import annotations

from Dungeon.gameplay.entities import (
    FIREBALL, FLAG, HURTING, LOOT, MONSTER, PLAYER, SWORD_SLASH, TRAP, TREASURE,
    FireBall, Loot, unknown_kind,
)
from Dungeon.ui.notification import DANGER, REWARD, add_notification


def hurt_player(world, player, damage: int) -> None:
    """Inflige des dégâts au joueur et le bloque en état "Hurting"."""
    player.health -= damage
    player.set_state(HURTING, world.params.hurt_duration)
    player.lock = max(player.lock, world.params.hurt_duration)
    if player.health <= 0:
        add_notification("Vous avez succombé...", DANGER)


def damage_monster(world, monster, damage: int) -> None:
    monster.health -= damage
    if monster.health <= 0 and not monster.deleted:
        monster.deleted = True
        add_notification("Monstre vaincu !")


def break_treasure(world, treasure, damage: int) -> None:
    """Un coffre frappé perd de sa solidité; brisé, son contenu tombe au sol."""
    if treasure.spent:
        return
    treasure.health -= damage
    if treasure.health > 0:
        return
    world.spawn(Loot(x=treasure.x, y=treasure.y, value=treasure.value))
    treasure.value = 0
    world.fog.reveal_cell(treasure.x, treasure.y)
    add_notification("Coffre brisé, son contenu est tombé au sol.", REWARD)


def disarm_trap(world, trap) -> None:
    trap.armed = False
    trap.deleted = True
    world.fog.reveal_cell(trap.x, trap.y)
    add_notification("Piège désamorcé.")


def apply_hit(world, x: int, y: int, damage: int) -> None:
    """Effet ponctuel d'un coup (épée ou boule de feu) sur une case."""
    if not world.grid.in_bounds(x, y):
        return
    for ent in world.entities_at(x, y):
        if ent.kind == MONSTER:
            damage_monster(world, ent, damage)
        elif ent.kind == TREASURE:
            break_treasure(world, ent, damage)
        elif ent.kind == TRAP:
            disarm_trap(world, ent)
        elif ent.kind in (PLAYER, LOOT, FLAG, SWORD_SLASH, FIREBALL):
            continue
        else:
            raise unknown_kind(ent)


def explode(world, fireball: FireBall) -> None:
    """Dégâts de zone 3x3 autour de l'impact, la case d'impact est révélée."""
    world.fog.reveal_cell(fireball.x, fireball.y)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            apply_hit(world, fireball.x + dx, fireball.y + dy, fireball.damage)


def resolve_transients(world, delta: float) -> None:
    """Décompte des entités éphémères; à zéro, effet unique puis suppression."""
    for ent in world.entities:
        if ent.deleted or ent.kind not in (SWORD_SLASH, FIREBALL):
            continue
        ent.countdown -= delta
        if ent.countdown > 0:
            continue
        if ent.kind == SWORD_SLASH:
            apply_hit(world, ent.x, ent.y, ent.damage)
        else:
            explode(world, ent)
        ent.deleted = True
