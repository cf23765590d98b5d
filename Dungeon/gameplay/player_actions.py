from __future__ import annotations

import math

from Dungeon.gameplay.combat import hurt_player
from Dungeon.gameplay.entities import (
    ATTACKING, FIREBALL, FLAG, LOOT, LOOTING, MONSTER, NORMAL, PLAYER, SWORD_SLASH, TRAP, TREASURE,
    FireBall, Flag, SwordSlash, unknown_kind,
)
from Dungeon.ui.notification import DANGER, REWARD, add_notification
from Dungeon.world.tiles import DOOR_CLOSED, is_passable


def move_time(player) -> float:
    return 1.0 / player.speed if player.speed > 0 else 0.0


# ---------- Attaque ----------
def try_attack(world, player) -> bool:
    """
    Coup d'épée devant le joueur, ou, si des drapeaux sont posés,
    une boule de feu lancée vers chacun d'eux.
    """
    if world.attack_cooldown > 0:
        return False
    params = world.params

    flags = world.entities_of(FLAG)
    if flags:
        for flag in flags:
            dist = math.hypot(flag.x - player.x, flag.y - player.y)
            travel = dist / params.fireball_speed if params.fireball_speed > 0 else 0.0
            world.spawn(FireBall(x=flag.x, y=flag.y, damage=params.fireball_damage,
                                 countdown=travel, duration=travel, origin=player.pos))
            flag.deleted = True
    else:
        fx, fy = player.x + player.facing[0], player.y + player.facing[1]
        if world.grid.in_bounds(fx, fy):
            world.spawn(SwordSlash(x=fx, y=fy, damage=params.slash_damage,
                                   countdown=params.slash_duration))

    world.attack_cooldown = params.attack_cooldown
    player.set_state(ATTACKING, params.attack_duration)
    return True


# ---------- Sort ----------
def try_spell(world, player) -> bool:
    """Pose un drapeau sur la case visée (consomme une charge)."""
    params = world.params
    aim = world.input.aim
    if world.spell_charges <= 0 or aim is None:
        return False
    tx, ty = aim
    if not world.grid.in_bounds(tx, ty):
        return False
    if math.hypot(tx - player.x, ty - player.y) > params.spell_range:
        return False

    world.spell_charges -= 1
    if world.spell_recharge <= 0:
        world.spell_recharge = params.spell_recharge
    world.spawn(Flag(x=tx, y=ty))
    return True


# ---------- Fouille ----------
def try_loot(world, player) -> bool:
    player.set_state(LOOTING, world.params.loot_duration)
    return True


# ---------- Déplacement ----------
def _touch_treasure(world, player, treasure) -> None:
    if treasure.spent:
        return
    if world.fog.is_hidden(treasure.x, treasure.y) and player.state != LOOTING:
        world.fog.reveal_cell(treasure.x, treasure.y)
        add_notification("Vous découvrez un coffre !")
        return
    player.wealth += treasure.value
    add_notification(f"Trésor récupéré (+{treasure.value}).", REWARD)
    treasure.value = 0
    if player.state == LOOTING:
        player.set_state(NORMAL, 0.0)


def try_move(world, player, dx: int, dy: int) -> bool:
    """
    Résout une intention de déplacement. Retourne True si le tour est consommé.
    Mur: rien ne se passe. Porte fermée: elle s'ouvre, le joueur reste sur place.
    """
    player.facing = (dx, dy)
    nx, ny = player.x + dx, player.y + dy
    grid = world.grid
    if not grid.in_bounds(nx, ny):
        return False

    tile = grid.at(nx, ny)
    if tile == DOOR_CLOSED:
        grid.open_door(nx, ny)
        player.lock = move_time(player)
        return True
    if not is_passable(tile):
        return False

    blocked = False   # le joueur reste sur place
    reachable = True  # le butin de la case est à portée de main
    loot = []
    for ent in world.entities_at(nx, ny):
        if ent.kind == MONSTER:
            hurt_player(world, player, ent.damage)
            world.fog.reveal_cell(nx, ny)
            blocked = True
            reachable = False
        elif ent.kind == LOOT:
            loot.append(ent)
        elif ent.kind == TREASURE:
            # le contenu d'un coffre brisé tombe sur sa propre case: on le ramasse en le touchant
            if not ent.spent:
                reachable = False
            _touch_treasure(world, player, ent)
            blocked = True
        elif ent.kind == TRAP:
            if ent.armed and world.fog.is_hidden(nx, ny):
                hurt_player(world, player, ent.damage)
                world.fog.reveal_cell(nx, ny)
                ent.armed = False
                ent.deleted = True
                add_notification("Un piège se déclenche !", DANGER)
            blocked = True
            reachable = False
        elif ent.kind in (FLAG, SWORD_SLASH, FIREBALL, PLAYER):
            continue
        else:
            raise unknown_kind(ent)

    if reachable:
        for ent in loot:
            player.wealth += ent.value
            ent.deleted = True
            add_notification(f"Butin ramassé (+{ent.value}).", REWARD)

    if blocked:
        player.lock = max(player.lock, move_time(player))
        return True

    player.animation.from_pos = (float(player.x), float(player.y))
    player.animation.t = 0.0
    player.x, player.y = nx, ny
    player.lock = move_time(player)
    return True


def resolve_player_action(world, player) -> bool:
    """Au plus une action par tick, seulement si le joueur n'est pas verrouillé."""
    if player.lock > 0:
        return False
    latch = world.input

    for action, handler in (("attack", try_attack), ("spell", try_spell), ("loot", try_loot)):
        if latch.pending(action) and handler(world, player):
            latch.consume(action)
            return True

    dx, dy = latch.movement()
    if (dx, dy) == (0, 0):
        return False
    return try_move(world, player, dx, dy)
