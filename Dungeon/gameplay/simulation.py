from __future__ import annotations

import math

from Dungeon.gameplay.combat import resolve_transients
from Dungeon.gameplay.entities import MONSTER, NORMAL, PLAYER, TREASURE, Loot
from Dungeon.gameplay.monster_ai import update_monsters
from Dungeon.gameplay.player_actions import resolve_player_action
from Dungeon.gameplay.world_state import LOSE, PLAYING, WIN
from Dungeon.ui.notification import DANGER, REWARD, add_notification


def advance_timers(world, delta: float) -> None:
    params = world.params
    world.clock += delta
    world.ticks += 1
    world.attack_cooldown = max(0.0, world.attack_cooldown - delta)

    # une charge à la fois, le minuteur repart tant qu'on est sous le maximum
    if world.spell_charges < params.spell_max_charges:
        world.spell_recharge -= delta
        if world.spell_recharge <= 0:
            world.spell_charges += 1
            if world.spell_charges < params.spell_max_charges:
                world.spell_recharge = params.spell_recharge
            else:
                world.spell_recharge = 0.0
    else:
        world.spell_recharge = 0.0

    player = world.player
    if player is None:
        return
    player.lock = max(0.0, player.lock - delta)
    if player.state != NORMAL:
        player.state_timer = max(0.0, player.state_timer - delta)
        if player.state_timer == 0:
            player.set_state(NORMAL, 0.0)

    anim = player.animation
    dist = math.hypot(player.x - anim.from_pos[0], player.y - anim.from_pos[1])
    if dist == 0:
        anim.t = 1.0
    else:
        anim.t = min(anim.t + delta * (player.speed / dist), 1.0)


def collect_garbage(world) -> None:
    """
    Compactage en fin de tick: les entités marquées sont retirées d'un coup.
    Un monstre détruit laisse un butin, un joueur détruit termine la partie.
    """
    player = world.player
    if player is not None and player.health <= 0:
        player.deleted = True

    kept = []
    for ent in world.entities + world.pending:
        if not ent.deleted:
            kept.append(ent)
        elif ent.kind == MONSTER:
            value = world.rng.choice(world.params.loot_values)
            kept.append(Loot(x=ent.x, y=ent.y, value=value))
        elif ent.kind == PLAYER:
            world.state = LOSE
            add_notification("Défaite !", DANGER)
    world.entities = kept
    world.pending = []


def check_win(world) -> None:
    if world.state != PLAYING or world.player is None:
        return
    for ent in world.entities:
        if ent.kind == PLAYER:
            continue
        if ent.kind == TREASURE and ent.spent:
            continue
        return
    world.state = WIN
    add_notification("Victoire ! Le donjon est vidé.", REWARD)


def tick(world, delta: float) -> None:
    """
    Avance le monde d'exactement une frame logique. L'ordre est important:
    joueur -> monstres -> éphémères -> brouillard -> compactage -> compteurs -> victoire.
    """
    if world.state != PLAYING:
        world.input.end_tick()
        return

    advance_timers(world, delta)

    player = world.player
    if player is not None:
        resolve_player_action(world, player)

    update_monsters(world, delta)
    resolve_transients(world, delta)

    if player is not None and not player.deleted:
        world.fog.reveal(player.x, player.y, player.fov, delta)
    world.fog.decay(delta)

    collect_garbage(world)
    world.fog.recompute(world.entities)
    check_win(world)

    world.input.end_tick()
