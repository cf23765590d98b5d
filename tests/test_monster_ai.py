from Dungeon.gameplay.entities import HURTING, Monster, Treasure
from Dungeon.gameplay.monster_ai import step_toward, update_monster, update_monsters


def test_step_toward_larger_gap():
    assert step_toward((0, 0), (3, 1)) == (1, 0)
    assert step_toward((0, 0), (1, -3)) == (0, -1)
    assert step_toward((5, 5), (2, 5)) == (-1, 0)
    assert step_toward((2, 2), (2, 2)) == (0, 0)


def test_hidden_monster_is_inert(world):
    monster = Monster(x=15, y=15, cooldown=0.0)
    world.entities.append(monster)
    update_monster(world, monster, 1.0)
    assert monster.target is None
    assert monster.pos == (15, 15)
    assert monster.cooldown == 0


def test_telegraph_then_move(world):
    monster = Monster(x=10, y=13, cooldown=0.0)
    world.entities.append(monster)
    world.fog.reveal_cell(10, 13)
    params = world.params

    update_monster(world, monster, 0.0)
    assert monster.target == (10, 12)
    assert monster.cooldown == params.monster_telegraph
    assert monster.pos == (10, 13)

    update_monster(world, monster, params.monster_telegraph)
    assert monster.pos == (10, 12)
    assert monster.target is None
    assert monster.cooldown == params.monster_cooldown


def test_attack_on_telegraphed_cell(world):
    monster = Monster(x=10, y=11, cooldown=0.0, damage=2)
    world.entities.append(monster)
    world.fog.reveal_cell(10, 11)

    update_monster(world, monster, 0.0)
    assert monster.target == (10, 10)
    update_monster(world, monster, 1.0)
    assert world.player.health == 1
    assert world.player.state == HURTING
    assert monster.pos == (10, 11)


def test_player_dodges_telegraphed_attack(world):
    monster = Monster(x=10, y=11, cooldown=0.0)
    world.entities.append(monster)
    world.fog.reveal_cell(10, 11)
    update_monster(world, monster, 0.0)
    world.player.x = 9
    update_monster(world, monster, 1.0)
    assert world.player.health == 3
    # la case annoncée est libre: le monstre y avance
    assert monster.pos == (10, 10)


def test_blocked_by_treasure(world):
    monster = Monster(x=10, y=13, cooldown=0.0, target=(10, 12))
    world.entities += [monster, Treasure(x=10, y=12)]
    world.fog.reveal_cell(10, 13)
    update_monster(world, monster, 0.0)
    assert monster.pos == (10, 13)
    assert monster.target is None


def test_monsters_never_stack(world):
    a = Monster(x=10, y=13, cooldown=0.0, target=(10, 12))
    b = Monster(x=10, y=12, cooldown=5.0)
    world.entities += [a, b]
    world.fog.reveal_cell(10, 13)
    world.fog.reveal_cell(10, 12)
    update_monsters(world, 0.0)
    assert a.pos == (10, 13)
    assert b.pos == (10, 12)


def test_deleted_monster_does_not_act(world):
    monster = Monster(x=10, y=11, cooldown=0.0, target=(10, 10), deleted=True)
    world.entities.append(monster)
    world.fog.reveal_cell(10, 11)
    update_monsters(world, 1.0)
    assert world.player.health == 3
