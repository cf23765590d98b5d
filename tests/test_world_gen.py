import json

import pytest

from Dungeon.gameplay.entities import MONSTER, PLAYER, TRAP, TREASURE
from Dungeon.world.tiles import DOOR_CLOSED, EMPTY, WALL
from Dungeon.world.world_gen import WorldGenerator, WorldParams, load_world_params_from_preset


def _generate(**kw):
    params = WorldParams(**kw)
    return WorldGenerator().generate(params, rng_seed=42)


def test_border_is_walled():
    world = _generate()
    grid = world.grid
    for x, y in grid.coords():
        if grid.is_border(x, y):
            assert grid.at(x, y) == WALL
        else:
            assert grid.at(x, y) in (EMPTY, DOOR_CLOSED)


def test_player_starts_at_center():
    world = _generate(width=15, height=11)
    player = world.player
    assert player.pos == (7, 5)
    assert world.grid.at(7, 5) == EMPTY
    assert player.health == player.max_health == 3
    assert player.state == "normal"


def test_hazards_on_distinct_interior_cells():
    world = _generate(monsters=30, treasures=30, traps=30)
    positions = [e.pos for e in world.entities]
    assert len(positions) == len(set(positions))
    kinds = [e.kind for e in world.entities]
    assert kinds.count(PLAYER) == 1
    # politique "on saute si occupé": jamais plus que demandé
    assert kinds.count(MONSTER) <= 30
    assert kinds.count(TREASURE) <= 30
    assert kinds.count(TRAP) <= 30
    for ent in world.entities:
        assert not world.grid.is_border(ent.x, ent.y)
        assert world.grid.at(ent.x, ent.y) == EMPTY


def test_treasure_values_in_range():
    world = _generate(treasures=20, treasure_min_value=2, treasure_max_value=4)
    for t in world.entities_of(TREASURE):
        assert 2 <= t.value <= 4


def test_generation_is_deterministic():
    a = _generate()
    b = _generate()
    assert a.grid.cells == b.grid.cells
    assert [(e.kind, e.pos) for e in a.entities] == [(e.kind, e.pos) for e in b.entities]


def test_doors_block_placement():
    world = _generate(door_chance=1.0)
    interior = [(x, y) for x, y in world.grid.coords() if not world.grid.is_border(x, y)]
    assert all(world.grid.at(x, y) == DOOR_CLOSED for x, y in interior if (x, y) != (10, 10))
    assert [e.kind for e in world.entities] == [PLAYER]


def test_counts_ready_after_generation():
    world = _generate()
    world_fog = world.fog
    for ent in world.entities:
        if ent.kind == MONSTER:
            assert world_fog.cell_at(ent.x, ent.y).enemies >= 1
        elif ent.kind == TRAP:
            assert world_fog.cell_at(ent.x, ent.y).traps >= 1


def test_world_starts_with_full_spell_charges():
    world = _generate(spell_max_charges=2)
    assert world.spell_charges == 2
    assert world.state == "playing"


def test_from_dict_ignores_unknown_keys(capsys):
    params = WorldParams.from_dict({"fov": 4, "loot_values": [3, 5], "altitude": 12})
    assert params.fov == 4
    assert params.loot_values == (3, 5)
    assert "altitude" in capsys.readouterr().out
    assert params.to_dict()["loot_values"] == [3, 5]


def test_shipped_presets():
    params = load_world_params_from_preset("Losange")
    assert params.fov_metric == "manhattan"
    params = load_world_params_from_preset("Brume fine", overrides={"fov": 2})
    assert params.fog_subdivision == 3
    assert params.fov == 2
    with pytest.raises(KeyError):
        load_world_params_from_preset("Inexistant")


def test_preset_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_world_params_from_preset("Default", path=str(tmp_path / "absent.json"))

    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"presets": {"Mini": {"width": 7, "height": 7, "monsters": 1}}}), encoding="utf-8")
    params = load_world_params_from_preset("Mini", path=str(path))
    assert (params.width, params.height, params.monsters) == (7, 7, 1)


@pytest.mark.parametrize("width, height", [(2, 2), (1, 9), (9, 2)])
def test_world_without_interior_is_rejected(width, height):
    params = WorldParams(width=width, height=height, monsters=1)
    with pytest.raises(ValueError, match="WorldGen"):
        WorldGenerator().generate(params, rng_seed=1)


def test_smallest_world_keeps_its_walls():
    world = _generate(width=3, height=3, monsters=3, treasures=3, traps=3)
    for x, y in world.grid.coords():
        assert (world.grid.at(x, y) == WALL) == ((x, y) != (1, 1))
    assert world.player.pos == (1, 1)


def test_empty_loot_values_rejected():
    with pytest.raises(ValueError):
        WorldParams.from_dict({"loot_values": []})
    with pytest.raises(ValueError):
        WorldGenerator().generate(WorldParams(loot_values=()), rng_seed=1)
