import pytest

from Dungeon.gameplay.entities import Loot, Monster, Trap, Treasure
from Dungeon.world.fog_of_war import FogOfWar
from Dungeon.world.grid import GridError


def _counts(fog):
    return [(c.enemies, c.traps, c.treasures) for c in fog.cells]


def test_new_fog_is_fully_hidden():
    fog = FogOfWar(7, 5)
    assert len(fog.cells) == 35
    assert all(c.opacity == 1 and c.sensed() == 0 for c in fog.cells)


def test_invalid_construction():
    with pytest.raises(ValueError):
        FogOfWar(5, 5, subdivision=0)
    with pytest.raises(ValueError):
        FogOfWar(5, 5, metric="chebyshev")


def test_cell_out_of_bounds():
    fog = FogOfWar(5, 5)
    with pytest.raises(GridError):
        fog.cell_at(-1, 0)
    with pytest.raises(GridError):
        fog.cell_at(5, 0)


def test_reveal_opens_observer_cell_and_nibbles_neighbours():
    fog = FogOfWar(21, 21)
    fog.reveal(10, 10, 2.5)

    assert fog.cell_at(10, 10).opacity == 0
    # voisin direct de la case ouverte: une seule morsure d'epsilon
    assert fog.cell_at(10, 9).opacity == pytest.approx(1 - 0.0001)
    assert fog.cell_at(11, 11).opacity == pytest.approx(1 - 0.0001)
    # hors du champ de vision: intact
    assert fog.cell_at(13, 10).opacity == 1
    assert fog.cell_at(0, 0).opacity == 1


def test_reveal_does_not_propagate_through_sensed_cells():
    fog = FogOfWar(21, 21)
    fog.recompute([Monster(x=10, y=8)])
    # le monstre fait "sentir" les cases autour de lui, y compris (10, 9)
    fog.reveal(10, 10, 2.5)
    fog.reveal(10, 10, 2.5)
    # (10, 8) n'a comme voisins ouverts que des cases où un danger est senti
    assert fog.cell_at(10, 8).opacity == 1


def test_manhattan_metric_is_a_diamond():
    fog = FogOfWar(21, 21, metric="manhattan")
    assert fog.distance(2, 1) == 3
    assert fog.distance(-1, -1) == 2
    for _ in range(3):
        fog.reveal(10, 10, 2)
    # (12, 11) est à 3 en distance de Manhattan: hors de portée
    assert fog.cell_at(12, 11).opacity == 1
    assert fog.cell_at(11, 11).opacity < 1


def test_epsilon_scaled_by_delta():
    fog = FogOfWar(21, 21, scale_epsilon_by_delta=True)
    fog.reveal(10, 10, 2.5, delta=1 / 30)
    assert fog.cell_at(10, 9).opacity == pytest.approx(1 - 0.0002)


def test_decay():
    fog = FogOfWar(3, 3)
    fog.cell_at(0, 0).opacity = 0.5
    fog.cell_at(1, 1).opacity = 0.0
    fog.decay(0.05)
    assert fog.cell_at(0, 0).opacity == pytest.approx(0.25)
    assert fog.cell_at(1, 1).opacity == 0
    assert fog.cell_at(2, 2).opacity == 1
    fog.decay(1.0)
    assert fog.cell_at(0, 0).opacity == 0


def test_recompute_hidden_monster():
    fog = FogOfWar(11, 11)
    fog.recompute([Monster(x=5, y=5)])
    for y in range(11):
        for x in range(11):
            expected = 1 if abs(x - 5) <= 1 and abs(y - 5) <= 1 else 0
            assert fog.cell_at(x, y).enemies == expected
    assert sum(c.traps + c.treasures for c in fog.cells) == 0


def test_recompute_at_corner_is_clipped():
    fog = FogOfWar(5, 5)
    fog.recompute([Trap(x=0, y=0)])
    assert sum(c.traps for c in fog.cells) == 4


def test_recompute_ignores_revealed_deleted_and_spent():
    fog = FogOfWar(11, 11)
    fog.reveal_cell(2, 2)
    entities = [
        Monster(x=2, y=2),                # case révélée
        Monster(x=8, y=8, deleted=True),
        Treasure(x=5, y=5, value=0),      # coffre vidé
        Trap(x=5, y=8, armed=False),
        Loot(x=1, y=1, value=2),          # le butin n'est jamais "senti"
    ]
    fog.recompute(entities)
    assert all(c.sensed() == 0 for c in fog.cells)


def test_recompute_starts_from_zero():
    fog = FogOfWar(11, 11)
    fog.recompute([Treasure(x=4, y=4)])
    fog.recompute([Treasure(x=4, y=4)])
    assert fog.cell_at(4, 4).treasures == 1
    fog.reveal_cell(4, 4)
    fog.recompute([Treasure(x=4, y=4)])
    assert _counts(fog) == [(0, 0, 0)] * len(fog.cells)


def test_recompute_sums_overlapping_hazards():
    fog = FogOfWar(11, 11)
    fog.recompute([Monster(x=4, y=4), Monster(x=5, y=4), Trap(x=5, y=5)])
    assert fog.cell_at(4, 4).enemies == 2
    assert fog.cell_at(6, 4).enemies == 1
    assert fog.cell_at(4, 5).sensed() == 3


def test_count_only_hidden_cells():
    fog = FogOfWar(11, 11, count_only_hidden_cells=True)
    fog.reveal_cell(4, 4)
    fog.recompute([Monster(x=5, y=5)])
    assert fog.cell_at(4, 4).enemies == 0
    assert fog.cell_at(6, 6).enemies == 1


def test_subdivision():
    fog = FogOfWar(5, 5, subdivision=3)
    assert (fog.fog_width, fog.fog_height) == (15, 15)
    assert fog.cell_at(2, 2) is fog.cells[7 * 15 + 7]

    fog.recompute([Monster(x=2, y=2)])
    assert sum(c.enemies for c in fog.cells) == 81
    assert fog.cell(3, 3).enemies == 1
    assert fog.cell(2, 3).enemies == 0

    fog.reveal_cell(2, 2)
    assert not fog.is_hidden(2, 2)
    assert all(c.opacity == 0 for c in fog.subcells(2, 2))
    assert fog.cell(5, 5).opacity == 1


def test_subdivided_reveal_keeps_reach_in_grid_units():
    fog = FogOfWar(9, 9, subdivision=3)
    fog.reveal(4, 4, 1)
    cx, cy = fog.center_of(4, 4)
    # rayon 1 case = 3 sous-cases
    assert fog.cell(cx + 4, cy).opacity == 1
    assert fog.cell(cx + 2, cy).opacity < 1
