import pytest

from Dungeon.gameplay.input_latch import KEYDOWN, KEYUP, InputEvent
from Dungeon.ui import notification
from Dungeon.world.world_gen import WorldParams, empty_world


@pytest.fixture(autouse=True)
def _clear_notifications():
    notification.clear_notifications()
    yield
    notification.clear_notifications()


@pytest.fixture
def params():
    return WorldParams(seed=1234, monsters=0, treasures=0, traps=0, door_chance=0.0)


@pytest.fixture
def world(params):
    return empty_world(params)


def press(world, key):
    world.input.handle(InputEvent(KEYDOWN, key), world.clock)


def release(world, key):
    world.input.handle(InputEvent(KEYUP, key), world.clock)
