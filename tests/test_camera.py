from Dungeon.core.camera import GridCamera


def test_grid_is_centered_in_viewport():
    cam = GridCamera((700, 700), 21, 21, cell_size=35)
    assert cam.origin == (-17.5, -17.5)
    # centre de la case centrale = centre de l'écran
    assert cam.world_to_screen(10.5, 10.5) == (350, 350)


def test_screen_to_cell():
    cam = GridCamera((800, 600), 21, 21, cell_size=35)
    ox, oy = cam.origin
    assert cam.screen_to_cell(ox + 1, oy + 1) == (0, 0)
    assert cam.screen_to_cell(ox + 35 * 4 + 2, oy + 35 * 7 + 34) == (4, 7)
    assert cam.screen_to_cell(ox - 1, oy) == (-1, 0)


def test_cell_rect():
    cam = GridCamera((735, 735), 21, 21, cell_size=35)
    rect = cam.cell_rect(2, 3)
    assert rect.topleft == (70, 105)
    assert rect.size == (35, 35)


def test_viewport_change():
    cam = GridCamera((700, 700), 21, 21)
    cam.set_viewport((770, 700))
    assert cam.origin == (17.5, -17.5)
