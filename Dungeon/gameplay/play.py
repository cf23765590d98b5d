import random
from typing import Optional

import pygame

from Dungeon.core.camera import GridCamera
from Dungeon.core.config import CELL_SIZE
from Dungeon.core.state import State
from Dungeon.gameplay.input_latch import KEYDOWN, KEYUP, POINTER, InputEvent
from Dungeon.gameplay.simulation import tick
from Dungeon.gameplay.world_state import World
from Dungeon.ui.notification import add_notification, clear_notifications, draw_notifications
from Dungeon.ui.view import GridView
from Dungeon.world.world_gen import WorldGenerator, WorldParams, load_world_params_from_preset

# Touches physiques -> touches logiques
KEY_BINDINGS = {
    pygame.K_w: "up", pygame.K_UP: "up",
    pygame.K_s: "down", pygame.K_DOWN: "down",
    pygame.K_a: "left", pygame.K_LEFT: "left",
    pygame.K_d: "right", pygame.K_RIGHT: "right",
    pygame.K_q: "attack", pygame.K_SPACE: "attack",
    pygame.K_e: "loot",
    pygame.K_f: "spell",
}


class Play(State):
    """Partie en cours: traduit les évènements pygame et appelle tick() à chaque frame."""

    def __init__(self, app):
        super().__init__(app)
        self.gen = WorldGenerator()
        self.params: Optional[WorldParams] = None
        self.world: Optional[World] = None
        self.camera: Optional[GridCamera] = None
        self.view: Optional[GridView] = None

    # ---------- WORLD LIFECYCLE ----------
    def enter(self, **kwargs):
        settings = self.app.settings
        preset = kwargs.get("preset") or settings.get("gameplay.preset", "Default")
        seed = kwargs.get("seed", settings.get("gameplay.seed"))
        try:
            self.params = load_world_params_from_preset(preset)
        except (KeyError, FileNotFoundError, ValueError) as e:
            print(f"[Play] {e} → paramètres par défaut")
            self.params = WorldParams()
        self.new_world(seed)

    def new_world(self, seed=None):
        clear_notifications()
        self.world = self.gen.generate(self.params, rng_seed=seed if seed is not None else random.getrandbits(63))
        cell = int(self.app.settings.get("video.cell_size", CELL_SIZE))
        self.camera = GridCamera(self.app.screen.get_size(), self.world.width, self.world.height, cell)
        self.view = GridView(self.camera)
        add_notification("Explorez le donjon: videz-le de ses monstres et trésors.")

    # ---------- INPUT ----------
    def to_input_event(self, e) -> Optional[InputEvent]:
        if e.type in (pygame.KEYDOWN, pygame.KEYUP) and e.key in KEY_BINDINGS:
            kind = KEYDOWN if e.type == pygame.KEYDOWN else KEYUP
            return InputEvent(kind, KEY_BINDINGS[e.key])
        if e.type == pygame.MOUSEMOTION:
            return InputEvent(POINTER, cell=self.camera.screen_to_cell(*e.pos))
        if e.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and e.button == 3:
            return InputEvent(KEYDOWN if e.type == pygame.MOUSEBUTTONDOWN else KEYUP, "spell")
        return None

    def handle_input(self, events):
        latch = self.world.input
        for e in events:
            if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                self.world.toggle_pause()
                continue
            if e.type == pygame.KEYDOWN and e.key == pygame.K_r and self.world.finished:
                self.new_world()
                return
            if e.type == pygame.WINDOWFOCUSLOST:
                latch.release_all()
                continue
            if e.type == pygame.VIDEORESIZE:
                self.camera.set_viewport(e.size)
                continue
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 3:
                latch.handle(InputEvent(POINTER, cell=self.camera.screen_to_cell(*e.pos)), self.world.clock)
            ev = self.to_input_event(e)
            if ev is not None:
                latch.handle(ev, self.world.clock)

    # ---------- UPDATE ----------
    def update(self, dt: float):
        tick(self.world, dt)

    # ---------- RENDER ----------
    def render(self, screen: pygame.Surface):
        self.view.render(screen, self.world.snapshot())
        draw_notifications(screen)
