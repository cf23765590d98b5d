# APP.PY
# Fenêtre pygame + boucle principale: un seul écran actif à la fois


# --------------- IMPORTATION DES MODULES ---------------
import pygame

from Dungeon.core.config import FPS, HEIGHT, TITLE, WIDTH, Settings
from Dungeon.core.utils import resource_path
from Dungeon.gameplay.play import Play

# Pas de temps maximal transmis à la simulation (fenêtre déplacée, breakpoint...)
MAX_DT = 0.25


class App:
    def __init__(self, settings_path="Dungeon/data/settings.json"):
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.settings = Settings(resource_path(settings_path))
        self.running = True

        self.states = {"PLAY": Play(self)}
        self.state = None
        self.change_state("PLAY")

    def quit_game(self):
        self.running = False

    def change_state(self, key, **kwargs):
        if key not in self.states:
            raise KeyError(f"[App] Ecran inconnu: {key!r}")
        if self.state is not None:
            self.state.leave()
        self.state = self.states[key]
        self.state.enter(**kwargs)

    def _frame_time(self) -> float:
        fps_cap = int(self.settings.get("video.fps_cap", FPS))
        return min(self.clock.tick(fps_cap) / 1000.0, MAX_DT)

    def run(self):
        while self.running:
            dt = self._frame_time()
            events = pygame.event.get()
            for e in events:
                if e.type == pygame.QUIT:
                    self.quit_game()
                elif e.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode(e.size, pygame.RESIZABLE)
            self.state.handle_input(events)
            self.state.update(dt)
            self.state.render(self.screen)
            pygame.display.flip()
        pygame.quit()
