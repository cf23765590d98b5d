class State:
    """Écran du jeu piloté par App: entrée -> mise à jour -> rendu."""
    def __init__(self, app): self.app = app
    def enter(self, **kwargs): pass
    def leave(self): pass
    def handle_input(self, events): pass
    def update(self, dt): pass
    def render(self, screen): pass
