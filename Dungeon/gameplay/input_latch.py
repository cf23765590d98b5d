from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Touches "maintenues" (niveau) vs actions ponctuelles (front)
HELD_KEYS = ("up", "down", "left", "right")
EDGE_KEYS = ("attack", "spell", "loot")
KEYS = HELD_KEYS + EDGE_KEYS

KEYDOWN = "keydown"
KEYUP = "keyup"
POINTER = "pointer"


@dataclass
class InputEvent:
    type: str                               # keydown | keyup | pointer
    key: Optional[str] = None
    cell: Optional[Tuple[int, int]] = None  # case visée (pointer uniquement)


class InputLatch:
    """
    Accumule les évènements bruts en un état stable par tick:
      - axes de déplacement maintenus (niveau)
      - actions ponctuelles horodatées (front), effacées par end_tick()
    Un keydown répété par l'OS alors que la touche est déjà enfoncée est ignoré.
    """

    def __init__(self):
        self.held: Dict[str, bool] = {k: False for k in HELD_KEYS}
        self.pressed: Dict[str, Optional[float]] = {k: None for k in EDGE_KEYS}
        self._down: set[str] = set()
        self.aim: Optional[Tuple[int, int]] = None

    def handle(self, event: InputEvent, now: float = 0.0) -> None:
        if event.type == POINTER:
            self.aim = event.cell
            return
        if event.key not in KEYS:
            raise ValueError(f"[Input] Touche logique inconnue: {event.key!r}")

        if event.type == KEYDOWN:
            if event.key in HELD_KEYS:
                self.held[event.key] = True
            elif event.key not in self._down:
                self.pressed[event.key] = now
            self._down.add(event.key)
        elif event.type == KEYUP:
            if event.key in HELD_KEYS:
                self.held[event.key] = False
            self._down.discard(event.key)
        else:
            raise ValueError(f"[Input] Type d'évènement inconnu: {event.type!r}")

    def movement(self) -> Tuple[int, int]:
        """Vecteur de déplacement, l'horizontal est prioritaire sur le vertical."""
        dx = int(self.held["right"]) - int(self.held["left"])
        dy = int(self.held["down"]) - int(self.held["up"])
        if dx != 0:
            dy = 0
        return dx, dy

    def pending(self, action: str) -> bool:
        return self.pressed[action] is not None

    def pressed_since(self, action: str) -> Optional[float]:
        return self.pressed[action]

    def consume(self, action: str) -> None:
        self.pressed[action] = None

    def end_tick(self) -> None:
        for k in EDGE_KEYS:
            self.pressed[k] = None

    def release_all(self) -> None:
        """Perte de focus: plus aucune touche n'est considérée enfoncée."""
        for k in HELD_KEYS:
            self.held[k] = False
        self._down.clear()
        self.end_tick()
