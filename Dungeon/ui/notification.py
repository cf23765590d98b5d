# NOTIFICATION.PY
# Messages de jeu éphémères (dégâts, butin, fin de partie) affichés en bas à droite


# --------------- IMPORTATION DES MODULES ---------------
import time
from typing import List

import pygame

INFO   = "info"
DANGER = "danger"
REWARD = "reward"

BORDER_COLORS = {
    INFO:   (200, 200, 200),
    DANGER: (220, 60, 60),
    REWARD: (230, 200, 0),
}

FONT_NAME = "consolas"
FONT_SIZE = 18
MAX_WIDTH = 300
PADDING = 10
SPACING = 10
BG_COLOR = (25, 25, 25)
TEXT_COLOR = (255, 255, 255)
DURATION = 3.0   # secondes pleinement visibles
FADE_TIME = 0.5
MAX_COUNT = 6

notifications: List[dict] = []
_font = None


def _get_font():
    # créée au premier dessin: la simulation tourne sans pygame.font
    global _font
    if _font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        _font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
    return _font


def add_notification(message: str, kind: str = INFO):
    """
    Empile un message. Un message identique encore visible est simplement
    relancé au lieu d'être dupliqué; au-delà de MAX_COUNT le plus ancien saute.
    """
    if not message:
        return
    if kind not in BORDER_COLORS:
        raise ValueError(f"[Notification] Catégorie inconnue: {kind!r}")

    now = time.time()
    for notif in notifications:
        if notif["raw"] == message:
            notif["start"] = now
            notif["kind"] = kind
            return

    notifications.append({"raw": message, "kind": kind, "start": now})
    del notifications[:-MAX_COUNT]


def clear_notifications():
    notifications.clear()


def _alpha(elapsed: float) -> float:
    if elapsed <= DURATION:
        return 1.0
    return max(0.0, 1.0 - (elapsed - DURATION) / FADE_TIME)


def _wrap_text(text, font, max_width):
    lines, current = [], ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def draw_notifications(screen):
    font = _get_font()
    now = time.time()
    notifications[:] = [n for n in notifications if now - n["start"] <= DURATION + FADE_TIME]

    sw, sh = screen.get_size()
    bottom = sh - SPACING
    line_h = font.get_height()
    for notif in reversed(notifications):
        alpha = _alpha(now - notif["start"])
        lines = _wrap_text(notif["raw"], font, MAX_WIDTH - 2 * PADDING)
        w = min(MAX_WIDTH, max(font.size(l)[0] for l in lines) + 2 * PADDING)
        h = len(lines) * line_h + 2 * PADDING

        box = pygame.Surface((w, h), pygame.SRCALPHA)
        box.fill((*BG_COLOR, int(230 * alpha)))
        pygame.draw.rect(box, (*BORDER_COLORS[notif["kind"]], int(255 * alpha)), box.get_rect(), 2)
        for i, line in enumerate(lines):
            text = font.render(line, True, TEXT_COLOR)
            text.set_alpha(int(255 * alpha))
            box.blit(text, (PADDING, PADDING + i * line_h))

        screen.blit(box, (sw - w - SPACING, bottom - h))
        bottom -= h + SPACING
