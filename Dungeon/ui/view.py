# VIEW.PY
# Vue de debug à plat (rectangles / cercles) d'un WorldSnapshot


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations

import pygame

from Dungeon.core.camera import GridCamera
from Dungeon.gameplay.entities import (
    ATTACKING, FIREBALL, FLAG, HURTING, LOOT, LOOTING, MONSTER, NORMAL, PLAYER, SWORD_SLASH, TRAP, TREASURE,
    unknown_kind,
)
from Dungeon.gameplay.world_state import LOSE, PAUSED, WIN
from Dungeon.world.tiles import WALL, get_tile_color, wall_variant

FOG_COLOR = (128, 128, 128)
WALL_EDGE_COLOR = (70, 70, 70)
GRID_LINE_COLOR = (211, 211, 211)
PIP_COLORS = {"enemies": (220, 30, 30), "traps": (255, 165, 0), "treasures": (0, 150, 0)}
PLAYER_COLORS = {
    NORMAL: (0, 0, 0),
    ATTACKING: (139, 0, 0),
    LOOTING: (0, 100, 0),
    HURTING: (255, 80, 80),
}

# Disposition des pastilles "danger senti" selon leur nombre (fractions de case)
PIP_LAYOUTS = [
    [],
    [(0.5, 0.5)],
    [(0.8, 0.2), (0.2, 0.8)],
    [(0.8, 0.2), (0.2, 0.8), (0.5, 0.5)],
    [(0.2, 0.2), (0.8, 0.2), (0.2, 0.8), (0.8, 0.8)],
    [(0.2, 0.2), (0.8, 0.2), (0.2, 0.8), (0.8, 0.8), (0.5, 0.5)],
    [(0.2, 0.2), (0.8, 0.2), (0.2, 0.8), (0.8, 0.8), (0.2, 0.5), (0.8, 0.5)],
    [(0.2, 0.33), (0.2, 0.66), (0.5, 0.2), (0.5, 0.5), (0.5, 0.8), (0.8, 0.33), (0.8, 0.66)],
    [(0.2, 0.2), (0.8, 0.2), (0.2, 0.8), (0.8, 0.8), (0.2, 0.5), (0.8, 0.5), (0.5, 0.33), (0.5, 0.66)],
]


class GridView:
    def __init__(self, camera: GridCamera):
        self.camera = camera
        self.font = None
        self.show_grid = True

    def _get_font(self):
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 16)
        return self.font

    # ---------- RENDER ----------
    def render(self, screen: pygame.Surface, snap) -> None:
        screen.fill((51, 51, 51))
        cam = self.camera
        cs = cam.cell_size

        for y in range(snap.height):
            for x in range(snap.width):
                pygame.draw.rect(screen, get_tile_color(snap.tile(x, y)), cam.cell_rect(x, y))
                if snap.tile(x, y) == WALL:
                    self._draw_wall(screen, snap, x, y)

        fixtures = [e for e in snap.entities if e.kind in (MONSTER, TREASURE, TRAP, LOOT)]
        overlays = [e for e in snap.entities if e.kind not in (MONSTER, TREASURE, TRAP, LOOT)]
        for ent in fixtures:
            self._draw_entity(screen, ent)

        self._draw_fog(screen, snap)

        if self.show_grid:
            ox, oy = cam.origin
            for x in range(snap.width + 1):
                pygame.draw.line(screen, GRID_LINE_COLOR, (ox + x * cs, oy), (ox + x * cs, oy + snap.height * cs))
            for y in range(snap.height + 1):
                pygame.draw.line(screen, GRID_LINE_COLOR, (ox, oy + y * cs), (ox + snap.width * cs, oy + y * cs))

        for ent in overlays:
            self._draw_entity(screen, ent)

        self._draw_hud(screen, snap)

    def _draw_wall(self, screen, snap, x, y):
        variant = wall_variant(snap, x, y)
        rect = self.camera.cell_rect(x, y)
        if variant in ("pillar", "end"):
            pygame.draw.rect(screen, WALL_EDGE_COLOR, rect.inflate(-16, -16), 2)
            return
        if variant in ("horizontal", "cross", "corner"):
            pygame.draw.line(screen, WALL_EDGE_COLOR, rect.midleft, rect.midright, 2)
        if variant in ("vertical", "cross", "corner"):
            pygame.draw.line(screen, WALL_EDGE_COLOR, rect.midtop, rect.midbottom, 2)

    def _draw_fog(self, screen, snap):
        r = snap.subdivision
        sub = self.camera.cell_size / r
        ox, oy = self.camera.origin
        fw = snap.width * r
        veil = pygame.Surface((max(1, int(sub + 0.999)), max(1, int(sub + 0.999))), pygame.SRCALPHA)

        for i, cell in enumerate(snap.fog):
            sx, sy = i % fw, i // fw
            px, py = ox + sx * sub, oy + sy * sub
            if cell.opacity != 0:
                veil.fill((*FOG_COLOR, int(255 * cell.opacity)))
                screen.blit(veil, (px, py))
                continue
            counts = (("enemies", cell.enemies), ("traps", cell.traps), ("treasures", cell.treasures))
            total = cell.enemies + cell.traps + cell.treasures
            if total == 0:
                continue
            layout = PIP_LAYOUTS[min(total, len(PIP_LAYOUTS) - 1)]
            radius = max(1, int(0.13 * sub))
            i_pip = 0
            for name, n in counts:
                for _ in range(n):
                    if i_pip >= len(layout):
                        break
                    fx, fy = layout[i_pip]
                    pygame.draw.circle(screen, PIP_COLORS[name], (int(px + fx * sub), int(py + fy * sub)), radius)
                    i_pip += 1

    def _draw_entity(self, screen, ent):
        cam = self.camera
        cs = cam.cell_size
        rect = cam.cell_rect(ent.x, ent.y)
        if ent.kind == MONSTER:
            pygame.draw.circle(screen, (220, 0, 0), rect.center, int(cs / 3.5))
            if ent.target is not None:
                pygame.draw.rect(screen, (220, 0, 0), cam.cell_rect(*ent.target), 2)
        elif ent.kind == TREASURE:
            color = (150, 150, 150) if ent.spent else (0, 128, 0)
            pygame.draw.rect(screen, color, rect.inflate(-20, -20))
        elif ent.kind == TRAP:
            pygame.draw.polygon(screen, (255, 165, 0), [
                (rect.centerx, rect.top + 5), (rect.right - 5, rect.bottom - 5), (rect.left + 5, rect.bottom - 5)])
        elif ent.kind == LOOT:
            pygame.draw.circle(screen, (230, 200, 0), rect.center, int(cs / 6))
        elif ent.kind == FLAG:
            pygame.draw.line(screen, (30, 30, 200), (rect.left + 8, rect.bottom - 5), (rect.left + 8, rect.top + 5), 2)
            pygame.draw.polygon(screen, (30, 30, 200), [
                (rect.left + 8, rect.top + 5), (rect.right - 6, rect.top + 10), (rect.left + 8, rect.top + 15)])
        elif ent.kind == SWORD_SLASH:
            pygame.draw.line(screen, (139, 0, 0), rect.topleft, rect.bottomright, 3)
        elif ent.kind == FIREBALL:
            t = ent.progress()
            ox, oy = ent.origin
            sx, sy = cam.world_to_screen(ox + (ent.x - ox) * t + 0.5, oy + (ent.y - oy) * t + 0.5)
            pygame.draw.circle(screen, (255, 120, 0), (sx, sy), int(cs / 4))
        elif ent.kind == PLAYER:
            fx, fy = ent.render_pos()
            sx, sy = cam.world_to_screen(fx + 0.5, fy + 0.5)
            pygame.draw.circle(screen, PLAYER_COLORS.get(ent.state, (0, 0, 0)), (sx, sy), int(cs / 3.5))
        else:
            raise unknown_kind(ent)

    def _draw_hud(self, screen, snap):
        font = self._get_font()
        hud = snap.hud
        lines = [
            f"PV {hud['health']}/{hud['max_health']}   Or {hud['wealth']}",
            f"Attaque {int(hud['attack_ready'] * 100)}%   Sort {hud['spell_charges']}/{hud['spell_max_charges']}"
            f" ({int(hud['spell_recharge'] * 100)}%)",
        ]
        if snap.state == PAUSED:
            lines.append("PAUSE")
        elif snap.state == WIN:
            lines.append("VICTOIRE - R pour rejouer")
        elif snap.state == LOSE:
            lines.append("DEFAITE - R pour rejouer")
        y = 10
        for line in lines:
            screen.blit(font.render(line, True, (255, 255, 255)), (10, y))
            y += font.get_height() + 2
