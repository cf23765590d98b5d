# WORLD_GEN.PY
# Génère le donjon (grille, brouillard, entités) à partir des paramètres fournis


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations

import json
import os
import random
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple

from Dungeon.core.utils import package_path
from Dungeon.gameplay.entities import Monster, Player, Trap, Treasure
from Dungeon.gameplay.world_state import World
from Dungeon.world.fog_of_war import FogOfWar
from Dungeon.world.grid import Grid
from Dungeon.world.tiles import DOOR_CLOSED, EMPTY, WALL

DEFAULT_PRESETS_PATH = package_path("data", "world_presets.json")

# bordure murée + au moins une case intérieure
MIN_SIZE = 3


# --------- Données & paramètres ---------
@dataclass
class WorldParams:
    seed: Optional[int] = None
    width: int = 21
    height: int = 21

    # génération
    monsters: int = 10
    treasures: int = 10
    traps: int = 10
    door_chance: float = 0.01

    # joueur
    fov: float = 2.5
    player_health: int = 3
    player_speed: float = 4.0
    hurt_duration: float = 0.4
    loot_duration: float = 1.0

    # brouillard
    fov_metric: str = "euclidean"         # "euclidean" ou "manhattan" (losange)
    fog_subdivision: int = 1
    reveal_epsilon: float = 0.0001
    reveal_scale_by_delta: bool = False   # False = comportement historique (par tick)
    fog_decay_rate: float = 5.0
    count_only_hidden_cells: bool = False

    # attaque au corps à corps
    attack_cooldown: float = 0.4
    attack_duration: float = 0.2
    slash_duration: float = 0.15
    slash_damage: int = 1

    # sort
    spell_max_charges: int = 3
    spell_recharge: float = 3.0
    spell_range: float = 5.0
    fireball_speed: float = 8.0           # cases / seconde
    fireball_damage: int = 1

    # monstres / pièges / trésors
    monster_health: int = 2
    monster_damage: int = 1
    monster_cooldown: float = 1.0
    monster_telegraph: float = 0.5
    trap_damage: int = 1
    treasure_min_value: int = 1
    treasure_max_value: int = 5
    treasure_health: int = 2
    loot_values: Tuple[int, ...] = (1, 2)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "WorldParams":
        known = {f.name for f in fields(WorldParams)}
        unknown = set(d) - known
        if unknown:
            print(f"[WorldGen] Paramètres ignorés: {sorted(unknown)}")
        kwargs = {k: v for k, v in d.items() if k in known}
        if "loot_values" in kwargs:
            kwargs["loot_values"] = tuple(int(v) for v in kwargs["loot_values"])
        params = WorldParams(**kwargs)
        params.validate()
        return params

    def validate(self) -> None:
        """Lève ValueError pour un jeu de paramètres impossible à générer."""
        if self.width < MIN_SIZE or self.height < MIN_SIZE:
            raise ValueError(f"[WorldGen] Donjon trop petit: {self.width}x{self.height} (minimum {MIN_SIZE}x{MIN_SIZE})")
        if not self.loot_values:
            raise ValueError("[WorldGen] loot_values ne peut pas être vide")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["loot_values"] = list(self.loot_values)
        return d


# --------- Presets ---------
def load_world_params_from_preset(
    preset_name: str,
    path: str = DEFAULT_PRESETS_PATH,
    overrides: Optional[Dict[str, Any]] = None
) -> WorldParams:
    """
    Charge un preset de donjon depuis le JSON { "presets": { nom: {...} } }.
    Les overrides éventuels écrasent les valeurs du preset.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Preset file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)

    preset = doc.get("presets", {}).get(preset_name)
    if preset is None:
        raise KeyError(f"Preset '{preset_name}' not found in {path}")

    d: Dict[str, Any] = dict(preset)
    if overrides:
        d.update(overrides)
    return WorldParams.from_dict(d)


# --------- Générateur ---------
class WorldGenerator:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(self, params: WorldParams, rng_seed: Optional[int] = None) -> World:
        params.validate()
        seed = rng_seed if rng_seed is not None else params.seed
        rng = random.Random(seed) if seed is not None else self._rng

        grid = self._build_grid(params, rng)
        fog = make_fog(params)
        world = World(params=params, grid=grid, fog=fog, rng=rng)

        px, py = params.width // 2, params.height // 2
        # la case de départ est toujours praticable
        grid.set(px, py, EMPTY)
        world.entities.append(make_player(params, px, py))

        self._scatter(world, params, rng)
        world.fog.recompute(world.entities)
        return world

    def _build_grid(self, params: WorldParams, rng: random.Random) -> Grid:
        grid = Grid(params.width, params.height, fill=EMPTY)
        for x, y in grid.coords():
            if grid.is_border(x, y):
                grid.set(x, y, WALL)
            elif rng.random() < params.door_chance:
                grid.set(x, y, DOOR_CLOSED)
        return grid

    def _scatter(self, world: World, params: WorldParams, rng: random.Random) -> None:
        """
        Place les dangers sur des cases intérieures praticables.
        Politique "on saute si occupé": pas de nouvel essai, le total peut être inférieur.
        """
        occupied = {e.pos for e in world.entities}
        plan = (
            [lambda x, y: Monster(x=x, y=y, health=params.monster_health, damage=params.monster_damage,
                                  cooldown=params.monster_cooldown)] * params.monsters
            + [lambda x, y: Treasure(x=x, y=y, health=params.treasure_health,
                                     value=rng.randint(params.treasure_min_value, params.treasure_max_value))] * params.treasures
            + [lambda x, y: Trap(x=x, y=y, damage=params.trap_damage)] * params.traps
        )
        for factory in plan:
            x = rng.randint(1, params.width - 2)
            y = rng.randint(1, params.height - 2)
            if (x, y) in occupied or world.grid.at(x, y) != EMPTY:
                continue
            world.entities.append(factory(x, y))
            occupied.add((x, y))


def make_fog(params: WorldParams) -> FogOfWar:
    return FogOfWar(
        params.width,
        params.height,
        subdivision=params.fog_subdivision,
        metric=params.fov_metric,
        reveal_epsilon=params.reveal_epsilon,
        decay_rate=params.fog_decay_rate,
        scale_epsilon_by_delta=params.reveal_scale_by_delta,
        count_only_hidden_cells=params.count_only_hidden_cells,
    )


def make_player(params: WorldParams, x: int, y: int) -> Player:
    p = Player(x=x, y=y, fov=params.fov, health=params.player_health,
               max_health=params.player_health, speed=params.player_speed)
    p.animation.from_pos = (float(x), float(y))
    return p


def empty_world(params: Optional[WorldParams] = None, player_at: Optional[Tuple[int, int]] = None) -> World:
    """Monde sans dangers (murs en bordure, intérieur vide): pratique pour les scénarios."""
    params = params or WorldParams()
    params.validate()
    grid = Grid(params.width, params.height, fill=EMPTY)
    grid.fill_border(WALL)
    world = World(params=params, grid=grid, fog=make_fog(params), rng=random.Random(params.seed))
    px, py = player_at or (params.width // 2, params.height // 2)
    world.entities.append(make_player(params, px, py))
    return world
