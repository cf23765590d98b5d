# CONFIG.PY
# Code qui gère les paramètres du jeu et les variables GLOBALES


# --------------- IMPORTATION DES MODULES ---------------
import copy
import json
import os

# --------------- VARIABLES GLOBALES ---------------
WIDTH = 900
HEIGHT = 900
FPS = 60
TITLE = "Dungeon"
CELL_SIZE = 35  # taille d'une case à l'écran (pixels)

DEFAULTS = {
    "video": {"fps_cap": 60, "cell_size": CELL_SIZE},
    "gameplay": {"preset": "Default", "seed": None},
    "controls": {"mouse_aim": True},
}


def _merge(base: dict, extra: dict) -> dict:
    """Fusion récursive: les valeurs de `extra` écrasent celles de `base`."""
    out = copy.deepcopy(base)
    for k, v in (extra or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


# --------------- CLASSE QUI GERE LES PARAMETRES PRINCIPAUX ---------------
class Settings:
    def __init__(self, path="Dungeon/data/settings.json"):
        self.path = path
        self.data = {}
        self._listeners = []
        self.load()

    # Charge les paramètres enregistrés dans le fichier .json
    def load(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)

        if not os.path.exists(self.path):
            print(f"[Settings] Fichier de configuration introuvable, création avec valeurs par défaut")
            self.reset()
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read().strip()

            if not content:
                print(f"[Settings] Fichier de configuration vide, réinitialisation")
                self.reset()
                return

            loaded = json.loads(content)
            if not isinstance(loaded, dict):
                print(f"[Settings] Format inattendu dans {self.path}, réinitialisation")
                self.reset()
                return

            self.data = _merge(DEFAULTS, loaded)
            print(f"[Settings] Configuration chargée depuis {self.path}")

        except json.JSONDecodeError as e:
            print(f"[Settings] Erreur de lecture du fichier de configuration: {e}")
            print(f"   Le fichier sera réinitialisé avec les valeurs par défaut")
            self.reset()

    def reset(self):
        self.data = copy.deepcopy(DEFAULTS)
        self.save()

    # Sauvegarde les paramètres dans le fichier .json
    def save(self):
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            print(f"[Settings] Erreur lors de la sauvegarde de la configuration: {e}")

    # Lecture par chemin pointé: "video.fps_cap"
    def get(self, path, default=None):
        node = self.data
        for k in path.split("."):
            if not isinstance(node, dict) or k not in node:
                return default
            node = node[k]
        return node

    def set(self, path, value, save=True):
        keys = path.split(".")
        node = self.data
        for k in keys[:-1]:
            node = node.setdefault(k, {})
        node[keys[-1]] = value
        if save:
            self.save()
        for cb in self._listeners:
            cb(path, value)

    def on_change(self, callback):
        self._listeners.append(callback)
