# UTILS.PY
# Petites fonctions utilitaires partagées


# --------------- IMPORTATION DES MODULES ---------------
from __future__ import annotations
import os, sys


def resource_path(relative_path: str) -> str:
    base_path = getattr(sys, '_MEIPASS', os.path.abspath("."))
    return os.path.join(base_path, relative_path)


def package_path(*parts: str) -> str:
    """Chemin absolu vers un fichier livré avec le package (ex: data/world_presets.json)."""
    here = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(here, *parts)


def sign(v: int) -> int:
    return 1 if v > 0 else (-1 if v < 0 else 0)
