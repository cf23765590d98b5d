#Pour que le jeu se lance à la racine
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../")))

#Importation des modules
from Dungeon.core.app import App


def main():
    game = App()
    game.run()


# Démarrage du jeu :)
if __name__ == "__main__":
    main()
