"""
This is the main file to run the game.
It imports the run function from the app module and runs it.
"""

from space_invaders_sim.app import run

if __name__ == "__main__":
    run()
