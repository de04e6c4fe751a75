"""Board geometry and timing shared by the game modules."""

HEIGHT = 20
WIDTH = 10
BLOCK_SIZE = 4
TILE_SIZE = 50
WAIT_TIME = 500  # milliseconds between automatic drops

SPAWN_X = WIDTH // 2 - BLOCK_SIZE // 2
SPAWN_Y = 0