# Default render parameters. The CLI overrides these from its arguments.

WIDTH, HEIGHT = 512, 512

CLEAR_COLOR = (50, 50, 50)
BASE_COLOR = (255, 255, 255)
# Debug overlay drawn over filled triangles when outlines are on.
OUTLINE_COLOR = (255, 50, 255)

# Light travels along -z, toward a viewer looking down the z axis.
LIGHT_DIR = (0.0, 0.0, -1.0)
# "ccw": counter-clockwise as seen from +z is front facing.
WINDING = "ccw"

# Inside-test slack so triangles sharing an edge leave no gaps.
EPSILON = 1e-6

FILL = "barycentric"
OUTPUT_PATH = "output.png"
