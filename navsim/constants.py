# Speed cap handed to each body's steering controller (distance units / time unit)
DEFAULT_MAX_SPEED = 1.0

# Fixed simulation step drained from the frame accumulator, in seconds
FIXED_TIMESTEP = 0.016

# Quaternion stored as (x, y, z, w)
IDENTITY_ORIENTATION = (0.0, 0.0, 0.0, 1.0)

# Pieces a straight route is cut into when midpoints are requested
DEFAULT_SEGMENTS = 4

DEFAULT_QUERY_MODE = "accuracy"
