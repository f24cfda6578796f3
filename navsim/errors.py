class NavigationError(Exception):
    """Base class for navigation failures."""


class PathUnavailable(NavigationError):
    """Raised by a path provider when no route connects start and goal."""

    def __init__(self, start, goal, reason: str = "no path found"):
        self.start = start
        self.goal = goal
        self.reason = reason
        super().__init__(f"{reason}: {list(start)} -> {list(goal)}")
