class GoalServiceError(Exception):
    """Base class for failures raised by the goal access layer."""


class Unauthenticated(GoalServiceError):
    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class GoalNotFoundOrForbidden(GoalServiceError):
    """The goal does not exist or belongs to another user.

    Both cases share one error so callers cannot probe for other users' goals.
    """

    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal {goal_id} not found or not permitted")


class GoalStoreError(GoalServiceError):
    """The document or blob store call itself failed."""


class GoalValidationError(GoalServiceError):
    """A supplied field value cannot be stored on a goal."""
