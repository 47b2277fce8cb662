"""
Transport-independent kinds of failure.

Every domain exception raised out of a manager subclasses exactly one of these
kinds, so the entry point layer can shape a response without knowing about any
particular model.
"""


class ExerciselyException(Exception):
    pass


class BadRequest(ExerciselyException):
    "Structurally invalid input, or a guarded write whose guard did not hold"


class Unauthenticated(ExerciselyException):
    pass


class Forbidden(ExerciselyException):
    "Caller lacks ownership or sharing rights"


class NotFound(ExerciselyException):
    pass
