from exercisely.exceptions import BadRequest, ExerciselyException, NotFound


class ExerciseException(ExerciselyException):
    pass


class ExerciseDoesNotExist(ExerciseException, NotFound):
    def __init__(self, exercise_id):
        self.exercise_id = exercise_id
        super().__init__()

    def __str__(self):
        return f'Exercise `{self.exercise_id}` does not exist'


class ExerciseFilterException(ExerciseException, BadRequest):
    pass


class ExercisePaginationException(ExerciseException, BadRequest):
    pass
