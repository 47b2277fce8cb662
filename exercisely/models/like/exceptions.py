from exercisely.exceptions import BadRequest, ExerciselyException


class LikeException(ExerciselyException):
    pass


class AlreadyLiked(LikeException, BadRequest):
    def __init__(self, user_id, exercise_id):
        self.user_id = user_id
        self.exercise_id = exercise_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` has already liked exercise `{self.exercise_id}`'


class NotLiked(LikeException, BadRequest):
    def __init__(self, user_id, exercise_id):
        self.user_id = user_id
        self.exercise_id = exercise_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` has not liked exercise `{self.exercise_id}`'
