from exercisely.exceptions import BadRequest, ExerciselyException, NotFound


class UserException(ExerciselyException):
    pass


class UserValidationException(UserException, BadRequest):
    pass


class UserDoesNotExist(UserException, NotFound):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` does not exist'


class UserAlreadyExists(UserException, BadRequest):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` already exists'
