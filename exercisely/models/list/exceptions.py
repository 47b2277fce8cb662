from exercisely.exceptions import BadRequest, ExerciselyException, Forbidden, NotFound


class ListException(ExerciselyException):
    pass


class ListValidationException(ListException, BadRequest):
    pass


class ListDoesNotExist(ListException, NotFound):
    def __init__(self, list_id):
        self.list_id = list_id
        super().__init__()

    def __str__(self):
        return f'List `{self.list_id}` does not exist'


class NotListOwner(ListException, Forbidden):
    def __init__(self, list_id, user_id):
        self.list_id = list_id
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` does not own list `{self.list_id}`'


class ListOwnerDoesNotExist(ListException, NotFound):
    def __init__(self, list_id, user_id):
        self.list_id = list_id
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'Owner `{self.user_id}` of list `{self.list_id}` does not exist'


class ExerciseAlreadyInList(ListException, BadRequest):
    def __init__(self, list_id, exercise_id):
        self.list_id = list_id
        self.exercise_id = exercise_id
        super().__init__()

    def __str__(self):
        return f'Exercise `{self.exercise_id}` is already in list `{self.list_id}`'
