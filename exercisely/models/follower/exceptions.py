from exercisely.exceptions import BadRequest, ExerciselyException, Forbidden, NotFound


class FollowerException(ExerciselyException):
    pass


class FollowerValidationException(FollowerException, BadRequest):
    pass


class AlreadyFollowing(FollowerException, BadRequest):
    def __init__(self, follower_user_id, target):
        self.follower_user_id = follower_user_id
        self.target = target
        super().__init__()

    def __str__(self):
        return f'User `{self.follower_user_id}` already follows `{self.target}`'


class NotFollowing(FollowerException, BadRequest):
    def __init__(self, follower_user_id, target):
        self.follower_user_id = follower_user_id
        self.target = target
        super().__init__()

    def __str__(self):
        return f'User `{self.follower_user_id}` does not follow `{self.target}`'


class ListNotFollowable(FollowerException, Forbidden):
    def __init__(self, follower_user_id, list_id):
        self.follower_user_id = follower_user_id
        self.list_id = list_id
        super().__init__()

    def __str__(self):
        return f'User `{self.follower_user_id}` may not follow list `{self.list_id}`'


class FollowerUserDoesNotExist(FollowerException, NotFound):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` in follow relationship does not exist'
