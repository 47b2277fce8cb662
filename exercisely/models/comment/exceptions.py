from exercisely.exceptions import BadRequest, ExerciselyException, Forbidden, NotFound


class CommentException(ExerciselyException):
    pass


class CommentQueryException(CommentException, BadRequest):
    pass


class CommentDoesNotExist(CommentException, NotFound):
    def __init__(self, comment_id):
        self.comment_id = comment_id
        super().__init__()

    def __str__(self):
        return f'Comment `{self.comment_id}` does not exist'


class CommentAlreadyExists(CommentException, BadRequest):
    def __init__(self, comment_id):
        self.comment_id = comment_id
        super().__init__()

    def __str__(self):
        return f'Comment `{self.comment_id}` already exists'


class CommentAuthorDoesNotExist(CommentException, NotFound):
    def __init__(self, comment_id, user_id):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'Author `{self.user_id}` of comment `{self.comment_id}` does not exist'


class NotCommentAuthor(CommentException, Forbidden):
    def __init__(self, comment_id, user_id):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__()

    def __str__(self):
        return f'User `{self.user_id}` is not the author of comment `{self.comment_id}`'
