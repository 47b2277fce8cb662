import collections

from .exceptions import CommentQueryException


class ByExercise(collections.namedtuple('ByExercise', ['exercise_id'])):
    "All comments on one exercise"


class ByComment(collections.namedtuple('ByComment', ['comment_id'])):
    "A single comment"


class CommentQuery:
    """
    What a comment read is addressed by: exactly one of an exercise or a comment.
    Build with `from_arguments` where the request is parsed and pass the variant on.
    """

    ByExercise = ByExercise
    ByComment = ByComment

    @staticmethod
    def from_arguments(exercise_id=None, comment_id=None):
        if exercise_id and comment_id:
            raise CommentQueryException('Cannot query comments by both exerciseId and commentId')
        if exercise_id:
            return ByExercise(exercise_id)
        if comment_id:
            return ByComment(comment_id)
        raise CommentQueryException('Must provide either exerciseId or commentId')
