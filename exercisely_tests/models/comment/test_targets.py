import pytest

from exercisely.models.comment.exceptions import CommentQueryException
from exercisely.models.comment.targets import ByComment, ByExercise, CommentQuery


def test_from_arguments():
    assert CommentQuery.from_arguments(exercise_id='eid') == ByExercise('eid')
    assert CommentQuery.from_arguments(comment_id='cid') == ByComment('cid')
    assert CommentQuery.from_arguments('eid', None) == CommentQuery.ByExercise('eid')


@pytest.mark.parametrize('exercise_id, comment_id', [[None, None], ['', ''], ['eid', 'cid']])
def test_from_arguments_exactly_one(exercise_id, comment_id):
    with pytest.raises(CommentQueryException):
        CommentQuery.from_arguments(exercise_id, comment_id)
