__all__ = [
    'CommentManager',
    'ExerciseManager',
    'FollowerManager',
    'LikeManager',
    'ListManager',
    'UserManager',
]

from .comment.manager import CommentManager
from .exercise.manager import ExerciseManager
from .follower.manager import FollowerManager
from .like.manager import LikeManager
from .list.manager import ListManager
from .user.manager import UserManager
