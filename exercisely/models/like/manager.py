import logging

from exercisely import models
from exercisely.models.keys import ItemKey
from exercisely.models.ledger import EdgeLedger

from .dynamo import LikeDynamo

logger = logging.getLogger()


class LikeManager:
    def __init__(self, clients, managers=None):
        managers = managers if managers is not None else {}
        managers['like'] = self
        self.exercise_manager = managers.get('exercise') or models.ExerciseManager(clients, managers=managers)
        self.user_manager = managers.get('user') or models.UserManager(clients, managers=managers)

        self.clients = clients
        if 'dynamo' in clients:
            self.dynamo = LikeDynamo(clients['dynamo'])
            self.ledger = EdgeLedger(clients['dynamo'])

    def like_exercise(self, user_id, exercise_id, now=None):
        "Raises AlreadyLiked if the user already likes the exercise, in which case nothing changes"
        self.exercise_manager.get_exercise_item(exercise_id)
        _, exercise_item = self.ledger.add(
            lambda: self.dynamo.add_like(exercise_id, user_id, now=now),
            ItemKey.exercise(exercise_id),
            'likeCount',
        )
        self.user_manager.dynamo.add_liked_exercise(user_id, exercise_id)
        self.exercise_manager.patch_cache(exercise_id, exercise_item)

    def unlike_exercise(self, user_id, exercise_id):
        "Raises NotLiked if the user doesn't like the exercise, in which case nothing changes"
        self.exercise_manager.get_exercise_item(exercise_id)
        self.remove_like(user_id, exercise_id)

    def remove_like(self, user_id, exercise_id):
        _, exercise_item = self.ledger.remove(
            lambda: self.dynamo.delete_like(exercise_id, user_id),
            ItemKey.exercise(exercise_id),
            'likeCount',
        )
        self.user_manager.dynamo.remove_liked_exercise(user_id, exercise_id)
        self.exercise_manager.patch_cache(exercise_id, exercise_item)

    def unlike_all_by_user(self, user_id):
        "Remove every like the user has made"
        like_items = list(self.dynamo.generate_by_user(user_id))
        for like_item in like_items:
            self.remove_like(user_id, like_item['exerciseId'])
        logger.info(f'Removed {len(like_items)} likes by user `{user_id}`')
