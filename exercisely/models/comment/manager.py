import logging
import uuid

from exercisely import models
from exercisely.models.keys import ItemKey
from exercisely.models.ledger import EdgeLedger

from .dynamo import CommentDynamo
from .exceptions import CommentAuthorDoesNotExist, CommentDoesNotExist, NotCommentAuthor
from .targets import ByComment, ByExercise

logger = logging.getLogger()

COMMENT_ATTRIBUTES = ('commentId', 'exerciseId', 'userId', 'content', 'createdAt', 'updatedAt')


class CommentManager:
    def __init__(self, clients, managers=None):
        managers = managers if managers is not None else {}
        managers['comment'] = self
        self.exercise_manager = managers.get('exercise') or models.ExerciseManager(clients, managers=managers)
        self.user_manager = managers.get('user') or models.UserManager(clients, managers=managers)

        self.clients = clients
        if 'dynamo' in clients:
            self.dynamo = CommentDynamo(clients['dynamo'])
            self.ledger = EdgeLedger(clients['dynamo'])

    def serialize(self, comment_item, author_summary):
        return {
            **{k: comment_item[k] for k in COMMENT_ATTRIBUTES},
            'user': {'name': author_summary['name'], 'profilePhotoUrl': author_summary['profilePhotoUrl']},
        }

    def add_comment(self, user_id, exercise_id, content, comment_id=None, now=None):
        self.exercise_manager.get_exercise_item(exercise_id)
        comment_id = comment_id or str(uuid.uuid4())
        comment_item, exercise_item = self.ledger.add(
            lambda: self.dynamo.add_comment(comment_id, exercise_id, user_id, content, now=now),
            ItemKey.exercise(exercise_id),
            'commentCount',
        )
        self.exercise_manager.patch_cache(exercise_id, exercise_item)
        return {k: comment_item[k] for k in COMMENT_ATTRIBUTES}

    def delete_comment(self, user_id, comment_id):
        "Only the author may delete a comment"
        comment_item = self.dynamo.get_comment(comment_id)
        if not comment_item:
            raise CommentDoesNotExist(comment_id)
        if comment_item['userId'] != user_id:
            raise NotCommentAuthor(comment_id, user_id)
        self.remove_comment(comment_item['exerciseId'], comment_id)

    def remove_comment(self, exercise_id, comment_id):
        _, exercise_item = self.ledger.remove(
            lambda: self.dynamo.delete_comment(exercise_id, comment_id),
            ItemKey.exercise(exercise_id),
            'commentCount',
        )
        self.exercise_manager.patch_cache(exercise_id, exercise_item)

    def delete_all_by_user(self, user_id):
        comment_items = list(self.dynamo.generate_by_user(user_id))
        for comment_item in comment_items:
            self.remove_comment(comment_item['exerciseId'], comment_item['commentId'])
        logger.info(f'Deleted {len(comment_items)} comments by user `{user_id}`')

    def get_comments(self, comment_query):
        """
        A single comment for a ByComment query, a list of comments (newest first) for a ByExercise query.
        Every comment is joined with a summary of its author. An author that can't be found is an error.
        """
        if isinstance(comment_query, ByComment):
            comment_item = self.dynamo.get_comment(comment_query.comment_id)
            if not comment_item:
                raise CommentDoesNotExist(comment_query.comment_id)
            return self.join_authors([comment_item])[0]

        if isinstance(comment_query, ByExercise):
            comment_items = sorted(
                self.dynamo.generate_by_exercise(comment_query.exercise_id),
                key=lambda item: item['createdAt'],
                reverse=True,
            )
            return self.join_authors(comment_items)

        raise TypeError(f'Unexpected comment query `{comment_query!r}`')

    def join_authors(self, comment_items):
        summaries = self.user_manager.get_user_summaries({item['userId'] for item in comment_items})
        resp = []
        for comment_item in comment_items:
            summary = summaries.get(comment_item['userId'])
            if summary is None:
                raise CommentAuthorDoesNotExist(comment_item['commentId'], comment_item['userId'])
            resp.append(self.serialize(comment_item, summary))
        return resp
