import logging

import pendulum
from boto3.dynamodb.conditions import Key

from exercisely.models.keys import EntityKind, Index, ItemKey, SortKind, prefix

from .exceptions import CommentAlreadyExists, CommentDoesNotExist

logger = logging.getLogger()


class CommentDynamo:
    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, exercise_id, comment_id):
        return ItemKey.comment(exercise_id, comment_id)

    def get_comment(self, comment_id):
        "Comments are addressed by id alone through the sort key index, which is eventually consistent"
        query_kwargs = {
            'KeyConditionExpression': Key('sortKey').eq(prefix(SortKind.COMMENT, comment_id)),
            'IndexName': Index.BY_SORT_KEY,
        }
        return self.client.query_head(query_kwargs)

    def add_comment(self, comment_id, exercise_id, user_id, content, now=None):
        now = now or pendulum.now('utc')
        now_str = now.to_iso8601_string()
        query_kwargs = {
            'Item': {
                **self.key(exercise_id, comment_id).pk,
                'schemaVersion': 0,
                Index.BY_CLASS_PK: prefix(EntityKind.USER, user_id),
                Index.BY_CLASS_SK: prefix(SortKind.COMMENT, comment_id),
                'commentId': comment_id,
                'exerciseId': exercise_id,
                'userId': user_id,
                'content': content,
                'createdAt': now_str,
                'updatedAt': now_str,
            },
        }
        try:
            return self.client.add_item(query_kwargs)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise CommentAlreadyExists(comment_id) from err

    def delete_comment(self, exercise_id, comment_id):
        try:
            return self.client.delete_item(self.key(exercise_id, comment_id).pk, must_exist=True)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise CommentDoesNotExist(comment_id) from err

    def generate_by_exercise(self, exercise_id):
        query_kwargs = {
            'KeyConditionExpression': Key('partitionKey').eq(prefix(EntityKind.EXERCISE, exercise_id))
            & Key('sortKey').begins_with(prefix(SortKind.COMMENT)),
        }
        return self.client.generate_all_query(query_kwargs)

    def generate_by_user(self, user_id):
        "Every comment the user has written, on any exercise"
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_CLASS_PK).eq(prefix(EntityKind.USER, user_id))
            & Key(Index.BY_CLASS_SK).begins_with(prefix(SortKind.COMMENT)),
            'IndexName': Index.BY_CLASS,
        }
        return self.client.generate_all_query(query_kwargs)
