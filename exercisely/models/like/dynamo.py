import logging

import pendulum
from boto3.dynamodb.conditions import Key

from exercisely.models.keys import EntityKind, Index, ItemKey, SortKind, prefix

from .exceptions import AlreadyLiked, NotLiked

logger = logging.getLogger()


class LikeDynamo:
    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, exercise_id, user_id):
        return ItemKey.like(exercise_id, user_id)

    def get_like(self, exercise_id, user_id, strongly_consistent=False):
        return self.client.get_item(self.key(exercise_id, user_id).pk, ConsistentRead=strongly_consistent)

    def add_like(self, exercise_id, user_id, now=None):
        now = now or pendulum.now('utc')
        query_kwargs = {
            'Item': {
                **self.key(exercise_id, user_id).pk,
                'schemaVersion': 0,
                Index.BY_CLASS_PK: prefix(EntityKind.USER, user_id),
                Index.BY_CLASS_SK: prefix(SortKind.LIKE, exercise_id),
                'exerciseId': exercise_id,
                'userId': user_id,
                'createdAt': now.to_iso8601_string(),
            },
        }
        try:
            return self.client.add_item(query_kwargs)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise AlreadyLiked(user_id, exercise_id) from err

    def delete_like(self, exercise_id, user_id):
        try:
            return self.client.delete_item(self.key(exercise_id, user_id).pk, must_exist=True)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise NotLiked(user_id, exercise_id) from err

    def generate_by_user(self, user_id):
        "Every like the user has made, on any exercise"
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_CLASS_PK).eq(prefix(EntityKind.USER, user_id))
            & Key(Index.BY_CLASS_SK).begins_with(prefix(SortKind.LIKE)),
            'IndexName': Index.BY_CLASS,
        }
        return self.client.generate_all_query(query_kwargs)
