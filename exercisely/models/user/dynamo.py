import logging

import pendulum
from boto3.dynamodb.conditions import Key

from exercisely.models.keys import EntityKind, Index, ItemKey, SortKind, prefix

from .exceptions import UserAlreadyExists, UserDoesNotExist

logger = logging.getLogger()


class UserDynamo:
    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, user_id):
        return ItemKey.user(user_id)

    def likes_key(self, user_id):
        return ItemKey.user_likes(user_id)

    def get_user(self, user_id, strongly_consistent=False):
        return self.client.get_item(self.key(user_id).pk, ConsistentRead=strongly_consistent)

    def get_user_by_email(self, email):
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_EMAIL_PK).eq(email.lower())
            & Key(Index.BY_EMAIL_SK).eq(SortKind.METADATA),
            'IndexName': Index.BY_EMAIL,
        }
        return self.client.query_head(query_kwargs)

    def get_users(self, user_ids):
        "Missing users skipped, order not maintained"
        keys = [self.key(user_id).pk for user_id in dict.fromkeys(user_ids)]
        return self.client.batch_get_items(keys)

    def generate_all_users(self):
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_CLASS_PK).eq(Index.ALL_USERS),
            'IndexName': Index.BY_CLASS,
        }
        return self.client.generate_all_query(query_kwargs)

    def add_user(self, user_id, username, email, name, now=None):
        """
        Add the user's metadata item and the item that holds the set of exercises they like.
        The likes set itself is only created by the first like, as dynamo has no empty sets.
        """
        now = now or pendulum.now('utc')
        now_str = now.to_iso8601_string()
        query_kwargs = {
            'Item': {
                **self.key(user_id).pk,
                'schemaVersion': 0,
                Index.BY_CLASS_PK: Index.ALL_USERS,
                Index.BY_CLASS_SK: prefix(EntityKind.USER, user_id),
                Index.BY_EMAIL_PK: email.lower(),
                Index.BY_EMAIL_SK: SortKind.METADATA,
                'userId': user_id,
                'username': username,
                'email': email,
                'name': name,
                'followerCount': 0,
                'createdAt': now_str,
                'updatedAt': now_str,
            },
        }
        try:
            user_item = self.client.add_item(query_kwargs)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise UserAlreadyExists(user_id) from err
        self.client.add_item({'Item': {**self.likes_key(user_id).pk, 'userId': user_id}})
        return user_item

    def set_user_details(self, user_id, now=None, **attributes):
        "Set the given attributes on the user's metadata item, returns the new item"
        now = now or pendulum.now('utc')
        if 'email' in attributes:
            attributes[Index.BY_EMAIL_PK] = attributes['email'].lower()
        attributes['updatedAt'] = now.to_iso8601_string()
        try:
            return self.client.set_attributes(self.key(user_id).pk, **attributes)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise UserDoesNotExist(user_id) from err

    def get_liked_exercise_ids(self, user_id):
        likes_item = self.client.get_item(self.likes_key(user_id).pk) or {}
        return set(likes_item.get('likedExercises', ()))

    def add_liked_exercise(self, user_id, exercise_id):
        query_kwargs = {
            'Key': self.likes_key(user_id).pk,
            'UpdateExpression': 'ADD likedExercises :eids',
            'ExpressionAttributeValues': {':eids': {exercise_id}},
        }
        failure_warning = f'No likes set found for user `{user_id}` to add exercise `{exercise_id}` to'
        return self.client.update_item(query_kwargs, failure_warning=failure_warning)

    def remove_liked_exercise(self, user_id, exercise_id):
        query_kwargs = {
            'Key': self.likes_key(user_id).pk,
            'UpdateExpression': 'DELETE likedExercises :eids',
            'ExpressionAttributeValues': {':eids': {exercise_id}},
        }
        failure_warning = f'No likes set found for user `{user_id}` to remove exercise `{exercise_id}` from'
        return self.client.update_item(query_kwargs, failure_warning=failure_warning)

    def generate_partition_items(self, user_id):
        "Every item stored under the user's own partition"
        query_kwargs = {'KeyConditionExpression': Key('partitionKey').eq(prefix(EntityKind.USER, user_id))}
        return self.client.generate_all_query(query_kwargs)

    def delete_partition(self, user_id):
        return self.client.batch_delete_items(list(self.generate_partition_items(user_id)))
