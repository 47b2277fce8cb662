import logging

import pendulum
from boto3.dynamodb.conditions import Attr, Key

from exercisely.models.keys import EntityKind, Index, ItemKey, SortKind, prefix

from .enums import ListVisibility
from .exceptions import ExerciseAlreadyInList, ListDoesNotExist, ListException

logger = logging.getLogger()


class ListDynamo:
    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, user_id, list_id):
        return ItemKey.list(user_id, list_id)

    def get_list(self, user_id, list_id, strongly_consistent=False):
        return self.client.get_item(self.key(user_id, list_id).pk, ConsistentRead=strongly_consistent)

    def get_list_by_id(self, list_id):
        "Find a list without knowing its owner"
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_LIST_PK).eq(list_id) & Key(Index.BY_LIST_SK).eq(SortKind.METADATA),
            'IndexName': Index.BY_LIST,
        }
        return self.client.query_head(query_kwargs)

    def add_list(self, list_id, user_id, title, description, exercise_ids, visibility, shared_with=None, now=None):
        assert visibility in ListVisibility._ALL, f'Invalid list visibility `{visibility}`'
        now = now or pendulum.now('utc')
        now_str = now.to_iso8601_string()
        query_kwargs = {
            'Item': {
                **self.key(user_id, list_id).pk,
                'schemaVersion': 0,
                Index.BY_LIST_PK: list_id,
                Index.BY_LIST_SK: SortKind.METADATA,
                'listId': list_id,
                'userId': user_id,
                'title': title,
                'description': description,
                'exercises': list(exercise_ids),
                'visibility': visibility,
                'sharedWith': list(shared_with or []),
                'followerCount': 0,
                'createdAt': now_str,
                'updatedAt': now_str,
            },
        }
        try:
            return self.client.add_item(query_kwargs)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise ListException(f'List `{list_id}` already exists') from err

    def set_list_details(self, user_id, list_id, now=None, **attributes):
        now = now or pendulum.now('utc')
        attributes['updatedAt'] = now.to_iso8601_string()
        try:
            return self.client.set_attributes(self.key(user_id, list_id).pk, **attributes)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise ListDoesNotExist(list_id) from err

    def append_exercise(self, user_id, list_id, exercise_id, now=None):
        "Append to the end of the list's exercises, failing if the exercise is already there"
        now = now or pendulum.now('utc')
        query_kwargs = {
            'Key': self.key(user_id, list_id).pk,
            'UpdateExpression': 'SET exercises = list_append(if_not_exists(exercises, :empty), :eids), updatedAt = :ua',
            'ConditionExpression': 'NOT contains(exercises, :eid)',
            'ExpressionAttributeValues': {
                ':empty': [],
                ':eids': [exercise_id],
                ':eid': exercise_id,
                ':ua': now.to_iso8601_string(),
            },
        }
        try:
            return self.client.update_item(query_kwargs)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise ExerciseAlreadyInList(list_id, exercise_id) from err

    def delete_list(self, user_id, list_id):
        try:
            return self.client.delete_item(self.key(user_id, list_id).pk, must_exist=True)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise ListDoesNotExist(list_id) from err

    def generate_by_owner(self, user_id, filter_expression=None):
        query_kwargs = {
            'KeyConditionExpression': Key('partitionKey').eq(prefix(EntityKind.USER, user_id))
            & Key('sortKey').begins_with(prefix(SortKind.LIST)),
        }
        if filter_expression is not None:
            query_kwargs['FilterExpression'] = filter_expression
        return self.client.generate_all_query(query_kwargs)

    def generate_public_by_owner(self, user_id):
        return self.generate_by_owner(user_id, filter_expression=Attr('visibility').eq(ListVisibility.PUBLIC))

    def generate_shared_by_owner(self, user_id, shared_with_user_id):
        return self.generate_by_owner(user_id, filter_expression=Attr('sharedWith').contains(shared_with_user_id))

    def generate_shared_with(self, user_id):
        "Lists of any owner that are shared with the user. A full table scan."
        scan_kwargs = {
            'FilterExpression': Attr('sortKey').begins_with(prefix(SortKind.LIST))
            & Attr('sharedWith').contains(user_id),
        }
        return self.client.generate_all_scan(scan_kwargs)
