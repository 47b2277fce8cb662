import logging

import pendulum
from boto3.dynamodb.conditions import Key

from exercisely.models.keys import EntityKind, Index, ItemKey, SortKind, prefix

from .exceptions import AlreadyFollowing, NotFollowing
from .targets import ByList, ByUser

logger = logging.getLogger()


class FollowerDynamo:
    """
    Follow edges live in the partition of what is followed, sorted by who follows.
    The sort key index turns that around into what a given user follows.
    """

    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, target, follower_user_id):
        if isinstance(target, ByUser):
            return ItemKey.user_follower(target.user_id, follower_user_id)
        if isinstance(target, ByList):
            return ItemKey.list_follower(target.list_id, follower_user_id)
        raise TypeError(f'Unexpected follow target `{target!r}`')

    def add_follow(self, target, follower_user_id, list_owner_user_id=None, now=None):
        now = now or pendulum.now('utc')
        item = {
            **self.key(target, follower_user_id).pk,
            'schemaVersion': 0,
            'followerUserId': follower_user_id,
            'createdAt': now.to_iso8601_string(),
        }
        if isinstance(target, ByUser):
            item['followedUserId'] = target.user_id
        else:
            assert list_owner_user_id, 'Following a list requires its owner'
            item['listId'] = target.list_id
            item['listOwnerUserId'] = list_owner_user_id
        try:
            return self.client.add_item({'Item': item})
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise AlreadyFollowing(follower_user_id, target) from err

    def delete_follow(self, target, follower_user_id):
        try:
            return self.client.delete_item(self.key(target, follower_user_id).pk, must_exist=True)
        except self.client.exceptions.ConditionalCheckFailedException as err:
            raise NotFollowing(follower_user_id, target) from err

    def generate_followers(self, target):
        "Follow edges of the target, oldest key first"
        partition_key = (
            prefix(EntityKind.USER, target.user_id)
            if isinstance(target, ByUser)
            else prefix(EntityKind.LIST, target.list_id)
        )
        query_kwargs = {
            'KeyConditionExpression': Key('partitionKey').eq(partition_key)
            & Key('sortKey').begins_with(prefix(SortKind.FOLLOWER)),
        }
        return self.client.generate_all_query(query_kwargs)

    def generate_followeds(self, follower_user_id):
        "Follow edges from the user, to users and to lists alike"
        query_kwargs = {
            'KeyConditionExpression': Key('sortKey').eq(prefix(SortKind.FOLLOWER, follower_user_id)),
            'IndexName': Index.BY_SORT_KEY,
        }
        return self.client.generate_all_query(query_kwargs)

    def delete_all_followers(self, target):
        return self.client.batch_delete_items(list(self.generate_followers(target)))

    @staticmethod
    def followed_target(follow_item):
        "The target a follow edge points at"
        item_key = ItemKey.parse(follow_item)
        if item_key.kind == EntityKind.USER:
            return ByUser(item_key.owner_id)
        return ByList(item_key.owner_id)
