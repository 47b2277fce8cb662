import logging

from exercisely import models
from exercisely.models.keys import ItemKey
from exercisely.models.ledger import EdgeLedger

from .dynamo import FollowerDynamo
from .exceptions import FollowerUserDoesNotExist, FollowerValidationException, ListNotFollowable
from .targets import ByList, ByUser

logger = logging.getLogger()

# follow edges written before createdAt was recorded sort last
EPOCH = '1970-01-01T00:00:00Z'


class FollowerManager:
    def __init__(self, clients, managers=None):
        managers = managers if managers is not None else {}
        managers['follower'] = self
        self.list_manager = managers.get('list') or models.ListManager(clients, managers=managers)
        self.user_manager = managers.get('user') or models.UserManager(clients, managers=managers)

        self.clients = clients
        if 'dynamo' in clients:
            self.dynamo = FollowerDynamo(clients['dynamo'])
            self.ledger = EdgeLedger(clients['dynamo'])

    def counter_key(self, target, list_owner_user_id=None):
        "The item that counts the target's followers"
        if isinstance(target, ByUser):
            return ItemKey.user(target.user_id)
        return ItemKey.list(list_owner_user_id, target.list_id)

    def follow(self, user_id, target, now=None):
        """
        Start following a user or a list.
        A list may only be followed if it is public, shared with the user, or the user's own.
        """
        list_owner_user_id = None
        if isinstance(target, ByUser):
            if target.user_id == user_id:
                raise FollowerValidationException(f'User `{user_id}` cannot follow themselves')
            self.user_manager.get_user_item(target.user_id)
        elif isinstance(target, ByList):
            list_item = self.list_manager.get_list_item_by_id(target.list_id)
            if not self.list_manager.can_follow_list(user_id, list_item):
                raise ListNotFollowable(user_id, target.list_id)
            list_owner_user_id = list_item['userId']
        else:
            raise TypeError(f'Unexpected follow target `{target!r}`')

        follow_item, _ = self.ledger.add(
            lambda: self.dynamo.add_follow(target, user_id, list_owner_user_id=list_owner_user_id, now=now),
            self.counter_key(target, list_owner_user_id),
            'followerCount',
        )
        return follow_item

    def unfollow(self, user_id, target):
        list_owner_user_id = None
        if isinstance(target, ByUser):
            self.user_manager.get_user_item(target.user_id)
        elif isinstance(target, ByList):
            list_owner_user_id = self.list_manager.get_list_item_by_id(target.list_id)['userId']
        else:
            raise TypeError(f'Unexpected follow target `{target!r}`')
        self.remove_follow(user_id, target, list_owner_user_id=list_owner_user_id)

    def remove_follow(self, user_id, target, list_owner_user_id=None):
        self.ledger.remove(
            lambda: self.dynamo.delete_follow(target, user_id),
            self.counter_key(target, list_owner_user_id),
            'followerCount',
        )

    def unfollow_all_by_user(self, user_id):
        "Remove every follow the user has made, of users and lists"
        follow_items = list(self.dynamo.generate_followeds(user_id))
        for follow_item in follow_items:
            target = self.dynamo.followed_target(follow_item)
            self.remove_follow(user_id, target, list_owner_user_id=follow_item.get('listOwnerUserId'))
        logger.info(f'Removed {len(follow_items)} follows by user `{user_id}`')

    def delete_followers_of_list(self, list_id):
        "Drop every follow of a list, with no counting as the list is going away"
        return self.dynamo.delete_all_followers(ByList(list_id))

    def get_followed_list_ids(self, user_id):
        return [
            target.list_id
            for target in map(self.dynamo.followed_target, self.dynamo.generate_followeds(user_id))
            if isinstance(target, ByList)
        ]

    def get_followers(self, target):
        """
        Who follows the target, most recent first. For a user target, also who the
        user follows. Every user involved must exist.
        """
        follower_ids = self.sorted_user_ids(self.dynamo.generate_followers(target), 'followerUserId')
        resp = {'followers': self.resolve_users(follower_ids)}
        if isinstance(target, ByUser):
            follow_items = [
                item
                for item in self.dynamo.generate_followeds(target.user_id)
                if isinstance(self.dynamo.followed_target(item), ByUser)
            ]
            resp['followings'] = self.resolve_users(self.sorted_user_ids(follow_items, 'followedUserId'))
        return resp

    def sorted_user_ids(self, follow_items, attribute_name):
        follow_items = sorted(follow_items, key=lambda item: item.get('createdAt') or EPOCH, reverse=True)
        return [item[attribute_name] for item in follow_items]

    def resolve_users(self, user_ids):
        summaries = self.user_manager.get_user_summaries(user_ids)
        resp = []
        for user_id in user_ids:
            if user_id not in summaries:
                raise FollowerUserDoesNotExist(user_id)
            resp.append(summaries[user_id])
        return resp
