import collections

from .exceptions import FollowerValidationException


class ByUser(collections.namedtuple('ByUser', ['user_id'])):
    def __str__(self):
        return f'user {self.user_id}'


class ByList(collections.namedtuple('ByList', ['list_id'])):
    def __str__(self):
        return f'list {self.list_id}'


class FollowTarget:
    """
    What a follow is of: exactly one of a user or a list.
    Build with `from_arguments` where the request is parsed and pass the variant on.
    """

    ByUser = ByUser
    ByList = ByList

    @staticmethod
    def from_arguments(user_id=None, list_id=None):
        if user_id and list_id:
            raise FollowerValidationException('Cannot target both a user and a list at the same time')
        if user_id:
            return ByUser(user_id)
        if list_id:
            return ByList(list_id)
        raise FollowerValidationException('Must provide either userId or listId')
