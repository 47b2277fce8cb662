"""
Composite primary keys of the single table.

Every item is addressed by `partitionKey = KIND#ownerId` and a `sortKey` that is
either a bare discriminator (`METADATA`, `LIKES`) or `DISCRIMINATOR#id`.
Build keys through the constructors here rather than by formatting strings.
"""
import collections

from exercisely.exceptions import BadRequest

SEPARATOR = '#'


class EntityKind:
    USER = 'USER'
    EXERCISE = 'EXERCISE'
    LIST = 'LIST'

    _ALL = (USER, EXERCISE, LIST)


class SortKind:
    METADATA = 'METADATA'
    LIKES = 'LIKES'
    COMMENT = 'COMMENT'
    LIKE = 'LIKE'
    LIST = 'LIST'
    FOLLOWER = 'FOLLOWER'

    _BARE = (METADATA, LIKES)
    _WITH_ID = (COMMENT, LIKE, LIST, FOLLOWER)


class Index:
    "Secondary indexes and the attributes they are keyed on"

    # by entity class: all users, all exercises, and items authored by a user
    BY_CLASS = 'GSI1'
    BY_CLASS_PK = 'gsi1PartitionKey'
    BY_CLASS_SK = 'gsi1SortKey'
    # by sort key alone
    BY_SORT_KEY = 'GSI2'
    # lists by listId
    BY_LIST = 'GSI3'
    BY_LIST_PK = 'gsi3PartitionKey'
    BY_LIST_SK = 'gsi3SortKey'
    # users by lower-cased email
    BY_EMAIL = 'GSI4'
    BY_EMAIL_PK = 'gsi4PartitionKey'
    BY_EMAIL_SK = 'gsi4SortKey'

    ALL_USERS = 'USER'
    ALL_EXERCISES = 'EXERCISES'


def prefix(kind, entity_id=None):
    "`KIND#` or `KIND#id`"
    return f'{kind}{SEPARATOR}' if entity_id is None else f'{kind}{SEPARATOR}{entity_id}'


class KeyValidationException(BadRequest):
    "An id that cannot be embedded in a key"


class ItemKey(collections.namedtuple('ItemKey', ['kind', 'owner_id', 'sort_kind', 'sort_id'])):
    __slots__ = ()

    def __new__(cls, kind, owner_id, sort_kind, sort_id=None):
        assert kind in EntityKind._ALL, f'Invalid entity kind `{kind}`'
        if sort_kind in SortKind._BARE:
            assert sort_id is None, f'Sort kind `{sort_kind}` takes no id'
        else:
            assert sort_kind in SortKind._WITH_ID, f'Invalid sort kind `{sort_kind}`'
            if not sort_id:
                raise KeyValidationException(f'Sort kind `{sort_kind}` requires an id')
        # ids come from callers, and the separator in an owner id would shift the key scheme
        if not owner_id or SEPARATOR in owner_id:
            raise KeyValidationException(f'Invalid {kind.lower()} id `{owner_id}`')
        return super().__new__(cls, kind, owner_id, sort_kind, sort_id)

    @classmethod
    def user(cls, user_id):
        return cls(EntityKind.USER, user_id, SortKind.METADATA)

    @classmethod
    def user_likes(cls, user_id):
        return cls(EntityKind.USER, user_id, SortKind.LIKES)

    @classmethod
    def exercise(cls, exercise_id):
        return cls(EntityKind.EXERCISE, exercise_id, SortKind.METADATA)

    @classmethod
    def comment(cls, exercise_id, comment_id):
        return cls(EntityKind.EXERCISE, exercise_id, SortKind.COMMENT, comment_id)

    @classmethod
    def like(cls, exercise_id, user_id):
        return cls(EntityKind.EXERCISE, exercise_id, SortKind.LIKE, user_id)

    @classmethod
    def list(cls, owner_user_id, list_id):
        return cls(EntityKind.USER, owner_user_id, SortKind.LIST, list_id)

    @classmethod
    def user_follower(cls, followed_user_id, follower_user_id):
        return cls(EntityKind.USER, followed_user_id, SortKind.FOLLOWER, follower_user_id)

    @classmethod
    def list_follower(cls, list_id, follower_user_id):
        return cls(EntityKind.LIST, list_id, SortKind.FOLLOWER, follower_user_id)

    @classmethod
    def parse(cls, item):
        "From an item (or bare primary key dict) back to an ItemKey"
        kind, owner_id = item['partitionKey'].split(SEPARATOR, 1)
        sort_kind, _, sort_id = item['sortKey'].partition(SEPARATOR)
        return cls(kind, owner_id, sort_kind, sort_id or None)

    @property
    def partition_key(self):
        return prefix(self.kind, self.owner_id)

    @property
    def sort_key(self):
        return self.sort_kind if self.sort_id is None else prefix(self.sort_kind, self.sort_id)

    @property
    def pk(self):
        return {'partitionKey': self.partition_key, 'sortKey': self.sort_key}
