import logging

from exercisely import models

from .dynamo import UserDynamo
from .enums import PHOTO_CONTENT_TYPES, PHOTO_LOCATIONS, PhotoType
from .exceptions import UserDoesNotExist, UserValidationException

logger = logging.getLogger()

# attributes that only exist to key the item
KEY_ATTRIBUTES = (
    'partitionKey',
    'sortKey',
    'gsi1PartitionKey',
    'gsi1SortKey',
    'gsi4PartitionKey',
    'gsi4SortKey',
    'schemaVersion',
)


class UserManager:
    def __init__(self, clients, managers=None):
        managers = managers if managers is not None else {}
        managers['user'] = self
        self.comment_manager = managers.get('comment') or models.CommentManager(clients, managers=managers)
        self.follower_manager = managers.get('follower') or models.FollowerManager(clients, managers=managers)
        self.like_manager = managers.get('like') or models.LikeManager(clients, managers=managers)
        self.list_manager = managers.get('list') or models.ListManager(clients, managers=managers)

        self.clients = clients
        if 'cognito' in clients:
            self.cognito_client = clients['cognito']
        if 'dynamo' in clients:
            self.dynamo = UserDynamo(clients['dynamo'])
        if 's3_images' in clients:
            self.s3_images_client = clients['s3_images']

    def serialize(self, user_item):
        return {k: v for k, v in user_item.items() if k not in KEY_ATTRIBUTES}

    def summarize(self, user_item):
        return {
            'userId': user_item['userId'],
            'name': user_item['name'],
            'profilePhotoUrl': user_item.get('profilePhotoUrl'),
        }

    def create_user(self, user_id, username, email, name, now=None):
        user_item = self.dynamo.add_user(user_id, username, email, name, now=now)
        logger.info(f'Created user `{user_id}`')
        return self.serialize(user_item)

    def get_user_item(self, user_id, strongly_consistent=False):
        user_item = self.dynamo.get_user(user_id, strongly_consistent=strongly_consistent)
        if not user_item:
            raise UserDoesNotExist(user_id)
        return user_item

    def get_user(self, user_id):
        return self.serialize(self.get_user_item(user_id))

    def get_user_by_email(self, email):
        user_item = self.dynamo.get_user_by_email(email)
        if not user_item:
            raise UserDoesNotExist(email)
        return self.serialize(user_item)

    def get_users_by_ids(self, user_ids):
        "Missing users are skipped, order not maintained"
        return [self.serialize(user_item) for user_item in self.dynamo.get_users(user_ids)]

    def get_all_users(self):
        return [self.serialize(user_item) for user_item in self.dynamo.generate_all_users()]

    def get_user_summaries(self, user_ids):
        "Map of user id to summary for those of the given users that exist"
        user_ids = list(user_ids)
        if not user_ids:
            return {}
        return {user['userId']: self.summarize(user) for user in self.get_users_by_ids(user_ids)}

    def get_liked_exercise_ids(self, user_id):
        return self.dynamo.get_liked_exercise_ids(user_id)

    def update_user(self, user_id, name=None, email=None, profile_photo_url=None, cover_photo_url=None, now=None):
        attributes = {
            'name': name,
            'email': email,
            'profilePhotoUrl': profile_photo_url,
            'coverPhotoUrl': cover_photo_url,
        }
        attributes = {k: v for k, v in attributes.items() if v is not None}
        if not attributes:
            raise UserValidationException('Called without any details to update')

        user_item = self.dynamo.set_user_details(user_id, now=now, **attributes)
        if name is not None:
            # the name is also shown by the identity provider, keep it in sync
            self.cognito_client.update_name(user_item['username'], name)
        return self.serialize(user_item)

    def validate_photo_type(self, photo_type):
        if photo_type not in PhotoType._ALL:
            raise UserValidationException(f'Invalid photo type `{photo_type}`')

    def get_photo_upload_url(self, user_id, photo_type, content_type):
        "A short-lived url the user may PUT a new photo to, and the key the photo will live at"
        self.validate_photo_type(photo_type)
        if content_type not in PHOTO_CONTENT_TYPES:
            raise UserValidationException(
                f'Invalid content type `{content_type}`, must be one of: ' + ', '.join(PHOTO_CONTENT_TYPES)
            )
        key_prefix, _ = PHOTO_LOCATIONS[photo_type]
        extension = content_type.split('/')[1]
        key = f'{key_prefix}/{user_id}.{extension}'
        upload_url = self.s3_images_client.generate_upload_url(key, content_type)
        return {'uploadUrl': upload_url, 'key': key}

    def set_photo(self, user_id, photo_type, key, now=None):
        """
        Point the user's photo at an already-uploaded object.
        Only keys inside the user's own area of the bucket are accepted. The object itself is not checked.
        """
        self.validate_photo_type(photo_type)
        key_prefix, attribute_name = PHOTO_LOCATIONS[photo_type]
        if not isinstance(key, str) or not key.startswith(f'{key_prefix}/{user_id}'):
            raise UserValidationException(f'Invalid {photo_type} photo key `{key}`')
        url = self.s3_images_client.get_object_url(key)
        user_item = self.dynamo.set_user_details(user_id, now=now, **{attribute_name: url})
        return self.serialize(user_item)

    def delete_user_and_data(self, user_id):
        """
        Delete the user and everything they've created.

        Edges the user holds on other entities are removed one at a time so the
        counters on those entities are decremented. What's left in the user's own
        partition is then batch deleted, and finally the user is removed from the
        identity provider.
        """
        user_item = self.get_user_item(user_id)

        self.like_manager.unlike_all_by_user(user_id)
        self.comment_manager.delete_all_by_user(user_id)
        self.follower_manager.unfollow_all_by_user(user_id)
        self.list_manager.delete_all_of_user(user_id)

        deleted_cnt = self.dynamo.delete_partition(user_id)
        logger.info(f'Deleted {deleted_cnt} remaining items from partition of user `{user_id}`')

        if hasattr(self, 's3_images_client'):
            for key_prefix, _ in PHOTO_LOCATIONS.values():
                self.s3_images_client.delete_objects_with_prefix(f'{key_prefix}/{user_id}.')

        self.cognito_client.delete_user_pool_entry(user_item['username'])
        return self.serialize(user_item)
