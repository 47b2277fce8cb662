import logging
import uuid

from exercisely import models

from .dynamo import ListDynamo
from .enums import ListRelationship, ListVisibility
from .exceptions import ListDoesNotExist, ListOwnerDoesNotExist, ListValidationException, NotListOwner

logger = logging.getLogger()

# attributes that only exist to key the item
KEY_ATTRIBUTES = ('partitionKey', 'sortKey', 'gsi3PartitionKey', 'gsi3SortKey', 'schemaVersion')


class ListManager:
    def __init__(self, clients, managers=None):
        managers = managers if managers is not None else {}
        managers['list'] = self
        self.exercise_manager = managers.get('exercise') or models.ExerciseManager(clients, managers=managers)
        self.follower_manager = managers.get('follower') or models.FollowerManager(clients, managers=managers)
        self.user_manager = managers.get('user') or models.UserManager(clients, managers=managers)

        self.clients = clients
        if 'dynamo' in clients:
            self.dynamo = ListDynamo(clients['dynamo'])

    def serialize(self, list_item):
        return {k: v for k, v in list_item.items() if k not in KEY_ATTRIBUTES}

    def validate_visibility(self, visibility):
        if visibility not in ListVisibility._ALL:
            raise ListValidationException(f'Invalid list visibility `{visibility}`')

    def get_list_item_by_id(self, list_id):
        list_item = self.dynamo.get_list_by_id(list_id)
        if not list_item:
            raise ListDoesNotExist(list_id)
        return list_item

    def get_owned_list_item(self, user_id, list_id):
        "The list, if the user owns it"
        list_item = self.get_list_item_by_id(list_id)
        if list_item['userId'] != user_id:
            raise NotListOwner(list_id, user_id)
        return list_item

    def create_list(self, user_id, title, description, exercise_id, visibility, shared_with=None, now=None):
        "A new list always starts with one exercise. Who it is shared with is only kept for shared lists."
        self.validate_visibility(visibility)
        self.exercise_manager.get_exercise_item(exercise_id)
        list_id = str(uuid.uuid4())
        shared_with = list(dict.fromkeys(shared_with or [])) if visibility == ListVisibility.SHARED else []
        list_item = self.dynamo.add_list(
            list_id, user_id, title, description, [exercise_id], visibility, shared_with=shared_with, now=now
        )
        return self.serialize(list_item)

    def get_list(self, user_id, list_id):
        "One of the user's own lists, exercises and shares left as ids"
        list_item = self.dynamo.get_list(user_id, list_id)
        if not list_item:
            raise ListDoesNotExist(list_id)
        return self.serialize(list_item)

    def update_list(self, user_id, list_id, title=None, description=None, visibility=None, shared_with=None, now=None):
        list_item = self.get_owned_list_item(user_id, list_id)
        attributes = {'title': title, 'description': description, 'visibility': visibility, 'sharedWith': shared_with}
        attributes = {k: v for k, v in attributes.items() if v is not None}
        if not attributes:
            raise ListValidationException('Called without any details to update')

        if visibility is not None:
            self.validate_visibility(visibility)
        if (visibility or list_item['visibility']) != ListVisibility.SHARED:
            # only shared lists are shared with anyone
            if shared_with:
                raise ListValidationException(f'Cannot share list `{list_id}` unless its visibility is shared')
            if list_item.get('sharedWith'):
                attributes['sharedWith'] = []
        elif 'sharedWith' in attributes:
            attributes['sharedWith'] = list(dict.fromkeys(attributes['sharedWith']))

        list_item = self.dynamo.set_list_details(user_id, list_id, now=now, **attributes)
        return self.serialize(list_item)

    def delete_list(self, user_id, list_id):
        self.get_owned_list_item(user_id, list_id)
        self.remove_list(user_id, list_id)

    def remove_list(self, user_id, list_id):
        self.dynamo.delete_list(user_id, list_id)
        deleted_cnt = self.follower_manager.delete_followers_of_list(list_id)
        logger.info(f'Deleted list `{list_id}` and {deleted_cnt} follows of it')

    def delete_all_of_user(self, user_id):
        for list_item in list(self.dynamo.generate_by_owner(user_id)):
            self.remove_list(user_id, list_item['listId'])

    def add_exercise_to_list(self, user_id, list_id, exercise_id, now=None):
        "Raises ExerciseAlreadyInList if the exercise is already in the list"
        self.get_owned_list_item(user_id, list_id)
        self.exercise_manager.get_exercise_item(exercise_id)
        list_item = self.dynamo.append_exercise(user_id, list_id, exercise_id, now=now)
        return self.serialize(list_item)

    def remove_exercise_from_list(self, user_id, list_id, exercise_id, now=None):
        """
        Read-modify-write of the list's exercises, without any guard against a
        concurrent write in between: the last writer wins.
        Removing an exercise that isn't in the list leaves the list untouched.
        """
        list_item = self.get_owned_list_item(user_id, list_id)
        exercise_ids = list_item.get('exercises', [])
        if exercise_id not in exercise_ids:
            return self.serialize(list_item)
        exercise_ids = [eid for eid in exercise_ids if eid != exercise_id]
        list_item = self.dynamo.set_list_details(user_id, list_id, now=now, exercises=exercise_ids)
        return self.serialize(list_item)

    def can_follow_list(self, user_id, list_item):
        "Public lists, lists shared with the user, and the user's own lists may be followed"
        if list_item['visibility'] == ListVisibility.PUBLIC:
            return True
        if list_item['visibility'] == ListVisibility.SHARED and user_id in list_item.get('sharedWith', []):
            return True
        return list_item['userId'] == user_id

    def get_followed_public_list_items(self, user_id):
        list_ids = self.follower_manager.get_followed_list_ids(user_id)
        list_items = [self.dynamo.get_list_by_id(list_id) for list_id in list_ids]
        return [item for item in list_items if item and item['visibility'] == ListVisibility.PUBLIC]

    def get_relevant_lists(self, user_id):
        "Lists the user owns, follows, or has had shared with them, newest first"
        tagged = [
            *((item, ListRelationship.OWNED) for item in self.dynamo.generate_by_owner(user_id)),
            *((item, ListRelationship.FOLLOWING) for item in self.get_followed_public_list_items(user_id)),
            *((item, ListRelationship.SHARED) for item in self.dynamo.generate_shared_with(user_id)),
        ]
        return self.enrich(self.dedupe(tagged), user_id)

    def get_lists_for_user(self, user_id, target_user_id):
        "Lists of the target user visible to the user, newest first"
        followed_ids = set(self.follower_manager.get_followed_list_ids(user_id))
        tagged = [
            *(
                (item, ListRelationship.FOLLOWING if item['listId'] in followed_ids else ListRelationship.PUBLIC)
                for item in self.dynamo.generate_public_by_owner(target_user_id)
            ),
            *((item, ListRelationship.SHARED) for item in self.dynamo.generate_shared_by_owner(target_user_id, user_id)),
        ]
        return self.enrich(self.dedupe(tagged), user_id)

    def dedupe(self, tagged_list_items):
        """
        One entry per list, tagged with the relationship of highest precedence, newest first.
        Input is an iterable of (list_item, relationship) pairs.
        """
        by_id = {}
        for list_item, relationship in tagged_list_items:
            list_id = list_item['listId']
            if list_id in by_id:
                current = by_id[list_id][1]
                if ListRelationship._PRECEDENCE.index(relationship) >= ListRelationship._PRECEDENCE.index(current):
                    continue
            by_id[list_id] = (list_item, relationship)
        return sorted(by_id.values(), key=lambda pair: pair[0]['createdAt'], reverse=True)

    def enrich(self, tagged_list_items, user_id):
        """
        Resolve each list's exercises (with the user's like state) and who it is shared with.
        Exercises and shared-with users that no longer exist are dropped. A list whose
        owner no longer exists is an error.
        """
        if not tagged_list_items:
            return []
        list_items = [list_item for list_item, _ in tagged_list_items]

        exercise_ids = list(dict.fromkeys(eid for item in list_items for eid in item.get('exercises', [])))
        exercise_items = {item['exerciseId']: item for item in self.exercise_manager.get_exercise_items(exercise_ids)}
        liked_ids = self.user_manager.get_liked_exercise_ids(user_id)

        user_ids = {uid for item in list_items for uid in item.get('sharedWith', [])}
        user_ids.update(item['userId'] for item in list_items)
        summaries = self.user_manager.get_user_summaries(user_ids)

        resp = []
        for list_item, relationship in tagged_list_items:
            owner = summaries.get(list_item['userId'])
            if owner is None:
                raise ListOwnerDoesNotExist(list_item['listId'], list_item['userId'])
            enriched = self.serialize(list_item)
            enriched['exercises'] = [
                self.exercise_manager.serialize(exercise_items[eid], is_liked=eid in liked_ids)
                for eid in list_item.get('exercises', [])
                if eid in exercise_items
            ]
            enriched['sharedWith'] = [summaries[uid] for uid in list_item.get('sharedWith', []) if uid in summaries]
            resp.append(
                {
                    'list': enriched,
                    'relationship': relationship,
                    'user': {'name': owner['name'], 'profilePhotoUrl': owner['profilePhotoUrl']},
                }
            )
        return resp
