import logging

from exercisely import models

from .cache import ExerciseCatalogCache
from .dynamo import ExerciseDynamo
from .exceptions import ExerciseDoesNotExist
from .filters import ExerciseFilter, paginate

logger = logging.getLogger()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# attributes that only exist to key the item
KEY_ATTRIBUTES = ('partitionKey', 'sortKey', 'gsi1PartitionKey', 'gsi1SortKey', 'schemaVersion')


class ExerciseManager:
    def __init__(self, clients, managers=None, catalog_cache=None):
        managers = managers if managers is not None else {}
        managers['exercise'] = self
        self.like_manager = managers.get('like') or models.LikeManager(clients, managers=managers)
        self.user_manager = managers.get('user') or models.UserManager(clients, managers=managers)

        self.clients = clients
        if 'dynamo' in clients:
            self.dynamo = ExerciseDynamo(clients['dynamo'])
        if 'filter_extractor' in clients:
            self.filter_extractor_client = clients['filter_extractor']
        self.catalog_cache = catalog_cache or ExerciseCatalogCache(self.generate_all_exercises)

    def generate_all_exercises(self):
        return self.dynamo.generate_all_exercises()

    def serialize(self, exercise_item, is_liked=None):
        resp = {k: v for k, v in exercise_item.items() if k not in KEY_ATTRIBUTES}
        if is_liked is not None:
            resp['isLiked'] = is_liked
        return resp

    def get_exercise_item(self, exercise_id, strongly_consistent=False):
        exercise_item = self.dynamo.get_exercise(exercise_id, strongly_consistent=strongly_consistent)
        if not exercise_item:
            raise ExerciseDoesNotExist(exercise_id)
        return exercise_item

    def get_exercise(self, exercise_id, caller_user_id=None):
        exercise_item = self.get_exercise_item(exercise_id)
        self.catalog_cache.patch([exercise_item])
        is_liked = None
        if caller_user_id:
            is_liked = self.like_manager.dynamo.get_like(exercise_id, caller_user_id) is not None
        return self.serialize(exercise_item, is_liked=is_liked)

    def get_exercises(self, exercise_filter=None, page=1, page_size=DEFAULT_PAGE_SIZE, caller_user_id=None):
        """
        One page of the catalog, filtered in memory against the process's snapshot.

        Only the exercises on the returned page are re-read from dynamo, so their
        counters are current even if the snapshot is not. Those fresh copies are
        patched back into the snapshot. An exercise the re-read no longer finds is
        served as the snapshot has it, so a page always holds what `total` implies.
        """
        page_size = min(page_size, MAX_PAGE_SIZE)
        filtered = self.catalog_cache.query(exercise_filter)
        page_items = paginate(filtered, page, page_size)

        fresh_items = self.dynamo.get_exercises([item['exerciseId'] for item in page_items]) if page_items else []
        self.catalog_cache.patch(fresh_items)

        fresh_by_id = {item['exerciseId']: item for item in fresh_items}
        page_items = [fresh_by_id.get(item['exerciseId'], item) for item in page_items]

        liked_ids = self.user_manager.get_liked_exercise_ids(caller_user_id) if caller_user_id else None
        data = [
            self.serialize(item, is_liked=(item['exerciseId'] in liked_ids) if liked_ids is not None else None)
            for item in page_items
        ]
        return {'total': len(filtered), 'page': page, 'pageSize': page_size, 'data': data}

    def search_exercises(self, query, page=1, page_size=DEFAULT_PAGE_SIZE, caller_user_id=None):
        "Like get_exercises(), but with the filter extracted from free text"
        extracted = self.filter_extractor_client.extract_filters(query)
        exercise_filter = ExerciseFilter.from_extracted(extracted)
        logger.info(f'Extracted exercise filter `{exercise_filter.to_dict()}` from query `{query}`')
        resp = self.get_exercises(exercise_filter, page=page, page_size=page_size, caller_user_id=caller_user_id)
        resp['ai'] = {'query': query, 'filters': exercise_filter.to_dict()}
        return resp

    def get_exercise_items(self, exercise_ids):
        "Exercises in the order of `exercise_ids`. Ids that match no exercise are dropped."
        items_by_id = {item['exerciseId']: item for item in self.dynamo.get_exercises(exercise_ids)}
        return [items_by_id[exercise_id] for exercise_id in exercise_ids if exercise_id in items_by_id]

    def patch_cache(self, exercise_id, exercise_item=None):
        """
        Bring the snapshot's copy of one exercise up to date after a write to it.
        If the write didn't return the new item, it is re-read.
        """
        if not self.catalog_cache.is_populated:
            return
        if exercise_item is None:
            exercise_item = self.dynamo.get_exercise(exercise_id, strongly_consistent=True)
        if exercise_item:
            self.catalog_cache.patch([exercise_item])

    def seed_catalog(self, catalog_entries, now=None):
        cnt = self.dynamo.put_exercises(catalog_entries, now=now)
        logger.info(f'Seeded {cnt} exercises')
        self.catalog_cache.clear()
        return cnt
