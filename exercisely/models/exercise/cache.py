import logging

logger = logging.getLogger()


class ExerciseCatalogCache:
    """
    In-memory snapshot of the whole exercise catalog, held for the life of the process.

    Starts empty and is populated from `loader` on the first query. There is no
    expiry: the only way fresher data gets in is through `patch`, so a write made
    by another process is invisible here until the process is replaced.
    """

    def __init__(self, loader):
        self.loader = loader
        self.items = None

    @property
    def is_populated(self):
        return self.items is not None

    def populate(self):
        self.items = list(self.loader())
        logger.info(f'Exercise catalog cache populated with {len(self.items)} exercises')
        return self.items

    def clear(self):
        self.items = None

    def query(self, exercise_filter=None):
        "All cached exercises that pass the filter, in cache order"
        items = self.items if self.is_populated else self.populate()
        if exercise_filter is None:
            return list(items)
        return exercise_filter.apply(items)

    def patch(self, fresh_items):
        """
        Replace cached exercises with fresher copies, matched by primary key.
        Items not already in the snapshot are ignored. A no-op while empty.
        Returns the number of cached exercises replaced.
        """
        if not self.is_populated:
            return 0
        fresh_by_key = {(item['partitionKey'], item['sortKey']): item for item in fresh_items}
        patched = 0
        for idx, item in enumerate(self.items):
            fresh_item = fresh_by_key.get((item['partitionKey'], item['sortKey']))
            if fresh_item is not None:
                self.items[idx] = fresh_item
                patched += 1
        return patched
