import logging
import os

import pendulum
from boto3.dynamodb.conditions import Key

from exercisely.models.keys import EntityKind, Index, ItemKey, prefix

EXERCISE_IMAGES_URL_ROOT = os.environ.get(
    'EXERCISE_IMAGES_URL_ROOT',
    'https://raw.githubusercontent.com/yuhonas/free-exercise-db/refs/heads/main/exercises/',
)

logger = logging.getLogger()


class ExerciseDynamo:
    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def key(self, exercise_id):
        return ItemKey.exercise(exercise_id)

    def get_exercise(self, exercise_id, strongly_consistent=False):
        return self.client.get_item(self.key(exercise_id).pk, ConsistentRead=strongly_consistent)

    def get_exercises(self, exercise_ids):
        "Current versions of the exercises with the given ids. Missing ids skipped, order not maintained."
        keys = [self.key(exercise_id).pk for exercise_id in dict.fromkeys(exercise_ids)]
        return self.client.batch_get_items(keys)

    def build_exercise_item(self, exercise_id, data, now=None):
        "From an entry of the raw exercise catalogue to an item ready to be put"
        now = now or pendulum.now('utc')
        now_str = now.to_iso8601_string()

        def lower_or_none(value):
            return value.lower() if value else None

        return {
            **self.key(exercise_id).pk,
            'schemaVersion': 0,
            Index.BY_CLASS_PK: Index.ALL_EXERCISES,
            Index.BY_CLASS_SK: prefix(EntityKind.EXERCISE, exercise_id),
            'exerciseId': exercise_id,
            'name': data['name'].lower(),
            'force': lower_or_none(data.get('force')),
            'level': data['level'].lower(),
            'mechanic': lower_or_none(data.get('mechanic')),
            'equipment': lower_or_none(data.get('equipment')),
            'primaryMuscles': [m.lower() for m in data.get('primaryMuscles', [])],
            'secondaryMuscles': [m.lower() for m in data.get('secondaryMuscles', [])],
            'instructions': data.get('instructions', []),
            'category': data['category'].lower(),
            'images': [EXERCISE_IMAGES_URL_ROOT + image for image in data.get('images', [])],
            'likeCount': 0,
            'commentCount': 0,
            'createdAt': now_str,
            'updatedAt': now_str,
        }

    def generate_all_exercises(self):
        query_kwargs = {
            'KeyConditionExpression': Key(Index.BY_CLASS_PK).eq(Index.ALL_EXERCISES),
            'IndexName': Index.BY_CLASS,
        }
        return self.client.generate_all_query(query_kwargs)

    def put_exercises(self, catalog_entries, now=None):
        "Write, overwriting any existing, an exercise per entry of the raw catalogue. Returns the count written."
        now = now or pendulum.now('utc')
        items = (self.build_exercise_item(entry['id'], entry, now=now) for entry in catalog_entries)
        return self.client.batch_put_items(items)
