import logging

from .enums import (
    ExerciseCategory,
    ExerciseEquipment,
    ExerciseForce,
    ExerciseLevel,
    ExerciseMechanic,
    ExerciseMuscle,
)
from .exceptions import ExerciseFilterException, ExercisePaginationException

logger = logging.getLogger()

# filter name -> allowed values
MULTI_VALUE_FIELDS = {
    'force': ExerciseForce._ALL,
    'level': ExerciseLevel._ALL,
    'mechanic': ExerciseMechanic._ALL,
    'equipment': ExerciseEquipment._ALL,
    'muscle': ExerciseMuscle._ALL,
    'category': ExerciseCategory._ALL,
}


class ExerciseFilter:
    """
    A conjunction of per-field constraints on the exercise catalog.
    A field left as None places no constraint on the exercise.
    """

    def __init__(self, name=None, force=None, level=None, mechanic=None, equipment=None, muscle=None, category=None):
        self.name = name.lower() if name else None
        self.force = force or None
        self.level = level or None
        self.mechanic = mechanic or None
        self.equipment = equipment or None
        self.muscle = muscle or None
        self.category = category or None

    def __eq__(self, other):
        return isinstance(other, ExerciseFilter) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'ExerciseFilter({self.to_dict()})'

    @classmethod
    def from_query_params(cls, params):
        "From url query parameters: comma-separated values, each validated against its vocabulary"
        kwargs = {'name': params.get('name') or None}
        for field, allowed in MULTI_VALUE_FIELDS.items():
            raw = params.get(field)
            if not raw:
                continue
            values = [v.strip().lower() for v in raw.split(',') if v.strip()]
            for value in values:
                if value not in allowed:
                    raise ExerciseFilterException(f'Invalid value `{value}` for filter `{field}`')
            kwargs[field] = values
        return cls(**kwargs)

    @classmethod
    def from_extracted(cls, extracted):
        """
        From the output of the natural-language filter extractor.
        Malformed fields are logged and dropped rather than rejected.
        """
        kwargs = {}
        name = extracted.get('name')
        if isinstance(name, str) and name:
            kwargs['name'] = name
        elif name:
            logger.warning(f'Ignoring extracted filter `name` of unexpected type: `{name!r}`')

        for field in MULTI_VALUE_FIELDS:
            value = extracted.get(field)
            if not value:
                continue
            if isinstance(value, str):
                kwargs[field] = [value.lower()]
            elif isinstance(value, list):
                kwargs[field] = [str(v).lower() for v in value]
            else:
                logger.warning(f'Ignoring extracted filter `{field}` of unexpected type: `{value!r}`')
        return cls(**kwargs)

    def to_dict(self):
        "Only the fields that constrain"
        fields = {'name': self.name, **{field: getattr(self, field) for field in MULTI_VALUE_FIELDS}}
        return {k: v for k, v in fields.items() if v}

    def matches(self, item):
        if self.name and self.name not in item['name'].lower():
            return False
        # single-valued fields, which may be null on the exercise
        for field in ('force', 'level', 'mechanic', 'equipment', 'category'):
            allowed = getattr(self, field)
            if allowed and item.get(field) not in allowed:
                return False
        if self.muscle:
            muscles = set(item.get('primaryMuscles') or []) | set(item.get('secondaryMuscles') or [])
            if not muscles.intersection(self.muscle):
                return False
        return True

    def apply(self, items):
        return [item for item in items if self.matches(item)]


def paginate(items, page, page_size):
    "1-based page of `items`. Out of range pages are empty"
    if page < 1 or page_size < 1:
        raise ExercisePaginationException(f'Page `{page}` and page size `{page_size}` must both be positive')
    start = (page - 1) * page_size
    return items[start : start + page_size]
