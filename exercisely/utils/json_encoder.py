from decimal import Decimal
from json import JSONEncoder


class DynamoJsonEncoder(JSONEncoder):
    """
    Encodes the types boto3 hands back from dynamo: numbers come back as Decimals
    (encoded as ints where whole, floats otherwise, precision lost) and string sets
    come back as python sets (encoded as sorted lists).
    """

    def default(self, obj):
        if isinstance(obj, Decimal):
            return int(obj) if obj % 1 == 0 else float(obj)
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)
