import logging
import os

import boto3

DYNAMO_TABLE = os.environ.get('DYNAMO_TABLE')

# dynamo caps a BatchGetItem request at this many keys
BATCH_GET_LIMIT = 100
KEY_ATTRIBUTES = ('partitionKey', 'sortKey')

logger = logging.getLogger()


def with_guard(guard, kwargs):
    "AND an existence guard onto whatever condition the caller already put in `kwargs`"
    if 'ConditionExpression' in kwargs:
        guard = f'{guard} and ({kwargs["ConditionExpression"]})'
    kwargs['ConditionExpression'] = guard
    return kwargs


class DynamoClient:
    """
    The single table every entity lives in.

    Writes that must not clobber take an existence guard that dynamo evaluates
    atomically with the write. When the guard fails, boto's
    `ConditionalCheckFailedException` (reachable as `self.exceptions`) propagates,
    for the model layer to turn into its own error.
    """

    def __init__(self, table_name=DYNAMO_TABLE, create_table_schema=None):
        "Pass `create_table_schema` to create the table as well, as the tests do against moto"
        assert table_name, 'Table name is required'
        self.table_name = table_name
        self.resource = boto3.resource('dynamodb')
        if create_table_schema:
            self.table = self.resource.create_table(TableName=table_name, **create_table_schema)
        else:
            self.table = self.resource.Table(table_name)
        self.exceptions = boto3.client('dynamodb').exceptions

    def add_item(self, query_kwargs):
        "Put a new item, returning it. Raises if an item with the same key exists."
        self.table.put_item(**with_guard('attribute_not_exists(partitionKey)', query_kwargs))
        return query_kwargs.get('Item')

    def get_item(self, pk, **kwargs):
        return self.table.get_item(Key=pk, **kwargs).get('Item')

    def batch_get_items(self, keys):
        """
        The items at `keys`, in no particular order.
        Keys with nothing stored at them are skipped.
        """
        keys = list(keys)
        items = []
        for offset in range(0, len(keys), BATCH_GET_LIMIT):
            pending = {self.table_name: {'Keys': keys[offset : offset + BATCH_GET_LIMIT]}}
            # throttled keys come back unprocessed, and are asked for again
            while pending:
                resp = self.resource.batch_get_item(RequestItems=pending)
                items += resp['Responses'].get(self.table_name, [])
                pending = resp.get('UnprocessedKeys')
        return items

    def update_item(self, query_kwargs, failure_warning=None):
        """
        Update an existing item, returning its new state.
        With a `failure_warning`, a failed condition is logged at WARNING and None returned
        instead of raising.
        """
        query_kwargs = with_guard('attribute_exists(partitionKey)', query_kwargs)
        query_kwargs['ReturnValues'] = 'ALL_NEW'
        try:
            return self.table.update_item(**query_kwargs).get('Attributes')
        except self.exceptions.ConditionalCheckFailedException:
            if failure_warning is None:
                raise
            logger.warning(failure_warning)
            return None

    def set_attributes(self, pk, **attributes):
        assert attributes, 'No attributes to set'
        names, values, assignments = {}, {}, []
        for i, (name, value) in enumerate(attributes.items()):
            names[f'#a{i}'] = name
            values[f':v{i}'] = value
            assignments.append(f'#a{i} = :v{i}')
        query_kwargs = {
            'Key': pk,
            'UpdateExpression': 'SET ' + ', '.join(assignments),
            'ExpressionAttributeNames': names,
            'ExpressionAttributeValues': values,
        }
        return self.update_item(query_kwargs)

    def adjust_count(self, pk, attribute_name, delta):
        """
        Add `delta` to a counter on an existing item.

        A decrement is also conditioned on the counter being above zero, so counters
        never go negative. Returns the owner's new state, or None (logged at WARNING)
        if the owner is gone or the decrement would underflow.
        """
        query_kwargs = {
            'Key': pk,
            'UpdateExpression': 'ADD #count :delta',
            'ExpressionAttributeNames': {'#count': attribute_name},
            'ExpressionAttributeValues': {':delta': delta},
        }
        if delta < 0:
            query_kwargs['ConditionExpression'] = '#count > :zero'
            query_kwargs['ExpressionAttributeValues'][':zero'] = 0
        verb = 'increment' if delta > 0 else 'decrement'
        return self.update_item(query_kwargs, failure_warning=f'Failed to {verb} {attribute_name} of `{pk}`')

    def increment_count(self, pk, attribute_name):
        return self.adjust_count(pk, attribute_name, 1)

    def decrement_count(self, pk, attribute_name):
        return self.adjust_count(pk, attribute_name, -1)

    def delete_item(self, pk, must_exist=False, **kwargs):
        """
        Delete the item at `pk`, returning what was there (None if nothing was).
        With `must_exist`, deleting nothing raises instead.
        """
        if must_exist:
            kwargs = with_guard('attribute_exists(partitionKey)', kwargs)
        kwargs.setdefault('ReturnValues', 'ALL_OLD')
        return self.table.delete_item(Key=pk, **kwargs).get('Attributes') or None

    def batch_put_items(self, items):
        "Put (overwriting) every item of the iterable. Returns how many were put."
        cnt = 0
        with self.table.batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)
                cnt += 1
        return cnt

    def batch_delete_items(self, items):
        "Delete the items (or keys) of the iterable. Returns how many deletes were sent."
        cnt = 0
        with self.table.batch_writer() as batch:
            for item in items:
                batch.delete_item(Key={attr: item[attr] for attr in KEY_ATTRIBUTES})
                cnt += 1
        return cnt

    def query_head(self, query_kwargs):
        "First item the query matches, or None. Not for filtered queries, the limit applies before the filter."
        assert 'FilterExpression' not in query_kwargs
        items = self.table.query(**{**query_kwargs, 'Limit': 1})['Items']
        return items[0] if items else None

    def generate_all_query(self, query_kwargs):
        "Every item the query matches, following pagination"
        return self.paginate(self.table.query, query_kwargs)

    def generate_all_scan(self, scan_kwargs):
        return self.paginate(self.table.scan, scan_kwargs)

    def paginate(self, operation, kwargs):
        kwargs = dict(kwargs)
        while True:
            resp = operation(**kwargs)
            yield from resp['Items']
            if 'LastEvaluatedKey' not in resp:
                return
            kwargs['ExclusiveStartKey'] = resp['LastEvaluatedKey']
