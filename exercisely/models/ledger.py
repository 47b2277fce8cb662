import logging

logger = logging.getLogger()


class EdgeLedger:
    """
    Pairs an edge item (a like, a comment, a follow) with the counter on its owner
    that counts such edges.

    There is no cross-item transaction: the edge is always written first and the
    counter adjusted second, in two independent writes. If the process dies or the
    counter write is throttled in between, the counter is left off by one. That
    window is accepted and is not reported to the caller.

    The edge step is guarded, so replaying an `add` or a `remove` can never adjust a
    counter twice: the replay fails on the edge before the counter is touched.
    Counter failures (owner gone, decrement at zero) are logged and swallowed, and
    reported back as None rather than the updated owner item.
    """

    def __init__(self, dynamo_client):
        self.client = dynamo_client

    def add(self, write_edge, counter_key, attribute_name):
        """
        Run `write_edge()`, which must raise if the edge already exists, then increment.
        Returns (edge_item, owner_item_or_None).
        """
        edge_item = write_edge()
        owner_item = self.client.increment_count(counter_key.pk, attribute_name)
        return edge_item, owner_item

    def remove(self, delete_edge, counter_key, attribute_name):
        """
        Run `delete_edge()`, which must raise if the edge does not exist, then decrement.
        Returns (deleted_edge_item, owner_item_or_None).
        """
        edge_item = delete_edge()
        owner_item = self.client.decrement_count(counter_key.pk, attribute_name)
        if owner_item is None:
            logger.warning(f'Edge removed but `{attribute_name}` of `{counter_key.partition_key}` was not decremented')
        return edge_item, owner_item
