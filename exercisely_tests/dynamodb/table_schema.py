# The schema of the single dynamodb table
# Keep in sync with the table definition the deployment creates


main_table_schema = {
    'KeySchema': [
        {'AttributeName': 'partitionKey', 'KeyType': 'HASH'},
        {'AttributeName': 'sortKey', 'KeyType': 'RANGE'},
    ],
    'GlobalSecondaryIndexes': [
        {
            'IndexName': 'GSI1',
            'KeySchema': [
                {'AttributeName': 'gsi1PartitionKey', 'KeyType': 'HASH'},
                {'AttributeName': 'gsi1SortKey', 'KeyType': 'RANGE'},
            ],
            'Projection': {'ProjectionType': 'ALL'},
        },
        {
            'IndexName': 'GSI2',
            'KeySchema': [
                {'AttributeName': 'sortKey', 'KeyType': 'HASH'},
            ],
            'Projection': {'ProjectionType': 'ALL'},
        },
        {
            'IndexName': 'GSI3',
            'KeySchema': [
                {'AttributeName': 'gsi3PartitionKey', 'KeyType': 'HASH'},
                {'AttributeName': 'gsi3SortKey', 'KeyType': 'RANGE'},
            ],
            'Projection': {'ProjectionType': 'ALL'},
        },
        {
            'IndexName': 'GSI4',
            'KeySchema': [
                {'AttributeName': 'gsi4PartitionKey', 'KeyType': 'HASH'},
                {'AttributeName': 'gsi4SortKey', 'KeyType': 'RANGE'},
            ],
            'Projection': {'ProjectionType': 'ALL'},
        },
    ],
    'AttributeDefinitions': [
        {'AttributeName': 'partitionKey', 'AttributeType': 'S'},
        {'AttributeName': 'sortKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi1PartitionKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi1SortKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi3PartitionKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi3SortKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi4PartitionKey', 'AttributeType': 'S'},
        {'AttributeName': 'gsi4SortKey', 'AttributeType': 'S'},
    ],
    'BillingMode': 'PAY_PER_REQUEST',
}
