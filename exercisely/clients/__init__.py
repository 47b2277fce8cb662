__all__ = [
    'CognitoClient',
    'DynamoClient',
    'FilterExtractorClient',
    'S3Client',
    'SecretsManagerClient',
]
from .cognito import CognitoClient
from .dynamo import DynamoClient
from .filter_extractor import FilterExtractorClient
from .s3 import S3Client
from .secretsmanager import SecretsManagerClient
