import json
import os

import boto3

OPENAI_API_KEY_NAME = os.environ.get('SECRETSMANAGER_OPENAI_API_KEY_NAME')


class SecretsManagerClient:
    def __init__(self, openai_api_key_name=OPENAI_API_KEY_NAME):
        self.boto_client = boto3.client('secretsmanager')
        self.exceptions = self.boto_client.exceptions
        self.openai_api_key_name = openai_api_key_name

    def get_openai_api_creds(self):
        "Returns a dict with an `apiKey` entry"
        if not hasattr(self, '_openai_api_creds'):
            resp = self.boto_client.get_secret_value(SecretId=self.openai_api_key_name)
            self._openai_api_creds = json.loads(resp['SecretString'])
        return self._openai_api_creds
