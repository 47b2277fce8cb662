import logging
import os

import boto3

COGNITO_USER_POOL_ID = os.environ.get('COGNITO_USER_POOL_ID')

logger = logging.getLogger()


class CognitoClient:
    """
    The identity provider. Users are addressed here by their cognito `username`,
    which is distinct from the `sub` claim used as userId in dynamo.
    """

    def __init__(self, user_pool_id=COGNITO_USER_POOL_ID):
        assert user_pool_id, "Cognito user pool id is required"
        self.user_pool_id = user_pool_id
        self.user_pool_client = boto3.client('cognito-idp')
        self.exceptions = self.user_pool_client.exceptions

    def update_name(self, username, name):
        self.user_pool_client.admin_update_user_attributes(
            UserPoolId=self.user_pool_id,
            Username=username,
            UserAttributes=[{'Name': 'name', 'Value': name}],
        )

    def delete_user_pool_entry(self, username):
        self.user_pool_client.admin_delete_user(UserPoolId=self.user_pool_id, Username=username)
