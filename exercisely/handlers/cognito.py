import logging

from exercisely import clients, models
from exercisely.logging import LogLevelContext, handler_logging
from exercisely.models.user.exceptions import UserAlreadyExists

logger = logging.getLogger()

clients = {
    'cognito': clients.CognitoClient(),
    'dynamo': clients.DynamoClient(),
}

managers = {}
user_manager = managers.get('user') or models.UserManager(clients, managers=managers)


class CognitoClientException(Exception):
    pass


def get_user_attribute(event, name):
    return (event['request'].get('userAttributes') or {}).get(name)


@handler_logging(event_to_extras=lambda event: {'event': event})
def post_confirmation(event, context):
    "Create the user in dynamo once they've confirmed their sign up"
    with LogLevelContext(logger, logging.INFO):
        logger.info('Handling Cognito PostConfirmation event')

    # also fired when a forgotten password is reset, by which time the user exists
    if event.get('triggerSource') != 'PostConfirmation_ConfirmSignUp':
        return event

    user_id = get_user_attribute(event, 'sub')
    email = get_user_attribute(event, 'email')
    name = get_user_attribute(event, 'name')
    if not user_id or not email or not name:
        raise CognitoClientException(f'Missing required user attributes for cognito user `{event["userName"]}`')

    try:
        user_manager.create_user(user_id, event['userName'], email, name)
    except UserAlreadyExists:
        # cognito retries triggers that time out
        logger.warning(f'User `{user_id}` already exists, not creating')
    return event
