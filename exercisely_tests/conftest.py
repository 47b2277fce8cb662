import os
import uuid
from unittest import mock

import moto
import pytest

# boto3 needs a region and some credentials to build its clients, which moto then intercepts.
# The module-level clients of the handlers read the rest at import time.
os.environ.setdefault('AWS_ACCESS_KEY_ID', 'testing')
os.environ.setdefault('AWS_SECRET_ACCESS_KEY', 'testing')
os.environ.setdefault('AWS_SECURITY_TOKEN', 'testing')
os.environ.setdefault('AWS_SESSION_TOKEN', 'testing')
os.environ['AWS_DEFAULT_REGION'] = 'us-east-1'
os.environ.setdefault('DYNAMO_TABLE', 'main-table')
os.environ.setdefault('COGNITO_USER_POOL_ID', 'us-east-1_dummy')
os.environ.setdefault('S3_IMAGES_BUCKET', 'images-bucket')
os.environ.setdefault('SECRETSMANAGER_OPENAI_API_KEY_NAME', 'openai-api-key')
from exercisely import clients, models  # noqa: E402 isort:skip
from exercisely.models.exercise.dynamo import ExerciseDynamo  # noqa: E402 isort:skip

from .dynamodb.table_schema import main_table_schema  # noqa: E402 isort:skip


def exercise_data(name, level='beginner', category='strength', **kwargs):
    "An entry shaped like those of the raw exercise catalogue"
    return {
        'name': name,
        'force': 'push',
        'level': level,
        'mechanic': 'compound',
        'equipment': 'body only',
        'primaryMuscles': ['chest'],
        'secondaryMuscles': ['shoulders', 'triceps'],
        'instructions': ['Do it.'],
        'category': category,
        'images': [],
        **kwargs,
    }


# can't nest the moto context managers, so everything mocked by moto lives under this one
@pytest.fixture
def aws_mock():
    with moto.mock_aws():
        yield


@pytest.fixture
def dynamo_client(aws_mock):
    yield clients.DynamoClient(table_name='main-table', create_table_schema=main_table_schema)


@pytest.fixture
def s3_images_client(aws_mock):
    yield clients.S3Client(bucket_name='images-bucket', create_bucket=True)


@pytest.fixture
def cognito_client():
    yield mock.Mock(clients.CognitoClient(user_pool_id='dummy-pool-id'))


@pytest.fixture
def filter_extractor_client():
    yield mock.Mock(clients.FilterExtractorClient(lambda: {'apiKey': 'the-api-key'}))


@pytest.fixture
def managers(cognito_client, dynamo_client, filter_extractor_client, s3_images_client):
    "Every manager, built once over the same clients so they share state like the exercise catalog cache"
    managers = {}
    models.UserManager(
        {
            'cognito': cognito_client,
            'dynamo': dynamo_client,
            'filter_extractor': filter_extractor_client,
            's3_images': s3_images_client,
        },
        managers=managers,
    )
    yield managers


@pytest.fixture
def comment_manager(managers):
    yield managers['comment']


@pytest.fixture
def exercise_manager(managers):
    yield managers['exercise']


@pytest.fixture
def follower_manager(managers):
    yield managers['follower']


@pytest.fixture
def like_manager(managers):
    yield managers['like']


@pytest.fixture
def list_manager(managers):
    yield managers['list']


@pytest.fixture
def user_manager(managers):
    yield managers['user']


@pytest.fixture
def add_exercise(dynamo_client):
    "Add an exercise straight to dynamo, as the catalogue seed would"

    def add_exercise(exercise_id, name, **kwargs):
        exercise_item = ExerciseDynamo(dynamo_client).build_exercise_item(exercise_id, exercise_data(name, **kwargs))
        return dynamo_client.add_item({'Item': exercise_item})

    yield add_exercise


@pytest.fixture
def exercise(add_exercise):
    yield add_exercise('Push_Up', 'Push Up')


@pytest.fixture
def exercise2(add_exercise):
    yield add_exercise(
        'Barbell_Squat',
        'Barbell Squat',
        level='intermediate',
        equipment='barbell',
        primaryMuscles=['quadriceps'],
        secondaryMuscles=['glutes', 'hamstrings'],
    )


@pytest.fixture
def exercise3(add_exercise):
    yield add_exercise(
        'Plank',
        'Plank',
        force='static',
        mechanic='isolation',
        primaryMuscles=['abdominals'],
        secondaryMuscles=[],
    )


def new_user(user_manager, name):
    user_id = str(uuid.uuid4())
    username = f'{name.lower()}-{user_id[:8]}'
    return user_manager.create_user(user_id, username, f'{username}@example.com', name)


@pytest.fixture
def user(user_manager):
    yield new_user(user_manager, 'Alice')


user1 = user


@pytest.fixture
def user2(user_manager):
    yield new_user(user_manager, 'Bob')


@pytest.fixture
def user3(user_manager):
    yield new_user(user_manager, 'Carol')
