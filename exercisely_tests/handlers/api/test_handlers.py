import json
from unittest import mock

import pytest

from exercisely.handlers.api import handlers


@pytest.fixture(autouse=True)
def patched_managers(managers):
    "Point the module's managers at the ones built over mocked clients"
    with mock.patch.multiple(
        handlers,
        comment_manager=managers['comment'],
        exercise_manager=managers['exercise'],
        follower_manager=managers['follower'],
        like_manager=managers['like'],
        list_manager=managers['list'],
        user_manager=managers['user'],
    ):
        yield


def event(caller_user_id=None, body=None, query=None, path=None):
    event = {'requestContext': {'http': {'method': 'GET', 'path': '/'}}}
    if caller_user_id:
        event['requestContext']['authorizer'] = {'jwt': {'claims': {'sub': caller_user_id}}}
    if body is not None:
        event['body'] = json.dumps(body)
    if query is not None:
        event['queryStringParameters'] = query
    if path is not None:
        event['pathParameters'] = path
    return event


def call(func, **kwargs):
    resp = func(event(**kwargs), None)
    return resp['statusCode'], json.loads(resp['body'])


def test_get_exercises(exercise, exercise2, exercise3, user):
    status, body = call(handlers.get_exercises, query={'muscle': 'glutes,abdominals', 'pageSize': '1'})
    assert status == 200
    assert body['total'] == 2
    assert body['pageSize'] == 1
    assert len(body['data']) == 1
    assert 'isLiked' not in body['data'][0]

    status, body = call(handlers.get_exercises, caller_user_id=user['userId'])
    assert status == 200
    assert body['total'] == 3
    assert all(e['isLiked'] is False for e in body['data'])

    status, body = call(handlers.get_exercises, query={'level': 'godlike'})
    assert status == 400
    assert body['code'] == 'BAD_REQUEST'


def test_get_exercises_ai_query(filter_extractor_client, exercise, exercise2):
    filter_extractor_client.extract_filters.return_value = {'equipment': 'barbell'}
    status, body = call(handlers.get_exercises, query={'aiQuery': 'barbell work', 'name': 'ignored'})
    assert status == 200
    assert [e['exerciseId'] for e in body['data']] == ['Barbell_Squat']
    assert body['ai'] == {'query': 'barbell work', 'filters': {'equipment': ['barbell']}}


def test_get_exercise(exercise):
    status, body = call(handlers.get_exercise, path={'exerciseId': 'Push_Up'})
    assert status == 200
    assert body['exerciseId'] == 'Push_Up'
    assert body['likeCount'] == 0

    status, body = call(handlers.get_exercise, path={'exerciseId': 'Nope'})
    assert status == 404
    assert body == {'message': 'Exercise `Nope` does not exist', 'code': 'NOT_FOUND'}


def test_likes(exercise, user):
    uid = user['userId']
    status, _ = call(handlers.create_like, body={'exerciseId': 'Push_Up'})
    assert status == 401

    status, body = call(handlers.create_like, caller_user_id=uid, body={'exerciseId': 'Push_Up'})
    assert status == 201
    assert body == {'message': 'Exercise liked'}

    status, body = call(handlers.create_like, caller_user_id=uid, body={'exerciseId': 'Push_Up'})
    assert status == 400

    status, body = call(handlers.get_exercise, caller_user_id=uid, path={'exerciseId': 'Push_Up'})
    assert body['likeCount'] == 1
    assert body['isLiked'] is True

    status, body = call(handlers.delete_like, caller_user_id=uid)
    assert status == 400
    status, body = call(handlers.delete_like, caller_user_id=uid, query={'exerciseId': 'Push_Up'})
    assert status == 200
    assert body == {'message': 'Exercise unliked'}


def test_comments(exercise, user1, user2):
    uid1, uid2 = user1['userId'], user2['userId']
    status, comment = call(
        handlers.create_comment, caller_user_id=uid1, body={'exerciseId': 'Push_Up', 'content': 'nice'}
    )
    assert status == 201
    assert comment['content'] == 'nice'

    status, body = call(handlers.get_comments, caller_user_id=uid2, query={'exerciseId': 'Push_Up'})
    assert status == 200
    assert [c['commentId'] for c in body] == [comment['commentId']]
    assert body[0]['user'] == {'name': 'Alice', 'profilePhotoUrl': None}

    status, body = call(handlers.get_comments, caller_user_id=uid2, query={'commentId': comment['commentId']})
    assert status == 200
    assert body['content'] == 'nice'

    status, body = call(
        handlers.get_comments, caller_user_id=uid2, query={'commentId': comment['commentId'], 'exerciseId': 'Push_Up'}
    )
    assert status == 400
    status, body = call(handlers.get_comments, caller_user_id=uid2)
    assert status == 400

    status, body = call(handlers.delete_comment, caller_user_id=uid2, query={'commentId': comment['commentId']})
    assert status == 403
    status, body = call(handlers.delete_comment, caller_user_id=uid1, query={'commentId': comment['commentId']})
    assert status == 200


def test_lists(exercise, exercise2, user1, user2):
    uid1, uid2 = user1['userId'], user2['userId']
    new_list = {'title': 'Legs', 'exerciseId': 'Push_Up', 'visibility': 'shared', 'sharedWith': [uid2]}
    status, created = call(handlers.create_list, caller_user_id=uid1, body=new_list)
    assert status == 201
    list_id = created['listId']
    assert created['description'] == ''

    status, body = call(handlers.create_list, caller_user_id=uid1, body={**new_list, 'visibility': 'secret'})
    assert status == 400
    status, body = call(handlers.create_list, caller_user_id=uid1, body={'title': 'Legs', 'exerciseId': 'Push_Up'})
    assert status == 400

    status, body = call(
        handlers.add_exercise_to_list,
        caller_user_id=uid1,
        path={'listId': list_id},
        body={'exerciseId': 'Barbell_Squat'},
    )
    assert status == 200
    assert body['exercises'] == ['Push_Up', 'Barbell_Squat']

    status, body = call(handlers.get_lists, caller_user_id=uid2)
    assert status == 200
    assert [(r['list']['listId'], r['relationship']) for r in body] == [(list_id, 'shared')]

    status, body = call(handlers.get_lists, caller_user_id=uid2, query={'userId': uid1})
    assert [(r['list']['listId'], r['relationship']) for r in body] == [(list_id, 'shared')]

    status, body = call(handlers.update_list, caller_user_id=uid2, body={'listId': list_id, 'title': 'Mine'})
    assert status == 403
    status, body = call(handlers.update_list, caller_user_id=uid1, body={'listId': list_id, 'visibility': 'public'})
    assert status == 200
    assert body['sharedWith'] == []

    status, body = call(
        handlers.remove_exercise_from_list,
        caller_user_id=uid1,
        path={'listId': list_id},
        query={'exerciseId': 'Push_Up'},
    )
    assert status == 200
    assert body['exercises'] == ['Barbell_Squat']

    status, body = call(handlers.delete_list, caller_user_id=uid1, query={'listId': list_id})
    assert status == 200
    status, body = call(handlers.delete_list, caller_user_id=uid1, query={'listId': list_id})
    assert status == 404


def test_followers(user1, user2):
    uid1, uid2 = user1['userId'], user2['userId']
    status, body = call(handlers.create_follower, caller_user_id=uid1, body={'userId': uid2})
    assert status == 201
    status, body = call(handlers.create_follower, caller_user_id=uid1, body={'userId': uid2, 'listId': 'lid'})
    assert status == 400
    status, body = call(handlers.create_follower, caller_user_id=uid1, body={'userId': uid1})
    assert status == 400

    status, body = call(handlers.get_followers, caller_user_id=uid1, query={'userId': uid2})
    assert status == 200
    assert body == {'followers': [{'userId': uid1, 'name': 'Alice', 'profilePhotoUrl': None}], 'followings': []}

    status, body = call(handlers.delete_follower, caller_user_id=uid1, query={'userId': uid2})
    assert status == 200
    status, body = call(handlers.delete_follower, caller_user_id=uid1, query={'userId': uid2})
    assert status == 400


def test_users(cognito_client, user1, user2):
    uid1, uid2 = user1['userId'], user2['userId']
    status, body = call(handlers.get_user, caller_user_id=uid1)
    assert status == 200
    assert body['email'] == user1['email']

    status, body = call(handlers.get_user_by_id, caller_user_id=uid1, path={'userId': uid2})
    assert body == {'userId': uid2, 'name': 'Bob', 'profilePhotoUrl': None}
    status, body = call(handlers.get_user_by_id, caller_user_id=uid1, path={'userId': 'gone'})
    assert status == 404

    status, body = call(handlers.get_all_users, caller_user_id=uid1)
    assert sorted(u['name'] for u in body) == ['Alice', 'Bob']

    status, body = call(handlers.update_user, caller_user_id=uid1, body={'name': 'Al'})
    assert status == 200
    assert body['name'] == 'Al'
    cognito_client.update_name.assert_called_once_with(user1['username'], 'Al')
    status, body = call(handlers.update_user, caller_user_id=uid1, body={})
    assert status == 400

    status, body = call(handlers.delete_user, caller_user_id=uid2)
    assert status == 200
    status, body = call(handlers.get_user, caller_user_id=uid2)
    assert status == 404


def test_photos(user):
    uid = user['userId']
    status, body = call(handlers.get_profile_photo_upload_url, caller_user_id=uid, query={'contentType': 'image/png'})
    assert status == 200
    assert body['key'] == f'profile-photos/{uid}.png'
    assert body['uploadUrl']

    status, body = call(handlers.get_cover_photo_upload_url, caller_user_id=uid, query={'contentType': 'text/html'})
    assert status == 400

    status, body = call(handlers.update_profile_photo, caller_user_id=uid, body={'key': f'profile-photos/{uid}.png'})
    assert status == 200
    assert body['profilePhotoUrl'].endswith(f'/profile-photos/{uid}.png')

    status, body = call(handlers.update_cover_photo, caller_user_id=uid, body={'key': f'cover-photos/{uid}.jpeg'})
    assert status == 200
    assert body['coverPhotoUrl'].endswith(f'/cover-photos/{uid}.jpeg')

    status, body = call(handlers.update_cover_photo, caller_user_id=uid, body={'key': 'cover-photos/someone.jpeg'})
    assert status == 400
