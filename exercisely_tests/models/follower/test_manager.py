import pendulum
import pytest

from exercisely.models.follower.exceptions import (
    AlreadyFollowing,
    FollowerUserDoesNotExist,
    FollowerValidationException,
    ListNotFollowable,
    NotFollowing,
)
from exercisely.models.follower.targets import ByList, ByUser
from exercisely.models.list.exceptions import ListDoesNotExist
from exercisely.models.user.exceptions import UserDoesNotExist


@pytest.fixture
def public_list(list_manager, exercise, user1):
    yield list_manager.create_list(user1['userId'], 'Public', '', 'Push_Up', 'public')


@pytest.fixture
def private_list(list_manager, exercise, user1):
    yield list_manager.create_list(user1['userId'], 'Private', '', 'Push_Up', 'private')


@pytest.fixture
def shared_list(list_manager, exercise, user1, user2):
    yield list_manager.create_list(user1['userId'], 'Shared', '', 'Push_Up', 'shared', shared_with=[user2['userId']])


def follower_count(user_manager, user):
    return user_manager.get_user_item(user['userId'])['followerCount']


def test_follow_user(follower_manager, user_manager, user1, user2, user3):
    uid1, uid2, uid3 = user1['userId'], user2['userId'], user3['userId']

    follow_item = follower_manager.follow(uid2, ByUser(uid1))
    assert follow_item['followerUserId'] == uid2
    assert follow_item['followedUserId'] == uid1
    assert follower_count(user_manager, user1) == 1

    follower_manager.follow(uid3, ByUser(uid1))
    assert follower_count(user_manager, user1) == 2
    assert follower_count(user_manager, user2) == 0

    with pytest.raises(AlreadyFollowing):
        follower_manager.follow(uid2, ByUser(uid1))
    assert follower_count(user_manager, user1) == 2


def test_cant_follow_self_or_missing_user(follower_manager, user_manager, user):
    with pytest.raises(FollowerValidationException, match='cannot follow themselves'):
        follower_manager.follow(user['userId'], ByUser(user['userId']))
    with pytest.raises(UserDoesNotExist):
        follower_manager.follow(user['userId'], ByUser('gone'))
    assert list(follower_manager.dynamo.generate_followeds(user['userId'])) == []
    assert follower_count(user_manager, user) == 0


def test_unfollow_user(follower_manager, user_manager, user1, user2):
    uid1, uid2 = user1['userId'], user2['userId']
    with pytest.raises(NotFollowing):
        follower_manager.unfollow(uid2, ByUser(uid1))

    follower_manager.follow(uid2, ByUser(uid1))
    follower_manager.unfollow(uid2, ByUser(uid1))
    assert list(follower_manager.dynamo.generate_followers(ByUser(uid1))) == []
    assert follower_count(user_manager, user1) == 0

    with pytest.raises(NotFollowing):
        follower_manager.unfollow(uid2, ByUser(uid1))
    assert follower_count(user_manager, user1) == 0

    with pytest.raises(UserDoesNotExist):
        follower_manager.unfollow(uid2, ByUser('gone'))


def test_follow_public_list(follower_manager, list_manager, public_list, user2, user3):
    list_id = public_list['listId']
    follow_item = follower_manager.follow(user2['userId'], ByList(list_id))
    assert follow_item['listId'] == list_id
    assert follow_item['listOwnerUserId'] == public_list['userId']
    follower_manager.follow(user3['userId'], ByList(list_id))
    assert list_manager.get_list_item_by_id(list_id)['followerCount'] == 2

    follower_manager.unfollow(user3['userId'], ByList(list_id))
    assert list_manager.get_list_item_by_id(list_id)['followerCount'] == 1


def test_follow_private_list(follower_manager, list_manager, private_list, user1, user2):
    list_id = private_list['listId']
    with pytest.raises(ListNotFollowable):
        follower_manager.follow(user2['userId'], ByList(list_id))
    assert list_manager.get_list_item_by_id(list_id)['followerCount'] == 0

    # the owner may follow their own list
    follower_manager.follow(user1['userId'], ByList(list_id))
    assert list_manager.get_list_item_by_id(list_id)['followerCount'] == 1


def test_follow_shared_list(follower_manager, list_manager, shared_list, user2, user3):
    list_id = shared_list['listId']
    with pytest.raises(ListNotFollowable):
        follower_manager.follow(user3['userId'], ByList(list_id))
    follower_manager.follow(user2['userId'], ByList(list_id))
    assert list_manager.get_list_item_by_id(list_id)['followerCount'] == 1


def test_follow_missing_list(follower_manager, user):
    with pytest.raises(ListDoesNotExist):
        follower_manager.follow(user['userId'], ByList('gone'))
    with pytest.raises(ListDoesNotExist):
        follower_manager.unfollow(user['userId'], ByList('gone'))


def test_follow_unexpected_target(follower_manager, user):
    with pytest.raises(TypeError):
        follower_manager.follow(user['userId'], ('uid',))


def test_get_followers_of_user(follower_manager, user_manager, public_list, user1, user2, user3):
    uid1, uid2, uid3 = user1['userId'], user2['userId'], user3['userId']
    now = pendulum.now('utc')
    follower_manager.follow(uid2, ByUser(uid1), now=now.subtract(minutes=2))
    follower_manager.follow(uid3, ByUser(uid1), now=now.subtract(minutes=1))
    follower_manager.follow(uid1, ByUser(uid3), now=now.subtract(minutes=3))
    follower_manager.follow(uid1, ByUser(uid2), now=now)
    # follows of lists are not followings
    follower_manager.follow(uid1, ByList(public_list['listId']))

    resp = follower_manager.get_followers(ByUser(uid1))
    assert resp == {
        'followers': [
            {'userId': uid3, 'name': 'Carol', 'profilePhotoUrl': None},
            {'userId': uid2, 'name': 'Bob', 'profilePhotoUrl': None},
        ],
        'followings': [
            {'userId': uid2, 'name': 'Bob', 'profilePhotoUrl': None},
            {'userId': uid3, 'name': 'Carol', 'profilePhotoUrl': None},
        ],
    }

    assert follower_manager.get_followers(ByUser(uid3)) == {
        'followers': [{'userId': uid1, 'name': 'Alice', 'profilePhotoUrl': None}],
        'followings': [{'userId': uid1, 'name': 'Alice', 'profilePhotoUrl': None}],
    }


def test_get_followers_of_list(follower_manager, public_list, user2, user3):
    list_id = public_list['listId']
    assert follower_manager.get_followers(ByList(list_id)) == {'followers': []}

    now = pendulum.now('utc')
    follower_manager.follow(user3['userId'], ByList(list_id), now=now.subtract(minutes=1))
    follower_manager.follow(user2['userId'], ByList(list_id), now=now)
    resp = follower_manager.get_followers(ByList(list_id))
    assert [user['userId'] for user in resp['followers']] == [user2['userId'], user3['userId']]
    assert 'followings' not in resp


def test_get_followers_missing_user(follower_manager, user):
    # a follow edge left behind by a user that no longer exists
    follower_manager.dynamo.add_follow(ByUser(user['userId']), 'ghost')
    with pytest.raises(FollowerUserDoesNotExist, match='`ghost`'):
        follower_manager.get_followers(ByUser(user['userId']))


def test_get_followers_edges_without_created_at_sort_last(follower_manager, dynamo_client, user1, user2, user3):
    uid1 = user1['userId']
    follower_manager.follow(user2['userId'], ByUser(uid1))
    dynamo_client.add_item(
        {
            'Item': {
                'partitionKey': f'USER#{uid1}',
                'sortKey': f'FOLLOWER#{user3["userId"]}',
                'followerUserId': user3['userId'],
                'followedUserId': uid1,
            }
        }
    )
    resp = follower_manager.get_followers(ByUser(uid1))
    assert [user['userId'] for user in resp['followers']] == [user2['userId'], user3['userId']]


def test_unfollow_all_by_user(follower_manager, user_manager, list_manager, public_list, user1, user2, user3):
    uid1, uid2, uid3 = user1['userId'], user2['userId'], user3['userId']
    follower_manager.follow(uid2, ByUser(uid1))
    follower_manager.follow(uid2, ByUser(uid3))
    follower_manager.follow(uid2, ByList(public_list['listId']))
    follower_manager.follow(uid3, ByUser(uid1))

    follower_manager.unfollow_all_by_user(uid2)
    assert list(follower_manager.dynamo.generate_followeds(uid2)) == []
    assert follower_count(user_manager, user1) == 1
    assert follower_count(user_manager, user3) == 0
    assert list_manager.get_list_item_by_id(public_list['listId'])['followerCount'] == 0


def test_get_followed_list_ids(follower_manager, list_manager, public_list, shared_list, user1, user2):
    uid2 = user2['userId']
    assert follower_manager.get_followed_list_ids(uid2) == []
    follower_manager.follow(uid2, ByUser(user1['userId']))
    follower_manager.follow(uid2, ByList(public_list['listId']))
    follower_manager.follow(uid2, ByList(shared_list['listId']))
    assert sorted(follower_manager.get_followed_list_ids(uid2)) == sorted(
        [public_list['listId'], shared_list['listId']]
    )


def test_delete_followers_of_list(follower_manager, list_manager, public_list, user2, user3):
    list_id = public_list['listId']
    follower_manager.follow(user2['userId'], ByList(list_id))
    follower_manager.follow(user3['userId'], ByList(list_id))
    assert follower_manager.delete_followers_of_list(list_id) == 2
    assert follower_manager.get_followed_list_ids(user2['userId']) == []
    assert follower_manager.get_followers(ByList(list_id)) == {'followers': []}
