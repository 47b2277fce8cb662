from exercisely import models


def test_managers_fill_the_registry_they_are_given(dynamo_client):
    managers = {}
    user_manager = models.UserManager({'dynamo': dynamo_client}, managers=managers)
    assert sorted(managers) == ['comment', 'exercise', 'follower', 'like', 'list', 'user']
    assert managers['user'] is user_manager
    assert user_manager.like_manager is managers['like']

    # every manager finds the same siblings
    for manager in managers.values():
        for name, sibling in managers.items():
            if hasattr(manager, f'{name}_manager'):
                assert getattr(manager, f'{name}_manager') is sibling


def test_managers_share_one_catalog_cache(managers):
    exercise_manager = managers['exercise']
    assert managers['like'].exercise_manager is exercise_manager
    assert managers['comment'].exercise_manager is exercise_manager
    assert managers['list'].exercise_manager is exercise_manager


def test_injected_catalog_cache_is_used(dynamo_client):
    catalog_cache = object()
    managers = {}
    exercise_manager = models.ExerciseManager({'dynamo': dynamo_client}, managers=managers, catalog_cache=catalog_cache)
    assert exercise_manager.catalog_cache is catalog_cache
    assert managers['like'].exercise_manager.catalog_cache is catalog_cache
