import logging
import os

from exercisely import clients, models
from exercisely.models.comment.targets import CommentQuery
from exercisely.models.exercise.cache import ExerciseCatalogCache
from exercisely.models.exercise.filters import ExerciseFilter
from exercisely.models.follower.targets import FollowTarget
from exercisely.models.user.enums import PhotoType

from . import validation
from .dispatch import handler

S3_IMAGES_BUCKET = os.environ.get('S3_IMAGES_BUCKET')

logger = logging.getLogger()

secretsmanager_client = clients.SecretsManagerClient()
clients = {
    'cognito': clients.CognitoClient(),
    'dynamo': clients.DynamoClient(),
    'filter_extractor': clients.FilterExtractorClient(secretsmanager_client.get_openai_api_creds),
    's3_images': clients.S3Client(S3_IMAGES_BUCKET),
}

# lives as long as this worker does, shared by every request it handles
exercise_catalog_cache = ExerciseCatalogCache(lambda: exercise_manager.generate_all_exercises())

managers = {}
exercise_manager = managers.get('exercise') or models.ExerciseManager(
    clients, managers=managers, catalog_cache=exercise_catalog_cache
)
comment_manager = managers.get('comment') or models.CommentManager(clients, managers=managers)
follower_manager = managers.get('follower') or models.FollowerManager(clients, managers=managers)
like_manager = managers.get('like') or models.LikeManager(clients, managers=managers)
list_manager = managers.get('list') or models.ListManager(clients, managers=managers)
user_manager = managers.get('user') or models.UserManager(clients, managers=managers)


# exercises


@handler(authenticated=False)
def get_exercises(event, context, caller_user_id):
    params = validation.get_query_params(event)
    page, page_size = validation.get_page_params(params)
    ai_query = params.get('aiQuery')
    if ai_query:
        return exercise_manager.search_exercises(
            ai_query, page=page, page_size=page_size, caller_user_id=caller_user_id
        )
    exercise_filter = ExerciseFilter.from_query_params(params)
    return exercise_manager.get_exercises(
        exercise_filter, page=page, page_size=page_size, caller_user_id=caller_user_id
    )


@handler(authenticated=False)
def get_exercise(event, context, caller_user_id):
    exercise_id = validation.get_path_param(event, 'exerciseId')
    return exercise_manager.get_exercise(exercise_id, caller_user_id=caller_user_id)


# likes


@handler(status_code=201)
def create_like(event, context, caller_user_id):
    body = validation.get_json_body(event)
    exercise_id = validation.require_string(body, 'exerciseId')
    like_manager.like_exercise(caller_user_id, exercise_id)
    return {'message': 'Exercise liked'}


@handler(required_query_params=['exerciseId'])
def delete_like(event, context, caller_user_id, exercise_id):
    like_manager.unlike_exercise(caller_user_id, exercise_id)
    return {'message': 'Exercise unliked'}


# comments


@handler(status_code=201)
def create_comment(event, context, caller_user_id):
    body = validation.get_json_body(event)
    exercise_id = validation.require_string(body, 'exerciseId')
    content = validation.require_string(body, 'content')
    return comment_manager.add_comment(caller_user_id, exercise_id, content)


@handler(required_query_params=['commentId'])
def delete_comment(event, context, caller_user_id, comment_id):
    comment_manager.delete_comment(caller_user_id, comment_id)
    return {'message': 'Comment deleted'}


@handler()
def get_comments(event, context, caller_user_id):
    params = validation.get_query_params(event)
    comment_query = CommentQuery.from_arguments(params.get('exerciseId'), params.get('commentId'))
    return comment_manager.get_comments(comment_query)


# lists


@handler(status_code=201)
def create_list(event, context, caller_user_id):
    body = validation.get_json_body(event)
    validation.require_string(body, 'visibility')
    return list_manager.create_list(
        caller_user_id,
        validation.require_string(body, 'title'),
        validation.optional_string(body, 'description') or '',
        validation.require_string(body, 'exerciseId'),
        validation.optional_visibility(body),
        shared_with=validation.optional_string_list(body, 'sharedWith'),
    )


@handler()
def get_lists(event, context, caller_user_id):
    target_user_id = validation.get_query_params(event).get('userId')
    if target_user_id:
        return list_manager.get_lists_for_user(caller_user_id, target_user_id)
    return list_manager.get_relevant_lists(caller_user_id)


@handler()
def update_list(event, context, caller_user_id):
    body = validation.get_json_body(event)
    return list_manager.update_list(
        caller_user_id,
        validation.require_string(body, 'listId'),
        title=validation.optional_string(body, 'title'),
        description=validation.optional_string(body, 'description'),
        visibility=validation.optional_visibility(body),
        shared_with=validation.optional_string_list(body, 'sharedWith'),
    )


@handler(required_query_params=['listId'])
def delete_list(event, context, caller_user_id, list_id):
    list_manager.delete_list(caller_user_id, list_id)
    return {'message': 'List deleted'}


@handler()
def add_exercise_to_list(event, context, caller_user_id):
    list_id = validation.get_path_param(event, 'listId')
    exercise_id = validation.require_string(validation.get_json_body(event), 'exerciseId')
    return list_manager.add_exercise_to_list(caller_user_id, list_id, exercise_id)


@handler(required_query_params=['exerciseId'])
def remove_exercise_from_list(event, context, caller_user_id, exercise_id):
    list_id = validation.get_path_param(event, 'listId')
    return list_manager.remove_exercise_from_list(caller_user_id, list_id, exercise_id)


# followers


@handler(status_code=201)
def create_follower(event, context, caller_user_id):
    body = validation.get_json_body(event)
    target = FollowTarget.from_arguments(body.get('userId'), body.get('listId'))
    follower_manager.follow(caller_user_id, target)
    return {'message': 'Followed'}


@handler()
def delete_follower(event, context, caller_user_id):
    params = validation.get_query_params(event)
    target = FollowTarget.from_arguments(params.get('userId'), params.get('listId'))
    follower_manager.unfollow(caller_user_id, target)
    return {'message': 'Unfollowed'}


@handler()
def get_followers(event, context, caller_user_id):
    params = validation.get_query_params(event)
    target = FollowTarget.from_arguments(params.get('userId'), params.get('listId'))
    return follower_manager.get_followers(target)


# users


@handler()
def get_user(event, context, caller_user_id):
    return user_manager.get_user(caller_user_id)


@handler()
def get_user_by_id(event, context, caller_user_id):
    user_id = validation.get_path_param(event, 'userId')
    return user_manager.summarize(user_manager.get_user_item(user_id))


@handler()
def get_all_users(event, context, caller_user_id):
    return [user_manager.summarize(user) for user in user_manager.get_all_users()]


@handler()
def update_user(event, context, caller_user_id):
    name = validation.require_string(validation.get_json_body(event), 'name')
    return user_manager.update_user(caller_user_id, name=name)


@handler()
def delete_user(event, context, caller_user_id):
    user_manager.delete_user_and_data(caller_user_id)
    return {'message': 'User deleted'}


@handler(required_query_params=['contentType'])
def get_profile_photo_upload_url(event, context, caller_user_id, content_type):
    return user_manager.get_photo_upload_url(caller_user_id, PhotoType.PROFILE, content_type)


@handler(required_query_params=['contentType'])
def get_cover_photo_upload_url(event, context, caller_user_id, content_type):
    return user_manager.get_photo_upload_url(caller_user_id, PhotoType.COVER, content_type)


@handler()
def update_profile_photo(event, context, caller_user_id):
    key = validation.require_string(validation.get_json_body(event), 'key')
    user = user_manager.set_photo(caller_user_id, PhotoType.PROFILE, key)
    return {'message': 'Profile photo updated', 'profilePhotoUrl': user['profilePhotoUrl']}


@handler()
def update_cover_photo(event, context, caller_user_id):
    key = validation.require_string(validation.get_json_body(event), 'key')
    user = user_manager.set_photo(caller_user_id, PhotoType.COVER, key)
    return {'message': 'Cover photo updated', 'coverPhotoUrl': user['coverPhotoUrl']}
