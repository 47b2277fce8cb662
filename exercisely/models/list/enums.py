class ListVisibility:
    PUBLIC = 'public'
    PRIVATE = 'private'
    SHARED = 'shared'

    _ALL = (PUBLIC, PRIVATE, SHARED)


class ListRelationship:
    "How a list relates to the user viewing it"

    OWNED = 'owned'
    PUBLIC = 'public'
    FOLLOWING = 'following'
    SHARED = 'shared'

    _ALL = (OWNED, PUBLIC, FOLLOWING, SHARED)

    # when a list relates to the viewer in more than one way, the earlier wins
    _PRECEDENCE = (SHARED, FOLLOWING, OWNED, PUBLIC)
