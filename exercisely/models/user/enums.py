class PhotoType:
    PROFILE = 'profile'
    COVER = 'cover'

    _ALL = (PROFILE, COVER)


# photo type -> (key prefix in the images bucket, user attribute holding the url)
PHOTO_LOCATIONS = {
    PhotoType.PROFILE: ('profile-photos', 'profilePhotoUrl'),
    PhotoType.COVER: ('cover-photos', 'coverPhotoUrl'),
}

PHOTO_CONTENT_TYPES = ('image/jpeg', 'image/png', 'image/webp')
