import boto3

UPLOAD_URL_LIFETIME_SECS = 300


class S3Client:
    def __init__(self, bucket_name, create_bucket=False):
        """
        The create_bucket kwarg is intended for use with moto in the test suite.
        """
        assert bucket_name, "Bucket name is required"
        self.boto_client = boto3.client('s3')
        self.bucket_name = bucket_name
        self.exceptions = self.boto_client.exceptions

        if create_bucket:
            boto3.resource('s3').create_bucket(Bucket=bucket_name)

    def generate_upload_url(self, path, content_type, expires_in=UPLOAD_URL_LIFETIME_SECS):
        "A time-boxed url the client may PUT an object of the given content type to"
        return self.boto_client.generate_presigned_url(
            'put_object',
            Params={'Bucket': self.bucket_name, 'Key': path, 'ContentType': content_type},
            ExpiresIn=expires_in,
        )

    def get_object_url(self, path):
        return f'https://{self.bucket_name}.s3.amazonaws.com/{path}'

    def delete_objects_with_prefix(self, path_prefix):
        "Delete mutliple objects with the same prefix in one call to S3"
        boto3.resource('s3').Bucket(self.bucket_name).objects.filter(Prefix=path_prefix).delete()
