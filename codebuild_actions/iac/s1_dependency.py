# -*- coding: utf-8 -*-

"""
Basic dependencies to make infrastructure as code works.

Including:

- a S3 bucket to store cloudformation template artifacts
"""

import cottonformation as cft
from cottonformation.res import s3


def make_dependency_template(bucket_name: str) -> cft.Template:
    tpl = cft.Template()
    s3_bucket_for_artifacts = s3.Bucket(
        "S3BucketForCottonFormation",
        p_BucketName=bucket_name,
    )
    tpl.add(s3_bucket_for_artifacts)
    return tpl
