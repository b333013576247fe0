# -*- coding: utf-8 -*-

"""
Count the artifacts each pipeline execution left in the artifact bucket.
"""

from s3pathlib import S3Path
from rich import print as rprint
from codebuild_actions.config import config
from codebuild_actions.iac.s2_app import Stack
from codebuild_actions.boto_ses import bsm, aws_account_id, aws_region

stack = Stack(
    project_name=config.project_name,
    stage=config.stage,
    aws_account_id=aws_account_id,
    aws_region=aws_region,
    source_object_key=config.source_object_key,
)

# CodePipeline stores artifacts under {pipeline name}/{artifact name}/
s3dir_pipeline = S3Path(stack.artifact_bucket_name, stack.pipeline_name[:20] + "/")


def count_objects_in_s3_folder(s3dir: S3Path) -> int:
    return s3dir.count_objects(bsm=bsm)


s3path_source = S3Path(stack.artifact_bucket_name, stack.source_object_key)
rprint(f"source: {s3path_source.uri}, exists = {s3path_source.exists(bsm=bsm)}")

for action in [stack.source_action, stack.build_action, stack.test_action]:
    for artifact in action.output_artifacts:
        s3dir = S3Path(s3dir_pipeline, artifact.name[:20] + "/")
        rprint(f"{action.name}: {artifact.name} -> {count_objects_in_s3_folder(s3dir)} objects")
