# -*- coding: utf-8 -*-

import logging

import cottonformation as cft
from codebuild_actions.config import config
from codebuild_actions.iac.s1_dependency import make_dependency_template
from codebuild_actions.boto_ses import bsm, aws_account_id, aws_region

logging.basicConfig(level=config.log_level)

artifacts_s3_bucket_name = f"{aws_account_id}-{aws_region}-cottonformation"
tpl = make_dependency_template(bucket_name=artifacts_s3_bucket_name)
tpl.batch_tagging(tags=dict(ProjectName=config.project_name_slug))

env = cft.Env(bsm=bsm)
env.deploy(
    template=tpl,
    stack_name=f"cottonformation-deps-{aws_account_id}-{aws_region}",
)
