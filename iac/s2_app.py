# -*- coding: utf-8 -*-

import logging

import cottonformation as cft
from codebuild_actions.config import config
from codebuild_actions.iac.s2_app import Stack
from codebuild_actions.boto_ses import bsm, aws_account_id, aws_region

logging.basicConfig(level=config.log_level)

stack = Stack(
    project_name=config.project_name,
    stage=config.stage,
    aws_account_id=aws_account_id,
    aws_region=aws_region,
    source_object_key=config.source_object_key,
)

# create cloudformation template
tpl = cft.Template()

# partial deployment handling
tpl.add(stack.rg1_artifact_bucket)
tpl.add(stack.rg2_iam_role)
tpl.add(stack.rg3_codebuild_project)
tpl.add(stack.rg4_pipeline)

tpl.batch_tagging(tags=dict(ProjectName=stack.project_name_slug))

# deploy stack
env = cft.Env(bsm=bsm)
env.deploy(
    template=tpl,
    stack_name=stack.stack_name,
    bucket=f"{aws_account_id}-{aws_region}-cottonformation",
    include_named_iam=True,
)
