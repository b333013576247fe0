# -*- coding: utf-8 -*-

"""
Print the pipeline template without deploying it, with a fake account.
"""

import logging

import cottonformation as cft
from rich import print as rprint
from codebuild_actions.config import config
from codebuild_actions.iac.s2_app import Stack

logging.basicConfig(level="DEBUG")

stack = Stack(
    project_name=config.project_name,
    stage=config.stage,
    aws_account_id="111122223333",
    aws_region="us-east-1",
)

tpl = cft.Template()
tpl.add(stack.rg1_artifact_bucket)
tpl.add(stack.rg2_iam_role)
tpl.add(stack.rg3_codebuild_project)
tpl.add(stack.rg4_pipeline)

rprint(tpl.to_dict())

#--- who can write to the artifact bucket
for role in [stack.iam_role_for_pipeline, stack.iam_role_for_codebuild]:
    rprint(role.role_name)
    rprint(role.policy_document())
