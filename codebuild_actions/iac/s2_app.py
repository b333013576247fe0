# -*- coding: utf-8 -*-

"""
This is the CI pipeline application stack.

Prerequisite:

1. An AWS Account and a Region, all resources are on the same Region.
2. The dependency stack from ``s1_dependency.py`` is deployed, so you can
    upload Infrastructure as Code to it and then deploy from S3.
3. Upload your source code zip file to ``s3://{artifact bucket}/source/source.zip``
    to trigger the pipeline.

Resources:

1. a versioned S3 bucket for the pipeline source and artifacts.
2. a IAM Role for:
    - CodePipeline
    - CodeBuild
3. a CodeBuild project, with ``buildspec.yml`` in the source.
4. a CodePipeline with three stages:
    - Source: pick up the source zip from S3
    - Build: build it, the test reports go to an additional ``reports`` artifact
    - Test: run the tests, read only access to the artifacts
"""

import attr
import cottonformation as cft
from cottonformation.res import s3

from ..iam import Role
from ..pipeline import Pipeline, S3SourceAction
from ..pipeline_actions import PipelineBuildAction, PipelineTestAction
from ..project import Project


@attr.s
class Stack(cft.Stack):
    project_name: str = attr.ib()
    stage: str = attr.ib()
    aws_account_id: str = attr.ib()
    aws_region: str = attr.ib()
    source_object_key: str = attr.ib(default="source/source.zip")

    @property
    def project_name_slug(self) -> str:
        return self.project_name.replace("_", "-")

    @property
    def stack_name(self) -> str:
        return f"{self.project_name_slug}-{self.stage}"

    @property
    def artifact_bucket_name(self) -> str:
        return f"{self.aws_account_id}-{self.aws_region}-{self.project_name_slug}-{self.stage}-artifacts"

    @property
    def iam_role_name_for_pipeline(self) -> str:
        return f"{self.project_name_slug}-{self.stage}-for-codepipeline"

    @property
    def iam_role_name_for_codebuild(self) -> str:
        return f"{self.project_name_slug}-{self.stage}-for-codebuild"

    @property
    def codebuild_project_name(self) -> str:
        return f"{self.project_name_slug}-{self.stage}"

    @property
    def pipeline_name(self) -> str:
        return f"{self.project_name_slug}-{self.stage}"

    def mk_rg1_artifact_bucket(self):
        self.rg1_artifact_bucket = cft.ResourceGroup("RG1")

        self.s3_artifact_bucket = s3.Bucket(
            "S3BucketForArtifacts",
            p_BucketName=self.artifact_bucket_name,
            p_VersioningConfiguration=s3.PropBucketVersioningConfiguration(
                rp_Status="Enabled",
            ),
            ra_DeletionPolicy=cft.DeletionPolicyEnum.Delete,
        )
        self.rg1_artifact_bucket.add(self.s3_artifact_bucket)

    def mk_rg2_iam_role(self):
        self.rg2_iam_role = cft.ResourceGroup("RG2")

        self.iam_role_for_pipeline = Role(
            logic_id="IamRoleForCodePipeline",
            role_name=self.iam_role_name_for_pipeline,
            service_principal="codepipeline.amazonaws.com",
        )
        self.rg2_iam_role.add(self.iam_role_for_pipeline.resource)

        self.iam_role_for_codebuild = Role(
            logic_id="IamRoleForCodeBuild",
            role_name=self.iam_role_name_for_codebuild,
            service_principal="codebuild.amazonaws.com",
        )
        self.rg2_iam_role.add(self.iam_role_for_codebuild.resource)

    def mk_rg3_codebuild_project(self):
        self.rg3_codebuild_project = cft.ResourceGroup("RG3")

        self.codebuild_project = Project(
            project_name=self.codebuild_project_name,
            role=self.iam_role_for_codebuild,
            aws_account_id=self.aws_account_id,
            aws_region=self.aws_region,
        )
        self.rg3_codebuild_project.add(
            self.codebuild_project.to_resource(
                description=f"build and test {self.project_name}",
            )
        )

    def mk_rg4_pipeline(self):
        self.rg4_pipeline = cft.ResourceGroup("RG4")

        self.pipeline = Pipeline(
            logic_id="CodePipeline",
            pipeline_name=self.pipeline_name,
            role=self.iam_role_for_pipeline,
            artifact_bucket_name=self.artifact_bucket_name,
        )

        stage_source = self.pipeline.add_stage("Source")
        self.source_action = S3SourceAction(
            stage=stage_source,
            name="S3Source",
            bucket_name=self.artifact_bucket_name,
            object_key=self.source_object_key,
            output_artifact_name="source",
        )

        stage_build = self.pipeline.add_stage("Build")
        self.build_action: PipelineBuildAction = self.codebuild_project.add_build_to_pipeline(
            stage=stage_build,
            name="Build",
            output_artifact_name="built",
            additional_output_artifact_names=["reports"],
        )

        stage_test = self.pipeline.add_stage("Test")
        self.test_action: PipelineTestAction = self.codebuild_project.add_test_to_pipeline(
            stage=stage_test,
            name="Test",
            input_artifact=self.source_action.output_artifact,
            additional_input_artifacts=[
                self.build_action.output_artifact,
                self.build_action.additional_output_artifact("reports"),
            ],
        )

        # policies are rendered after all grants are made
        for role in [
            self.iam_role_for_pipeline,
            self.iam_role_for_codebuild,
        ]:
            policy = role.policy_resource()
            if policy is not None:
                self.rg4_pipeline.add(policy)

        self.codepipeline = self.pipeline.to_resource()
        self.rg4_pipeline.add(self.codepipeline)

        self.out_pipeline_name = cft.Output(
            "CodePipelineName",
            Value=self.codepipeline.ref(),
            DependsOn=self.codepipeline,
        )
        self.rg4_pipeline.add(self.out_pipeline_name)

    def post_hook(self):
        self.mk_rg1_artifact_bucket()
        self.mk_rg2_iam_role()
        self.mk_rg3_codebuild_project()
        self.mk_rg4_pipeline()
