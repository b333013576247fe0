# -*- coding: utf-8 -*-

import typing as T

import attr
from cottonformation.res import codebuild

from .config import config
from .iam import Role, PolicyStatement
from .pipeline import Stage
from .pipeline_actions import PipelineBuildAction, PipelineTestAction


@attr.s(eq=False)
class Project:
    """
    An AWS CodeBuild project that runs as a step of a CodePipeline.

    :param project_name: physical project name, it is what CodePipeline
        expects in the ``ProjectName`` action configuration
    :param role: the service role the builds run with
    """
    project_name: str = attr.ib()
    role: Role = attr.ib()
    aws_account_id: str = attr.ib()
    aws_region: str = attr.ib()
    logic_id: str = attr.ib(default="CodeBuildProject")

    def __attrs_post_init__(self):
        self.role.add_to_policy(
            PolicyStatement()
            .add_actions(
                "logs:CreateLogGroup",
                "logs:CreateLogStream",
                "logs:PutLogEvents",
            )
            .add_resources(
                self.log_group_arn,
                f"{self.log_group_arn}:*",
            )
        )

    @property
    def project_arn(self) -> str:
        return f"arn:aws:codebuild:{self.aws_region}:{self.aws_account_id}:project/{self.project_name}"

    @property
    def log_group_arn(self) -> str:
        return f"arn:aws:logs:{self.aws_region}:{self.aws_account_id}:log-group:/aws/codebuild/{self.project_name}"

    def add_build_to_pipeline(
        self,
        stage: Stage,
        name: str,
        **kwargs,
    ) -> PipelineBuildAction:
        return PipelineBuildAction(stage=stage, name=name, project=self, **kwargs)

    def add_test_to_pipeline(
        self,
        stage: Stage,
        name: str,
        **kwargs,
    ) -> PipelineTestAction:
        return PipelineTestAction(stage=stage, name=name, project=self, **kwargs)

    def to_resource(
        self,
        build_spec: T.Optional[str] = None,
        description: T.Optional[str] = None,
    ) -> codebuild.Project:
        """
        :param build_spec: inline buildspec, or the path of the buildspec file
            in the source artifact. Defaults to ``buildspec.yml``
        """
        return codebuild.Project(
            self.logic_id,
            rp_Artifacts=codebuild.PropProjectArtifacts(
                rp_Type="CODEPIPELINE",
            ),
            rp_Source=codebuild.PropProjectSource(
                rp_Type="CODEPIPELINE",
                p_BuildSpec=build_spec,
            ),
            rp_Environment=codebuild.PropProjectEnvironment(
                rp_ComputeType=config.codebuild_compute_type,
                rp_Image=config.codebuild_image,
                rp_Type=config.codebuild_environment_type,
            ),
            rp_ServiceRole=self.role.rv_Arn,
            p_Name=self.project_name,
            p_Description=description,
            ra_DependsOn=[self.role.resource],
        )
