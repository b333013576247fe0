# -*- coding: utf-8 -*-

import pytest
from codebuild_actions.config import config
from codebuild_actions.iam import Role, PolicyStatement
from codebuild_actions.pipeline import Pipeline, S3SourceAction
from codebuild_actions.pipeline_actions import PipelineBuildAction, PipelineTestAction
from codebuild_actions.project import Project


def make_project() -> Project:
    return Project(
        project_name="my-project",
        role=Role(
            logic_id="ProjectRole",
            role_name="project-role",
            service_principal="codebuild.amazonaws.com",
        ),
        aws_account_id="111122223333",
        aws_region="us-east-1",
    )


class TestProject:
    def test_arn(self):
        project = make_project()
        assert project.project_arn == "arn:aws:codebuild:us-east-1:111122223333:project/my-project"
        assert project.log_group_arn == (
            "arn:aws:logs:us-east-1:111122223333:log-group:/aws/codebuild/my-project"
        )

    def test_role_can_write_logs(self):
        project = make_project()
        assert project.role.statements == [
            PolicyStatement(
                actions=[
                    "logs:CreateLogGroup",
                    "logs:CreateLogStream",
                    "logs:PutLogEvents",
                ],
                resources=[
                    project.log_group_arn,
                    f"{project.log_group_arn}:*",
                ],
            )
        ]

    def test_add_to_pipeline(self):
        project = make_project()
        pipeline = Pipeline(
            logic_id="Pipeline",
            pipeline_name="my-pipeline",
            role=Role("PipelineRole", "pipeline-role", "codepipeline.amazonaws.com"),
            artifact_bucket_name="my-bucket",
        )
        S3SourceAction(
            stage=pipeline.add_stage("Source"),
            name="Source",
            bucket_name="my-source-bucket",
            object_key="source.zip",
            output_artifact_name="source",
        )
        build = project.add_build_to_pipeline(
            stage=pipeline.add_stage("Build"),
            name="Build",
            output_artifact_name="built",
        )
        test = project.add_test_to_pipeline(
            stage=pipeline.add_stage("Test"),
            name="Test",
        )
        assert isinstance(build, PipelineBuildAction)
        assert isinstance(test, PipelineTestAction)
        assert build.project is project
        assert test.input_artifacts == [build.output_artifact]

    def test_to_resource(self):
        project = make_project()
        data = project.to_resource(description="my project").serialize()
        assert data["Type"] == "AWS::CodeBuild::Project"
        assert data["DependsOn"] == ["ProjectRole"]
        props = data["Properties"]
        assert props["Name"] == "my-project"
        assert props["Description"] == "my project"
        assert props["ServiceRole"] == {"Fn::GetAtt": ["ProjectRole", "Arn"]}
        assert props["Artifacts"] == {"Type": "CODEPIPELINE"}
        assert props["Source"] == {"Type": "CODEPIPELINE"}
        assert props["Environment"] == {
            "ComputeType": config.codebuild_compute_type,
            "Image": config.codebuild_image,
            "Type": config.codebuild_environment_type,
        }

    def test_to_resource_build_spec(self):
        project = make_project()
        data = project.to_resource(build_spec="ci/buildspec.yml").serialize()
        assert data["Properties"]["Source"]["BuildSpec"] == "ci/buildspec.yml"


if __name__ == "__main__":
    import os

    basename = os.path.basename(__file__)
    pytest.main([basename, "-s", "--tb=native"])
