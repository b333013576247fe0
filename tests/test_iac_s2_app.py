# -*- coding: utf-8 -*-

import pytest
import cottonformation as cft
from codebuild_actions.iac.s2_app import Stack


@pytest.fixture
def stack() -> Stack:
    return Stack(
        project_name="codebuild_actions",
        stage="dev",
        aws_account_id="111122223333",
        aws_region="us-east-1",
    )


def test_names(stack: Stack):
    assert stack.stack_name == "codebuild-actions-dev"
    assert stack.artifact_bucket_name == "111122223333-us-east-1-codebuild-actions-dev-artifacts"
    assert stack.pipeline_name == "codebuild-actions-dev"


def test_pipeline(stack: Stack):
    assert [stage.name for stage in stack.pipeline.stages] == ["Source", "Build", "Test"]
    assert stack.build_action.output_artifact.name == "built"
    assert [
        artifact.name
        for artifact in stack.test_action.input_artifacts
    ] == ["source", "built", "reports"]
    assert stack.test_action.configuration["PrimarySource"] == "source"
    assert stack.test_action.output_artifacts == []


def test_template(stack: Stack):
    tpl = cft.Template()
    tpl.add(stack.rg1_artifact_bucket)
    tpl.add(stack.rg2_iam_role)
    tpl.add(stack.rg3_codebuild_project)
    tpl.add(stack.rg4_pipeline)
    data = tpl.to_dict()

    resources = data["Resources"]
    assert set(resources) == {
        "S3BucketForArtifacts",
        "IamRoleForCodePipeline",
        "IamRoleForCodeBuild",
        "IamRoleForCodePipelineDefaultPolicy",
        "IamRoleForCodeBuildDefaultPolicy",
        "CodeBuildProject",
        "CodePipeline",
    }
    assert "CodePipelineName" in data["Outputs"]

    pipeline = resources["CodePipeline"]["Properties"]
    assert pipeline["ArtifactStore"]["Location"] == stack.artifact_bucket_name
    source = pipeline["Stages"][0]["Actions"][0]
    assert source["Configuration"]["S3Bucket"] == stack.artifact_bucket_name
    assert source["Configuration"]["S3ObjectKey"] == "source/source.zip"

    test = pipeline["Stages"][2]["Actions"][0]
    assert test["ActionTypeId"]["Category"] == "Test"
    assert test["Configuration"] == {
        "ProjectName": stack.codebuild_project_name,
        "PrimarySource": "source",
    }
    assert "OutputArtifacts" not in test


if __name__ == "__main__":
    import os

    basename = os.path.basename(__file__)
    pytest.main([basename, "-s", "--tb=native"])
