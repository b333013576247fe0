# -*- coding: utf-8 -*-

"""
CodePipeline actions that run an AWS CodeBuild project.

Constructing an action does three things, in this order:

1. bind the input and output artifacts and validate their counts against
   the CodeBuild bounds (1 - 5 inputs, 0 - 5 outputs)
2. allow the pipeline role to start / stop / query builds of the project,
   and allow the project role to read (or read and write) the pipeline
   artifact bucket
3. register the action in its stage

A build action always writes to the artifact bucket. A test action only
does when it declares an output artifact.
"""

import logging
import typing as T

import attr

from .artifact import (
    Artifact,
    ArtifactBounds,
    CODEBUILD_ARTIFACT_BOUNDS,
    find_artifact_by_name,
    additional_output_artifacts,
    sanitize_artifact_name,
)
from .iam import PolicyStatement
from .pipeline import Action, ArtifactMutator

if T.TYPE_CHECKING:  # pragma: no cover
    from .pipeline import Pipeline
    from .project import Project

logger = logging.getLogger(__name__)

PRIMARY_SOURCE = "PrimarySource"


def bind_input_output_artifacts(
    mutator: ArtifactMutator,
    configuration: T.Dict[str, str],
    primary_input: T.Optional[Artifact],
    additional_inputs: T.List[Artifact],
    output_name: T.Optional[str],
    additional_output_names: T.List[str],
    bounds: ArtifactBounds,
    action_name: str = None,
) -> T.Tuple[T.List[Artifact], T.List[Artifact]]:
    """
    Add the input and output artifacts of an action, in order.

    When there are additional inputs, CodeBuild needs to know which of the
    inputs is the source, so ``PrimarySource`` is set in the configuration.
    With a single input it's implicit and left out.

    :return: the final input and output artifact list
    :raises ArtifactBoundsViolationError: after both lists are final, if
        either is out of ``bounds``
    """
    inputs: T.List[Artifact] = list()
    outputs: T.List[Artifact] = list()

    if primary_input is not None:
        mutator.add_input(primary_input)
        inputs.append(primary_input)

    if len(additional_inputs):
        for artifact in additional_inputs:
            mutator.add_input(artifact)
            inputs.append(artifact)
        configuration[PRIMARY_SOURCE] = inputs[0].name

    if output_name is not None:
        outputs.append(mutator.add_output(output_name))
    for name in additional_output_names:
        outputs.append(mutator.add_output(name))

    logger.debug(
        "%s inputs: %s, outputs: %s",
        action_name,
        [artifact.name for artifact in inputs],
        [artifact.name for artifact in outputs],
    )
    bounds.validate(
        action_name=action_name,
        n_inputs=len(inputs),
        n_outputs=len(outputs),
    )
    return inputs, outputs


CODEBUILD_CONTROL_ACTIONS = [
    "codebuild:BatchGetBuilds",
    "codebuild:StartBuild",
    "codebuild:StopBuild",
]


def grant_codebuild_permissions(
    pipeline: "Pipeline",
    project: "Project",
    needs_pipeline_bucket_write: bool,
):
    # the pipeline role runs builds of this project only
    pipeline.role.add_to_policy(
        PolicyStatement()
        .add_resource(project.project_arn)
        .add_actions(*CODEBUILD_CONTROL_ACTIONS)
    )

    if needs_pipeline_bucket_write:
        pipeline.grant_bucket_read_write(project.role)
    else:
        pipeline.grant_bucket_read(project.role)
    logger.debug(
        "granted %s on %s, bucket write = %s",
        pipeline.role.logic_id,
        project.project_arn,
        needs_pipeline_bucket_write,
    )


@attr.s(kw_only=True, eq=False)
class CodeBuildAction(Action):
    """
    Shared behavior of :class:`PipelineBuildAction` and
    :class:`PipelineTestAction`.

    :param project: the CodeBuild project to run. Its name, not its ARN,
        goes to the ``ProjectName`` configuration.
    :param input_artifact: defaults to the most recent output of the
        previous stages
    :param output_artifact_name: name of the primary output artifact
    :param additional_input_artifacts: more inputs, after the primary one
    :param additional_output_artifact_names: more outputs, after the
        primary one. Use :meth:`additional_output_artifact` to get them back.
    :param configuration: merged over the default configuration, the value
        given here wins

    Not meant to be constructed directly, use one of the subclasses.
    """
    PROVIDER = "CodeBuild"
    ARTIFACT_BOUNDS = CODEBUILD_ARTIFACT_BOUNDS

    project: "Project" = attr.ib()
    input_artifact: T.Optional[Artifact] = attr.ib(default=None)
    output_artifact_name: T.Optional[str] = attr.ib(default=None)
    additional_input_artifacts: T.List[Artifact] = attr.ib(factory=list)
    additional_output_artifact_names: T.List[str] = attr.ib(factory=list)

    def __attrs_post_init__(self):
        if type(self) is CodeBuildAction:
            raise TypeError(
                "CodeBuildAction is abstract, use PipelineBuildAction "
                "or PipelineTestAction"
            )
        super().__attrs_post_init__()

    @property
    def has_primary_output(self) -> bool:
        raise NotImplementedError

    @property
    def needs_pipeline_bucket_write(self) -> bool:
        raise NotImplementedError

    def _primary_output_name(self) -> T.Optional[str]:
        return self.output_artifact_name

    def bind_artifacts(self, mutator: ArtifactMutator):
        primary_input = self.input_artifact
        if primary_input is None:
            primary_input = self.stage.find_input_artifact()

        self.configuration = {
            "ProjectName": self.project.project_name,
            **self.configuration,
        }
        bind_input_output_artifacts(
            mutator=mutator,
            configuration=self.configuration,
            primary_input=primary_input,
            additional_inputs=self.additional_input_artifacts,
            output_name=self._primary_output_name(),
            additional_output_names=self.additional_output_artifact_names,
            bounds=self.ARTIFACT_BOUNDS,
            action_name=self.name,
        )

    def grant_permissions(self):
        grant_codebuild_permissions(
            pipeline=self.pipeline,
            project=self.project,
            needs_pipeline_bucket_write=self.needs_pipeline_bucket_write,
        )

    @property
    def output_artifact(self) -> T.Optional[Artifact]:
        if self.has_primary_output:
            return self._output_artifacts[0]
        return None

    def additional_output_artifacts(self) -> T.List[Artifact]:
        """
        All output artifacts declared with ``additional_output_artifact_names``.
        """
        return additional_output_artifacts(
            self._output_artifacts,
            has_primary_output=self.has_primary_output,
        )

    def additional_output_artifact(self, name: str) -> Artifact:
        """
        The additional output artifact with the given name.

        :raises ArtifactNotFoundError: no additional output has that name
        """
        return find_artifact_by_name(self.additional_output_artifacts(), name)


@attr.s(kw_only=True, eq=False)
class PipelineBuildAction(CodeBuildAction):
    """
    CodePipeline build action that uses AWS CodeBuild. It always has a
    primary output artifact, named ``Artifact_<stage>_<action>`` unless
    ``output_artifact_name`` is given.
    """
    CATEGORY = "Build"

    @property
    def has_primary_output(self) -> bool:
        return True

    @property
    def needs_pipeline_bucket_write(self) -> bool:
        return True

    def _primary_output_name(self) -> str:
        if self.output_artifact_name is not None:
            return self.output_artifact_name
        return sanitize_artifact_name(f"Artifact_{self.stage.name}_{self.name}")


@attr.s(kw_only=True, eq=False)
class PipelineTestAction(CodeBuildAction):
    """
    CodePipeline test action that uses AWS CodeBuild. It has a primary output
    artifact only if ``output_artifact_name`` is given, and only then may it
    write to the pipeline artifact bucket.
    """
    CATEGORY = "Test"

    @property
    def has_primary_output(self) -> bool:
        return self.output_artifact_name is not None

    @property
    def needs_pipeline_bucket_write(self) -> bool:
        return self.has_primary_output
