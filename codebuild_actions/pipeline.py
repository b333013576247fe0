# -*- coding: utf-8 -*-

"""
A CodePipeline declared in Python: pipeline, stages and the base action every
concrete action extends.

Actions are created once while the pipeline is being declared. On
construction an action resolves its artifacts, validates them against its
provider's bounds, grants whatever IAM permission it needs and finally
registers itself in its stage. If any of those steps fail, the stage is left
unchanged.
"""

import logging
import typing as T

import attr
from cottonformation.res import codepipeline

from .artifact import Artifact, ArtifactBounds
from .exc import DuplicateArtifactNameError
from .iam import Role, PolicyStatement

logger = logging.getLogger(__name__)


@attr.s
class ArtifactMutator:
    """
    Gives a helper function the right to add artifacts to one action, and
    nothing else.
    """
    _action: "Action" = attr.ib()

    def add_input(self, artifact: Artifact):
        self._action._input_artifacts.append(artifact)

    def add_output(self, name: str) -> Artifact:
        artifact = Artifact(name=name, producer=self._action)
        self._action._output_artifacts.append(artifact)
        return artifact


@attr.s(kw_only=True, eq=False)
class Action:
    """
    Base class of all pipeline actions. Subclasses set the class constants
    and override :meth:`bind_artifacts` and :meth:`grant_permissions`.
    """
    CATEGORY: str = None
    OWNER: str = "AWS"
    PROVIDER: str = None
    VERSION: str = "1"
    ARTIFACT_BOUNDS: ArtifactBounds = None

    stage: "Stage" = attr.ib(repr=False)
    name: str = attr.ib(validator=attr.validators.instance_of(str))
    run_order: T.Optional[int] = attr.ib(default=None)
    configuration: T.Dict[str, str] = attr.ib(factory=dict)

    _input_artifacts: T.List[Artifact] = attr.ib(factory=list, init=False, repr=False)
    _output_artifacts: T.List[Artifact] = attr.ib(factory=list, init=False, repr=False)

    def __attrs_post_init__(self):
        self.stage._check_action_name(self.name)
        self.bind_artifacts(ArtifactMutator(self))
        self.grant_permissions()
        self.stage._attach_action(self)

    @property
    def pipeline(self) -> "Pipeline":
        return self.stage.pipeline

    @property
    def input_artifacts(self) -> T.List[Artifact]:
        return list(self._input_artifacts)

    @property
    def output_artifacts(self) -> T.List[Artifact]:
        return list(self._output_artifacts)

    def bind_artifacts(self, mutator: ArtifactMutator):
        self.ARTIFACT_BOUNDS.validate(
            action_name=self.name,
            n_inputs=len(self._input_artifacts),
            n_outputs=len(self._output_artifacts),
        )

    def grant_permissions(self):
        pass

    def to_declaration(self) -> codepipeline.PropPipelineActionDeclaration:
        return codepipeline.PropPipelineActionDeclaration(
            rp_Name=self.name,
            rp_ActionTypeId=codepipeline.PropPipelineActionTypeId(
                rp_Category=self.CATEGORY,
                rp_Owner=self.OWNER,
                rp_Provider=self.PROVIDER,
                rp_Version=self.VERSION,
            ),
            p_Configuration=dict(self.configuration) if self.configuration else None,
            p_InputArtifacts=[
                codepipeline.PropPipelineInputArtifact(rp_Name=artifact.name)
                for artifact in self._input_artifacts
            ] or None,
            p_OutputArtifacts=[
                codepipeline.PropPipelineOutputArtifact(rp_Name=artifact.name)
                for artifact in self._output_artifacts
            ] or None,
            p_RunOrder=self.run_order,
        )


@attr.s(eq=False)
class Stage:
    pipeline: "Pipeline" = attr.ib(repr=False)
    name: str = attr.ib()
    _actions: T.List[Action] = attr.ib(factory=list, init=False, repr=False)

    @property
    def actions(self) -> T.List[Action]:
        return list(self._actions)

    def _check_action_name(self, name: str):
        for action in self._actions:
            if action.name == name:
                raise ValueError(f"action {name!r} already exists in stage {self.name!r}")

    def _attach_action(self, action: Action):
        self._actions.append(action)
        logger.info(
            "added %s action %r to stage %r",
            action.CATEGORY, action.name, self.name,
        )

    def find_input_artifact(self) -> T.Optional[Artifact]:
        """
        The default input of an action that doesn't declare one: the output
        of the last action that has one, in the closest preceding stage.
        """
        for stage in reversed(self.pipeline._stages_before(self)):
            for action in reversed(stage._actions):
                if action._output_artifacts:
                    return action._output_artifacts[0]
        return None

    def to_declaration(self) -> codepipeline.PropPipelineStageDeclaration:
        return codepipeline.PropPipelineStageDeclaration(
            rp_Name=self.name,
            rp_Actions=[action.to_declaration() for action in self._actions],
        )


S3_READ_ACTIONS = [
    "s3:GetObject*",
    "s3:GetBucket*",
    "s3:List*",
]

S3_WRITE_ACTIONS = [
    "s3:DeleteObject*",
    "s3:PutObject*",
    "s3:Abort*",
]


@attr.s(eq=False)
class Pipeline:
    """
    :param logic_id: CloudFormation logic id of the pipeline resource
    :param pipeline_name: physical pipeline name
    :param role: the role CodePipeline assumes to run the pipeline
    :param artifact_bucket_name: S3 bucket shared by all actions to exchange
        artifacts
    """
    logic_id: str = attr.ib()
    pipeline_name: str = attr.ib()
    role: Role = attr.ib()
    artifact_bucket_name: str = attr.ib()
    _stages: T.List[Stage] = attr.ib(factory=list, init=False, repr=False)

    def __attrs_post_init__(self):
        self.grant_bucket_read_write(self.role)

    @property
    def stages(self) -> T.List[Stage]:
        return list(self._stages)

    @property
    def artifact_bucket_arn(self) -> str:
        return f"arn:aws:s3:::{self.artifact_bucket_name}"

    def add_stage(self, name: str) -> Stage:
        for stage in self._stages:
            if stage.name == name:
                raise ValueError(f"stage {name!r} already exists in {self.pipeline_name!r}")
        stage = Stage(pipeline=self, name=name)
        self._stages.append(stage)
        return stage

    def _stages_before(self, stage: Stage) -> T.List[Stage]:
        return self._stages[:self._stages.index(stage)]

    def _bucket_statement(self, actions: T.List[str]) -> PolicyStatement:
        return PolicyStatement(
            actions=list(actions),
            resources=[
                self.artifact_bucket_arn,
                f"{self.artifact_bucket_arn}/*",
            ],
        )

    def grant_bucket_read(self, role: Role):
        role.add_to_policy(self._bucket_statement(S3_READ_ACTIONS))

    def grant_bucket_read_write(self, role: Role):
        role.add_to_policy(
            self._bucket_statement(S3_READ_ACTIONS + S3_WRITE_ACTIONS)
        )

    def validate(self):
        """
        :raises ValueError: less than two stages, or an empty stage
        :raises DuplicateArtifactNameError: two actions output an artifact
            with the same name
        """
        if len(self._stages) < 2:
            raise ValueError(
                f"pipeline {self.pipeline_name!r} needs at least two stages"
            )
        producers: T.Dict[str, Action] = dict()
        for stage in self._stages:
            if len(stage._actions) == 0:
                raise ValueError(f"stage {stage.name!r} has no action")
            for action in stage._actions:
                for artifact in action._output_artifacts:
                    if artifact.name in producers:
                        raise DuplicateArtifactNameError.make(
                            name=artifact.name,
                            first_action=producers[artifact.name].name,
                            second_action=action.name,
                        )
                    producers[artifact.name] = action

    def to_resource(self) -> codepipeline.Pipeline:
        self.validate()
        return codepipeline.Pipeline(
            self.logic_id,
            rp_RoleArn=self.role.rv_Arn,
            rp_Stages=[stage.to_declaration() for stage in self._stages],
            p_ArtifactStore=codepipeline.PropPipelineArtifactStore(
                rp_Location=self.artifact_bucket_name,
                rp_Type="S3",
            ),
            p_Name=self.pipeline_name,
            ra_DependsOn=[self.role.resource],
        )


@attr.s(kw_only=True, eq=False)
class S3SourceAction(Action):
    """
    Source action that picks up a zip file from S3. Its output is the
    default input of the actions in the next stage.
    """
    CATEGORY = "Source"
    PROVIDER = "S3"
    ARTIFACT_BOUNDS = ArtifactBounds(
        min_inputs=0,
        max_inputs=0,
        min_outputs=1,
        max_outputs=1,
    )

    bucket_name: str = attr.ib()
    object_key: str = attr.ib()
    output_artifact_name: str = attr.ib()

    @property
    def output_artifact(self) -> Artifact:
        return self._output_artifacts[0]

    def bind_artifacts(self, mutator: ArtifactMutator):
        self.configuration = {
            "S3Bucket": self.bucket_name,
            "S3ObjectKey": self.object_key,
            "PollForSourceChanges": "false",
            **self.configuration,
        }
        mutator.add_output(self.output_artifact_name)
        super().bind_artifacts(mutator)

    def grant_permissions(self):
        self.pipeline.role.add_to_policy(
            PolicyStatement()
            .add_actions(*S3_READ_ACTIONS)
            .add_resources(
                f"arn:aws:s3:::{self.bucket_name}",
                f"arn:aws:s3:::{self.bucket_name}/{self.object_key}",
            )
        )
