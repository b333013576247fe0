# -*- coding: utf-8 -*-

"""
Pipeline artifacts, the artifact count bounds of an action, and lookup of
artifacts by name.
"""

import re
import typing as T

import attr

from .exc import ArtifactBoundsViolationError, ArtifactNotFoundError

if T.TYPE_CHECKING:  # pragma: no cover
    from .pipeline import Action

_artifact_name_pattern = re.compile(r"^[A-Za-z0-9_\-]+$")


def sanitize_artifact_name(name: str) -> str:
    """
    Replace the characters CodePipeline doesn't accept in an artifact name
    with ``_``.
    """
    return re.sub(r"[^A-Za-z0-9_\-]", "_", name)


@attr.s(eq=False, repr=False)
class Artifact:
    """
    A named unit of data handed between pipeline actions. Two artifacts are
    the same artifact if they have the same name.

    :param name: unique within the pipeline
    :param producer: the action that declares this artifact as an output,
        None for artifacts created by hand
    """
    name: str = attr.ib(validator=attr.validators.instance_of(str))
    producer: T.Optional["Action"] = attr.ib(default=None)

    @name.validator
    def check_name(self, attribute, value):
        if not _artifact_name_pattern.match(value):
            raise ValueError(f"invalid artifact name {value!r}")

    def __eq__(self, other):
        if isinstance(other, Artifact):
            return self.name == other.name
        return NotImplemented

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"Artifact(name={self.name!r})"


@attr.s(frozen=True)
class ArtifactBounds:
    min_inputs: int = attr.ib()
    max_inputs: int = attr.ib()
    min_outputs: int = attr.ib()
    max_outputs: int = attr.ib()

    def validate(
        self,
        action_name: str,
        n_inputs: int,
        n_outputs: int,
    ):
        """
        :raises ArtifactBoundsViolationError: if either count is out of range
        """
        if not (self.min_inputs <= n_inputs <= self.max_inputs):
            raise ArtifactBoundsViolationError.make(
                action_name=action_name,
                kind="input",
                count=n_inputs,
                minimum=self.min_inputs,
                maximum=self.max_inputs,
            )
        if not (self.min_outputs <= n_outputs <= self.max_outputs):
            raise ArtifactBoundsViolationError.make(
                action_name=action_name,
                kind="output",
                count=n_outputs,
                minimum=self.min_outputs,
                maximum=self.max_outputs,
            )


CODEBUILD_ARTIFACT_BOUNDS = ArtifactBounds(
    min_inputs=1,
    max_inputs=5,
    min_outputs=0,
    max_outputs=5,
)


def find_artifact_by_name(
    artifacts: T.Iterable[Artifact],
    name: str,
) -> Artifact:
    """
    Find the artifact with exactly the given name.

    :raises ArtifactNotFoundError: if no artifact has that name
    """
    for artifact in artifacts:
        if artifact.name == name:
            return artifact
    raise ArtifactNotFoundError.make(name)


def additional_output_artifacts(
    outputs: T.Sequence[Artifact],
    has_primary_output: bool,
) -> T.List[Artifact]:
    """
    The output artifacts other than the primary one. When the action has a
    primary output it always sits at index 0.
    """
    if has_primary_output:
        return list(outputs[1:])
    else:
        return list(outputs)
