# -*- coding: utf-8 -*-

"""
Errors raised while declaring a pipeline. None of them is retryable, they all
reflect a static mistake in the pipeline definition.
"""


class ArtifactBoundsViolationError(Exception):
    """
    The resolved number of input or output artifacts of an action is out of
    the range its provider accepts.
    """

    def __init__(
        self,
        msg: str,
        action_name: str = None,
        kind: str = None,
        count: int = None,
        minimum: int = None,
        maximum: int = None,
    ):
        super().__init__(msg)
        self.action_name = action_name
        self.kind = kind
        self.count = count
        self.minimum = minimum
        self.maximum = maximum

    @classmethod
    def make(
        cls,
        action_name: str,
        kind: str,
        count: int,
        minimum: int,
        maximum: int,
    ):
        msg = (
            f"Action '{action_name}' has {count} {kind} artifact(s), "
            f"expected between {minimum} and {maximum}"
        )
        return cls(
            msg,
            action_name=action_name,
            kind=kind,
            count=count,
            minimum=minimum,
            maximum=maximum,
        )


class ArtifactNotFoundError(LookupError):
    def __init__(self, msg: str, name: str = None):
        super().__init__(msg)
        self.name = name

    @classmethod
    def make(cls, name: str):
        msg = f"Could not find output artifact with name '{name}'"
        return cls(msg, name=name)


class DuplicateArtifactNameError(Exception):
    def __init__(self, msg: str, name: str = None):
        super().__init__(msg)
        self.name = name

    @classmethod
    def make(cls, name: str, first_action: str, second_action: str):
        msg = (
            f"Output artifact name '{name}' is declared by both "
            f"'{first_action}' and '{second_action}'"
        )
        return cls(msg, name=name)
