# -*- coding: utf-8 -*-

"""
IAM roles that collect policy statements while a pipeline is being declared
and render them as cottonformation resources at the end.
"""

import logging
import typing as T

import attr
import cottonformation as cft
from cottonformation.res import iam

logger = logging.getLogger(__name__)


@attr.s
class PolicyStatement:
    """
    A single IAM policy statement. The ``add_*`` methods return the statement
    itself so they can be chained::

        PolicyStatement().add_resource(arn).add_actions("s3:GetObject")
    """
    actions: T.List[str] = attr.ib(factory=list)
    resources: T.List[T.Union[str, dict, cft.GetAtt]] = attr.ib(factory=list)
    effect: str = attr.ib(default="Allow")

    def add_actions(self, *actions: str) -> "PolicyStatement":
        self.actions.extend(actions)
        return self

    def add_resource(self, arn) -> "PolicyStatement":
        self.resources.append(arn)
        return self

    def add_resources(self, *arns) -> "PolicyStatement":
        self.resources.extend(arns)
        return self

    def to_dict(self) -> dict:
        return {
            "Effect": self.effect,
            "Action": list(self.actions),
            "Resource": list(self.resources),
        }


@attr.s(eq=False)
class Role:
    """
    An IAM role assumed by an AWS service.

    Grants made while declaring the pipeline are appended to the role's
    default policy. Several actions may grant the same thing to the same
    role, an identical statement is only kept once.

    :param logic_id: CloudFormation logic id of the role resource, the
        default policy resource uses ``{logic_id}DefaultPolicy``
    :param role_name: physical IAM role name
    :param service_principal: for example ``codepipeline.amazonaws.com``
    """
    logic_id: str = attr.ib()
    role_name: str = attr.ib()
    service_principal: str = attr.ib()
    _statements: T.List[PolicyStatement] = attr.ib(factory=list, init=False)

    def __attrs_post_init__(self):
        self.resource = iam.Role(
            self.logic_id,
            rp_AssumeRolePolicyDocument=cft.helpers.iam.AssumeRolePolicyBuilder(
                cft.helpers.iam.ServicePrincipal(self.service_principal),
            ).build(),
            p_RoleName=self.role_name,
        )

    @property
    def statements(self) -> T.List[PolicyStatement]:
        return list(self._statements)

    @property
    def rv_Arn(self) -> cft.GetAtt:
        return self.resource.rv_Arn

    def add_to_policy(self, statement: PolicyStatement) -> bool:
        """
        Append a statement to the default policy of this role.

        :return: False if an identical statement was already there
        """
        if statement in self._statements:
            logger.debug("%s already has statement %s", self.logic_id, statement)
            return False
        self._statements.append(statement)
        logger.debug("add statement to %s: %s", self.logic_id, statement)
        return True

    def policy_document(self) -> dict:
        return {
            "Version": "2012-10-17",
            "Statement": [
                statement.to_dict()
                for statement in self._statements
            ],
        }

    def policy_resource(self) -> T.Optional[iam.Policy]:
        """
        The default policy attached to this role, None if nothing was granted.
        """
        if len(self._statements) == 0:
            return None
        return iam.Policy(
            f"{self.logic_id}DefaultPolicy",
            rp_PolicyName=f"{self.role_name}-default-policy",
            rp_PolicyDocument=self.policy_document(),
            p_Roles=[self.resource.ref()],
        )
