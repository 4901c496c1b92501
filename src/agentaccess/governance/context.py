# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""Contextual requirement checks (project, task, collaboration)."""

from typing import Optional

from agentaccess.constants import DenialReason
from agentaccess.governance.policy import ContextualRequirements
from agentaccess.models import RequestContext


def evaluate_context(
    requirements: Optional[ContextualRequirements],
    context: RequestContext,
) -> Optional[DenialReason]:
    """Return the first unmet context requirement, checked project, task, collaboration."""
    if requirements is None:
        return None

    if requirements.project_association and not context.project_id:
        return DenialReason.PROJECT_CONTEXT_REQUIRED

    if requirements.task_context and not context.task_id:
        return DenialReason.TASK_CONTEXT_REQUIRED

    if requirements.collaboration_context and not context.collaboration_id:
        return DenialReason.COLLABORATION_CONTEXT_REQUIRED

    return None
