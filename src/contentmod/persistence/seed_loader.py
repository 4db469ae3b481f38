"""Load workflow definitions from a JSON seed file."""

from __future__ import annotations

import json
from pathlib import Path

from contentmod.models.workflow import WorkflowDefinition


def load_workflows(path: str | Path) -> list[WorkflowDefinition]:
    """Parse ``{"workflows": [...]}`` into validated workflow definitions."""
    data = json.loads(Path(path).read_text())
    return [WorkflowDefinition.model_validate(item) for item in data.get("workflows", [])]
