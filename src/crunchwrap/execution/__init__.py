"""crunchwrap execution - external processes, stage pipeline and retry."""

from crunchwrap.execution.process import ToolResult, run_tool, tool_available
from crunchwrap.execution.stages import (
    Action,
    Outcome,
    PipelineReport,
    Stage,
    StageResult,
    guarded,
    run_stages,
)

__all__ = [
    "Action",
    "Outcome",
    "PipelineReport",
    "Stage",
    "StageResult",
    "ToolResult",
    "guarded",
    "run_stages",
    "run_tool",
    "tool_available",
]
