"""Manifest and tool-call schemas for the weather service.

Every tool is named ``weather.<action>``.  ``/execute`` looks up the
definition for a call's action and checks the arguments against it before
touching the dashboard, so a bad call never reaches a fetcher.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

_PY_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
}


def action_of(tool_name: str) -> str:
    """``weather.set_units`` -> ``set_units``; bare names pass through."""
    return tool_name.rpartition(".")[2]


class ToolParameter(BaseModel):
    name: str
    type: Literal["string", "number", "integer", "boolean"] = "string"
    description: str
    required: bool = True
    enum: list[str] | None = None

    def problem_with(self, value: Any) -> str | None:
        """Why ``value`` is unacceptable for this parameter, or None."""
        expected = _PY_TYPES[self.type]
        if isinstance(value, bool) and bool not in expected:
            return f"{self.name} must be a {self.type}"
        if not isinstance(value, expected):
            return f"{self.name} must be a {self.type}"
        if self.enum is not None and value not in self.enum:
            return f"{self.name} must be one of: {', '.join(self.enum)}"
        return None


class ToolDefinition(BaseModel):
    name: str  # weather.<action>
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)

    @property
    def action(self) -> str:
        return action_of(self.name)

    def check_arguments(self, arguments: dict[str, Any]) -> str | None:
        """First problem with ``arguments`` for this tool, or None if they fit."""
        known = {p.name for p in self.parameters}
        unexpected = sorted(set(arguments) - known)
        if unexpected:
            return f"Unexpected argument: {unexpected[0]}"
        for param in self.parameters:
            if param.name not in arguments:
                if param.required:
                    return f"Missing argument: {param.name}"
                continue
            problem = param.problem_with(arguments[param.name])
            if problem:
                return problem
        return None


class ModuleManifest(BaseModel):
    module_name: str
    description: str
    tools: list[ToolDefinition]

    def find(self, tool_name: str) -> ToolDefinition | None:
        """Definition whose action matches ``tool_name``'s, or None."""
        action = action_of(tool_name)
        return next((t for t in self.tools if t.action == action), None)


class ToolCall(BaseModel):
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)

    @property
    def action(self) -> str:
        return action_of(self.tool_name)


class ToolResult(BaseModel):
    """Outcome of one ``/execute`` call; ``result`` is a dashboard snapshot on success."""

    tool_name: str
    success: bool
    result: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def ok(cls, call: ToolCall, snapshot: dict[str, Any]) -> ToolResult:
        return cls(tool_name=call.tool_name, success=True, result=snapshot)

    @classmethod
    def failed(cls, call: ToolCall, error: str) -> ToolResult:
        return cls(tool_name=call.tool_name, success=False, error=error)
