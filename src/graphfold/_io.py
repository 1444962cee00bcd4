"""Saving compiled plans to TOML and loading them back.

A saved plan can be replayed in another process without the graph it was
compiled from. Only plans whose vertices are TOML scalars (bool, int,
float, str) can be saved.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal, Self

import tomli_w
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from ._errors import PlanFormatError
from ._fold import CompiledFoldPlan, CompiledFoldRightPlan, FoldRightInstruction

if TYPE_CHECKING:
    from collections.abc import Hashable

logger = logging.getLogger(__name__)

PLAN_FORMAT_VERSION = 1

# Strict members keep a vertex from being coerced into another scalar type
TomlVertex = StrictBool | StrictInt | StrictFloat | StrictStr

type CompiledPlan[V: Hashable] = CompiledFoldPlan[V] | CompiledFoldRightPlan[V]


class _BranchDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    walk: list[TomlVertex] = Field(min_length=1)
    reaches_sink: StrictBool


class _InstructionDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    child_refs: list[StrictInt] = Field(default_factory=list)
    vertex: TomlVertex
    identity: StrictInt
    is_sink: StrictBool = False


class FoldPlanDocument(BaseModel):
    """Serialized form of a CompiledFoldPlan."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["fold"]
    version: Literal[1] = PLAN_FORMAT_VERSION
    root: TomlVertex
    branches: list[_BranchDocument] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_branches_start_at_root(self) -> Self:
        for branch in self.branches:
            if branch.walk[0] != self.root:
                msg = f"branch {branch.walk!r} does not start at root {self.root!r}"
                raise ValueError(msg)
        return self


class FoldRightPlanDocument(BaseModel):
    """Serialized form of a CompiledFoldRightPlan."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["fold_right"]
    version: Literal[1] = PLAN_FORMAT_VERSION
    root: TomlVertex
    result: StrictInt
    instructions: list[_InstructionDocument] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_references(self) -> Self:
        """Every child reference must point at an earlier instruction."""
        seen: set[int] = set()
        for instruction in self.instructions:
            if instruction.identity in seen:
                msg = f"duplicate instruction identity {instruction.identity}"
                raise ValueError(msg)
            if instruction.is_sink and instruction.child_refs:
                msg = f"sink instruction {instruction.identity} has child references"
                raise ValueError(msg)
            dangling = [ref for ref in instruction.child_refs if ref not in seen]
            if dangling:
                msg = f"instruction {instruction.identity} references unknown or later instructions {dangling}"
                raise ValueError(msg)
            seen.add(instruction.identity)
        if self.result not in seen:
            msg = f"result {self.result} does not name an instruction"
            raise ValueError(msg)
        return self


PlanDocument = Annotated[FoldPlanDocument | FoldRightPlanDocument, Field(discriminator="kind")]

_plan_document_adapter: TypeAdapter[FoldPlanDocument | FoldRightPlanDocument] = TypeAdapter(PlanDocument)


def _validate_document(data: Any) -> FoldPlanDocument | FoldRightPlanDocument:
    try:
        return _plan_document_adapter.validate_python(data)
    except ValidationError as e:
        msg = f"Invalid plan document: {e}"
        raise PlanFormatError(msg) from e


def plan_to_dict(plan: CompiledPlan[Any]) -> dict[str, Any]:
    """Convert a compiled plan to a TOML-compatible dictionary.

    Raises:
        PlanFormatError: If a vertex is not a TOML scalar.
        TypeError: If plan is not a compiled plan.

    """
    match plan:
        case CompiledFoldPlan():
            data: dict[str, Any] = {
                "kind": "fold",
                "version": PLAN_FORMAT_VERSION,
                "root": plan.root,
                "branches": [{"walk": list(walk), "reaches_sink": reaches_sink} for walk, reaches_sink in plan.branches],
            }
        case CompiledFoldRightPlan():
            data = {
                "kind": "fold_right",
                "version": PLAN_FORMAT_VERSION,
                "root": plan.root,
                "result": plan.result,
                "instructions": [
                    {
                        "child_refs": list(instruction.child_refs),
                        "vertex": instruction.vertex,
                        "identity": instruction.identity,
                        "is_sink": instruction.is_sink,
                    }
                    for instruction in plan.instructions
                ],
            }
        case _:
            msg = f"Cannot serialize {type(plan).__name__}; expected a compiled plan"
            raise TypeError(msg)

    return _validate_document(data).model_dump(mode="python")


def plan_from_dict(data: Any) -> CompiledPlan[Any]:
    """Rebuild a compiled plan from a dictionary produced by plan_to_dict.

    Raises:
        PlanFormatError: If the dictionary is not a valid plan document.

    """
    document = _validate_document(data)
    match document:
        case FoldPlanDocument():
            return CompiledFoldPlan(
                root=document.root,
                branches=tuple((tuple(branch.walk), branch.reaches_sink) for branch in document.branches),
            )
        case FoldRightPlanDocument():
            return CompiledFoldRightPlan(
                root=document.root,
                instructions=tuple(
                    FoldRightInstruction(
                        tuple(instruction.child_refs),
                        instruction.vertex,
                        instruction.identity,
                        is_sink=instruction.is_sink,
                    )
                    for instruction in document.instructions
                ),
                result=document.result,
            )


def export_plan_to_toml(plan: CompiledPlan[Any], output_path: Path | str) -> None:
    """Write a compiled plan to a TOML file.

    Args:
        plan: A CompiledFoldPlan or CompiledFoldRightPlan with TOML scalar vertices.
        output_path: Path to the output TOML file.

    Raises:
        PlanFormatError: If a vertex is not a TOML scalar.

    """
    toml_data = plan_to_dict(plan)

    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug("Exported %s plan to %s", toml_data["kind"], output_path)


def load_plan_from_toml(input_path: Path | str) -> CompiledPlan[Any]:
    """Load a compiled plan written by export_plan_to_toml.

    Raises:
        PlanFormatError: If the file is not valid TOML or not a valid plan document.

    """
    input_path = Path(input_path)

    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise PlanFormatError(msg) from e

    plan = plan_from_dict(toml_contents)
    logger.debug("Loaded plan from %s", input_path)
    return plan
