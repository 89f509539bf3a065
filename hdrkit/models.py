"""Value objects produced by header analysis."""

from pydantic import BaseModel, ConfigDict, Field


class Parameter(BaseModel):
    """A named, typed slot: a function parameter or a structure field."""

    model_config = ConfigDict(frozen=True)

    name: str = ""  # empty for unnamed parameters
    type: str


class FunctionSignature(BaseModel):
    """A function declaration found in a header."""

    model_config = ConfigDict(frozen=True)

    name: str
    return_type: str
    parameters: list[Parameter] = Field(default_factory=list)
    # Only filled in from comments of already generated bindings.
    documentation: list[str] = Field(default_factory=list)


class StructureDefinition(BaseModel):
    """A struct or union definition found in a header."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[Parameter] = Field(default_factory=list)
    is_union: bool = False


class RawExpression(BaseModel):
    """A #define value kept as source text (no evaluation, no expansion)."""

    model_config = ConfigDict(frozen=True)

    text: str

    def __str__(self) -> str:
        return self.text


ConstantValue = int | float | str | RawExpression


class AnalysisResult(BaseModel):
    """Everything extracted from a single header."""

    model_config = ConfigDict(frozen=True)

    functions: list[FunctionSignature] = Field(default_factory=list)
    structures: list[StructureDefinition] = Field(default_factory=list)
    constants: dict[str, ConstantValue] = Field(default_factory=dict)
    dependencies: list[str] = Field(default_factory=list)  # raw include names

    def function(self, name: str) -> FunctionSignature | None:
        return next((f for f in self.functions if f.name == name), None)

    def structure(self, name: str) -> StructureDefinition | None:
        return next((s for s in self.structures if s.name == name), None)
