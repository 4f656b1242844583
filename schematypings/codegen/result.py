"""Result containers shared by the type, enum and declaration generators."""

import dataclasses

from schematypings.codegen.blocks import CodeBlock
from schematypings.codegen.graph import DependencyGraph

__all__ = ['TypeContext', 'TypeResult']


@dataclasses.dataclass(frozen=True)
class TypeContext:
    """Options for turning a node into a type expression.

    Attributes:
        parent_name: Name of the enclosing declaration, used to name nested
            enum lookup constants.
        need_enum_names_constant: Whether enums whose names are derived from
            their values get a lookup constant.
    """

    parent_name: str | None = None
    need_enum_names_constant: bool = True


@dataclasses.dataclass
class TypeResult:
    expression: str = ''
    dependencies: DependencyGraph = dataclasses.field(default_factory=DependencyGraph)
    declarations: list[CodeBlock] = dataclasses.field(default_factory=list)
    description: str = ''

    def absorb(self, other: 'TypeResult') -> None:
        """Take over the dependencies and declarations of a sub-result."""
        self.dependencies.merge(other.dependencies)
        self.declarations.extend(other.declarations)
