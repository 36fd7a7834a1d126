"""Abstract syntax tree of the monkey language.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expression> [";"]          ; LetStatement
               | "return" <expression> [";"]                 ; ReturnStatement
               | <expression> [";"]                          ; ExpressionStatement
<block>      ::= "{" <statement>* "}"                        ; BlockStatement
<expression> ::= <ident> | <int> | "true" | "false"
               | ("!" | "-") <expression>                    ; PrefixExpression
               | <expression> <operator> <expression>        ; InfixExpression
               | "(" <expression> ")"
               | "if" "(" <expression> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expression> "(" [<expression> ("," <expression>)*] ")"
```

Nodes are frozen dataclasses: a tree is never mutated after the parser builds it, and two trees compare equal when
they have the same shape. str(node) gives the canonical, fully parenthesized rendering of a node, while display()
gives an indented view of the whole tree.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Optional, Tuple


class Node(ABC):
    """Superclass of every syntax tree node."""

    @abstractmethod
    def __str__(self):
        """Canonical source rendering of this node."""

    def display(self, indents=0):
        """Recursively displays syntax tree with readable format.

        Format:
        <Node>(<attr>=<value>, nodes=[
            <Node>(<attr>=<value>, nodes=[
                ...
                <Node>(<attr>=<value>)  # <-- if node has no children
            ])
        ])
        """
        attrs, nodes = [], []
        for attr in fields(self):
            value = getattr(self, attr.name)
            if isinstance(value, Node):
                nodes.append(value)
            elif isinstance(value, tuple):
                nodes.extend(value)
            elif value is not None:
                attrs.append(f"{attr.name}={value!r}")

        result = f"{'    ' * indents}{type(self).__name__}({', '.join(attrs)}"
        if nodes:
            result += ", nodes=[" if attrs else "nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


class Statement(Node):
    """Node that appears in a sequence of statements."""


class Expression(Node):
    """Node that produces a value."""


@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    """Unary operator applied to right: !x, -x."""
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """Binary operator applied to left and right."""
    operator: str
    left: Expression
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Braced sequence of statements, used as if branches and function bodies."""
    statements: Tuple[Statement, ...]

    def __str__(self):
        return "{ " + "".join(str(statement) for statement in self.statements) + " }"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f"else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    @property
    def signature(self):
        return f"fn({', '.join(str(parameter) for parameter in self.parameters)})"

    def __str__(self):
        return f"{self.signature} {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    """Application of callee (an identifier or any expression producing a function) to arguments."""
    callee: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self):
        return f"{self.callee}({', '.join(str(argument) for argument in self.arguments)})"


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self):
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression

    def __str__(self):
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class Program(Node):
    """Root of a syntax tree: the statements of one input unit, in order."""
    statements: Tuple[Statement, ...]

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)
