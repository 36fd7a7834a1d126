"""Tree-walking evaluator for the monkey language.

Evaluation is a recursive walk over the syntax tree, dispatched on the node type. Every node evaluates to a Value;
return statements produce a ReturnValue, which stops the enclosing statement sequences and is unwrapped at the
function call (or program) boundary. Semantic violations raise an EvaluationError.

Calls are not checked for arity: extra arguments are ignored and missing parameters stay unbound, failing only if
the body references them. The evaluator never prints: everything it has to say is raised.
"""

from monkey.core.syntax import (BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
                                Identifier, IfExpression, InfixExpression, IntegerLiteral, LetStatement,
                                PrefixExpression, Program, ReturnStatement)
from monkey.core.values import NULL, Boolean, Function, Integer, ReturnValue, is_truthy, to_boolean
from monkey.lang.error import EvaluationError


def _divide(left, right):
    """Integer division truncating toward zero."""
    if right == 0:
        raise EvaluationError("division by zero: '{}'", f"{left} / {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


INTEGER_OPERATORS = {
    "+": lambda left, right: Integer(left + right),
    "-": lambda left, right: Integer(left - right),
    "*": lambda left, right: Integer(left * right),
    "/": lambda left, right: Integer(_divide(left, right)),
    "<": lambda left, right: to_boolean(left < right),
    ">": lambda left, right: to_boolean(left > right),
    "==": lambda left, right: to_boolean(left == right),
    "!=": lambda left, right: to_boolean(left != right),
}

# ordering on booleans is false < true
BOOLEAN_OPERATORS = {
    "<": lambda left, right: to_boolean(left < right),
    ">": lambda left, right: to_boolean(left > right),
    "==": lambda left, right: to_boolean(left == right),
    "!=": lambda left, right: to_boolean(left != right),
}


class Evaluator:
    """Evaluates syntax trees against Environments."""

    def evaluate(self, node, env):
        """Evaluates node in env and returns its Value."""
        if isinstance(node, Program):
            result = self.evaluate_statements(node.statements, env)
            return result.inner if isinstance(result, ReturnValue) else result

        elif isinstance(node, BlockStatement):
            return self.evaluate_statements(node.statements, env)

        elif isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)

        elif isinstance(node, LetStatement):
            env.set(node.name.name, self.evaluate(node.value, env))
            return NULL

        elif isinstance(node, ReturnStatement):
            return ReturnValue(self.evaluate(node.value, env))

        elif isinstance(node, IntegerLiteral):
            return Integer(node.value)

        elif isinstance(node, BooleanLiteral):
            return to_boolean(node.value)

        elif isinstance(node, Identifier):
            return self.evaluate_identifier(node, env)

        elif isinstance(node, PrefixExpression):
            return self.evaluate_prefix(node.operator, self.evaluate(node.right, env))

        elif isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.evaluate_infix(node.operator, left, right)

        elif isinstance(node, IfExpression):
            return self.evaluate_if(node, env)

        elif isinstance(node, FunctionLiteral):
            return Function(node, env)

        elif isinstance(node, CallExpression):
            callee = self.evaluate(node.callee, env)
            arguments = [self.evaluate(argument, env) for argument in node.arguments]
            return self.apply_function(node, callee, arguments)

        raise EvaluationError("unknown node '{}'", repr(node), internal=True)

    def evaluate_statements(self, statements, env):
        """Evaluates statements in order. A ReturnValue stops the sequence and is returned still wrapped, so that it
        keeps escaping enclosing blocks. An empty sequence evaluates to NULL.
        """
        result = NULL
        for statement in statements:
            result = self.evaluate(statement, env)
            if isinstance(result, ReturnValue):
                return result
        return result

    @staticmethod
    def evaluate_identifier(node, env):
        value = env.get(node.name)
        if value is None:
            raise EvaluationError("use of undeclared identifier '{}'", node.name)
        return value

    @staticmethod
    def evaluate_prefix(operator, right):
        if operator == "!":
            return to_boolean(not is_truthy(right))

        elif operator == "-":
            if not isinstance(right, Integer):
                raise EvaluationError("type mismatch: -{}", right.inspect())
            return Integer(-right.value)

        raise EvaluationError("unknown operator: {}{}", (operator, right.inspect()))

    @staticmethod
    def evaluate_infix(operator, left, right):
        if isinstance(left, Integer) and isinstance(right, Integer):
            operators = INTEGER_OPERATORS
        elif isinstance(left, Boolean) and isinstance(right, Boolean):
            operators = BOOLEAN_OPERATORS
        else:
            raise EvaluationError("type mismatch: {} {} {}", (left.inspect(), operator, right.inspect()))

        if operator not in operators:
            raise EvaluationError("unknown operator: {} {} {}", (left.inspect(), operator, right.inspect()))
        return operators[operator](left.value, right.value)

    def evaluate_if(self, node, env):
        if is_truthy(self.evaluate(node.condition, env)):
            return self.evaluate(node.consequence, env)
        elif node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def apply_function(self, node, callee, arguments):
        """Calls callee with arguments (already evaluated in the caller's environment) in a new child scope of the
        environment callee was defined in.
        """
        if not isinstance(callee, Function):
            raise EvaluationError("not a function: '{}' is {}", (str(node.callee), callee.inspect()))

        bindings = {parameter.name: argument for parameter, argument in zip(callee.parameters, arguments)}
        result = self.evaluate(callee.body, callee.environment.extend(bindings))

        return result.inner if isinstance(result, ReturnValue) else result


def evaluate(node, env):
    """Evaluates node (usually a Program) in env. Raises an EvaluationError on semantic violations."""
    return Evaluator().evaluate(node, env)
