import math
import time
from decimal import Decimal

from .environment import Environment
from .errors import LoxRuntimeError, Return
from .runtime import (LoxCallable, LoxClass, LoxFunction, LoxInstance,
                      NativeFunction)
from .syntax import Expr, Stmt
from .tokens import TokenType


class Interpreter:
    def __init__(self, session):
        self.session = session
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.globals.define("clock", NativeFunction("clock", 0, time.time))

    def interpret(self, statements):
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.session.runtime_error(error)

    def resolve(self, expr, depth):
        self.locals[expr] = depth

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                self.execute_block(statements, Environment(self.environment))
            case Stmt.Class(name, methods):
                self.environment.define(name.lexeme, None)
                klass = LoxClass(name.lexeme, {
                    method.name.lexeme: LoxFunction(
                        method, self.environment, method.name.lexeme == "init")
                    for method in methods})
                self.environment.assign(name, klass)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment, False)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if self.is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)
            case Stmt.Print(expression):
                value = self.evaluate(expression)
                self.session.output(self.stringify(value))
            case Stmt.Return(_, value):
                raise Return(None if value is None else self.evaluate(value))
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while self.is_truthy(self.evaluate(condition)):
                    self.execute(body)
            case _:
                raise TypeError(f"Unknown statement: {stmt!r}")

    def evaluate(self, expr):
        match expr:
            case Expr.Assign(name, value):
                value = self.evaluate(value)
                distance = self.locals.get(expr)
                if distance is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Binary(left, operator, right):
                return self.binary(
                    operator, self.evaluate(left), self.evaluate(right))
            case Expr.Call(callee, paren, arguments):
                return self.call(callee, paren, arguments)
            case Expr.Get(obj, name):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise LoxRuntimeError(
                        name, "Only instances have properties.")
                return obj.get(name)
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left, operator, right):
                left = self.evaluate(left)
                if operator.type == TokenType.OR:
                    if self.is_truthy(left):
                        return left
                elif not self.is_truthy(left):
                    return left
                return self.evaluate(right)
            case Expr.Set(obj, name, value):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise LoxRuntimeError(
                        name, "Only instances have properties.")
                value = self.evaluate(value)
                obj.set(name, value)
                return value
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right):
                right = self.evaluate(right)
                match operator.type:
                    case TokenType.BANG:
                        return not self.is_truthy(right)
                    case TokenType.MINUS:
                        self.check_operands(operator, right)
                        return -right
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
        raise TypeError(f"Unknown expression: {expr!r}")

    def binary(self, operator, left, right):
        match operator.type:
            case TokenType.BANG_EQUAL: return not self.is_equal(left, right)
            case TokenType.EQUAL_EQUAL: return self.is_equal(left, right)
            case TokenType.GREATER:
                self.check_operands(operator, left, right)
                return left > right
            case TokenType.GREATER_EQUAL:
                self.check_operands(operator, left, right)
                return left >= right
            case TokenType.LESS:
                self.check_operands(operator, left, right)
                return left < right
            case TokenType.LESS_EQUAL:
                self.check_operands(operator, left, right)
                return left <= right
            case TokenType.MINUS:
                self.check_operands(operator, left, right)
                return left - right
            case TokenType.PLUS:
                if is_number(left) and is_number(right):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator, "Operands must be two numbers or two strings.")
            case TokenType.SLASH:
                self.check_operands(operator, left, right)
                return divide(left, right)
            case TokenType.STAR:
                self.check_operands(operator, left, right)
                return left * right
        raise TypeError(f"Unknown binary operator: {operator.lexeme}")

    def call(self, callee, paren, arguments):
        callee = self.evaluate(callee)
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(
                paren, "Can only call functions and classes.")
        arguments = [self.evaluate(argument) for argument in arguments]
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise LoxRuntimeError(paren, "Stack overflow.") from None

    def lookup_variable(self, name, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def stringify(self, object):
        if object is None:
            return "nil"
        if isinstance(object, bool):
            return "true" if object else "false"
        if is_number(object):
            return format_number(object)
        return str(object)

    def is_truthy(self, object):
        if object is None:
            return False
        if isinstance(object, bool):
            return object
        return True

    def is_equal(self, left, right):
        if type(left) is not type(right):
            return False
        return left == right

    def check_operands(self, operator, *operands):
        if any(not is_number(operand) for operand in operands):
            if len(operands) == 1:
                raise LoxRuntimeError(operator, "Operand must be a number.")
            raise LoxRuntimeError(operator, "Operands must be numbers.")


def is_number(value):
    return isinstance(value, float)


def divide(left, right):
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def format_number(value):
    if not math.isfinite(value):
        return str(value)
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text
