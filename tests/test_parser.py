from dataclasses import astuple

from pylox.syntax import Expr, Stmt
from pylox.tokens import TokenType

from conftest import parse


def test_precedence():
    [stmt] = parse("1 + 2 * 3 == 7;")
    match stmt:
        case Stmt.Expression(Expr.Binary(
                Expr.Binary(Expr.Literal(1.0), plus,
                            Expr.Binary(Expr.Literal(2.0), star, Expr.Literal(3.0))),
                equal, Expr.Literal(7.0))):
            assert plus.type == TokenType.PLUS
            assert star.type == TokenType.STAR
            assert equal.type == TokenType.EQUAL_EQUAL
        case _:
            raise AssertionError(f"unexpected tree {stmt!r}")


def test_unary_and_grouping():
    [stmt] = parse("-(1 - 2);")
    assert isinstance(stmt.expression, Expr.Unary)
    assert isinstance(stmt.expression.right, Expr.Grouping)


def test_logical_operators_bind_looser_than_equality():
    [stmt] = parse("a or b and c == d;")
    expr = stmt.expression
    assert isinstance(expr, Expr.Logical)
    assert expr.operator.type == TokenType.OR
    assert isinstance(expr.right, Expr.Logical)
    assert isinstance(expr.right.right, Expr.Binary)


def test_assignment_is_right_associative():
    [stmt] = parse("a = b = c;")
    expr = stmt.expression
    assert isinstance(expr, Expr.Assign)
    assert expr.name.lexeme == "a"
    assert isinstance(expr.value, Expr.Assign)
    assert expr.value.name.lexeme == "b"
    assert isinstance(expr.value.value, Expr.Variable)


def test_property_assignment_becomes_set():
    [stmt] = parse("a.b.c = 1;")
    expr = stmt.expression
    assert isinstance(expr, Expr.Set)
    assert expr.name.lexeme == "c"
    assert isinstance(expr.object, Expr.Get)


def test_invalid_assignment_target_is_reported_without_unwinding(session, capsys):
    statements = parse("1 = 2; print 3;", session)
    assert session.had_error
    assert capsys.readouterr().err == \
        "[Line 1] Error at '=': Invalid assignment target.\n"
    assert len(statements) == 2
    assert isinstance(statements[1], Stmt.Print)


def test_for_loop_desugars_to_while():
    [stmt] = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    assert isinstance(stmt, Stmt.Block)
    initializer, loop = stmt.statements
    assert isinstance(initializer, Stmt.Var)
    assert isinstance(loop, Stmt.While)
    assert isinstance(loop.condition, Expr.Binary)
    body, increment = loop.body.statements
    assert isinstance(body, Stmt.Print)
    assert isinstance(increment, Stmt.Expression)
    assert isinstance(increment.expression, Expr.Assign)


def test_for_loop_without_clauses():
    [stmt] = parse("for (;;) print 1;")
    assert isinstance(stmt, Stmt.While)
    assert isinstance(stmt.condition, Expr.Literal)
    assert stmt.condition.value is True
    assert isinstance(stmt.body, Stmt.Print)


def test_declarations():
    klass, function, var, empty = parse(
        "class A { init(x) { this.x = x; } get() { return this.x; } }"
        "fun add(a, b) { return a + b; }"
        "var v = 1;"
        "var e;")
    assert isinstance(klass, Stmt.Class)
    assert [m.name.lexeme for m in klass.methods] == ["init", "get"]
    assert isinstance(function, Stmt.Function)
    assert [p.lexeme for p in function.params] == ["a", "b"]
    assert isinstance(function.body[0], Stmt.Return)
    assert isinstance(var.initializer, Expr.Literal)
    assert empty.initializer is None


def test_if_else():
    [stmt] = parse("if (a) print 1; else print 2;")
    assert isinstance(stmt, Stmt.If)
    assert isinstance(stmt.else_branch, Stmt.Print)


def test_call_chain():
    [stmt] = parse("a(1)(2).b(3, 4);")
    call = stmt.expression
    assert isinstance(call, Expr.Call)
    assert len(call.arguments) == 2
    assert call.paren.type == TokenType.RIGHT_PAREN
    assert isinstance(call.callee, Expr.Get)
    assert isinstance(call.callee.object, Expr.Call)


def test_255_arguments_are_allowed(session):
    args = ", ".join(["1"] * 255)
    [stmt] = parse(f"f({args});", session)
    assert not session.had_error
    assert len(stmt.expression.arguments) == 255


def test_256_arguments_are_reported(session, capsys):
    args = ", ".join(["1"] * 256)
    [stmt] = parse(f"f({args});", session)
    assert session.had_error
    assert "Can't have more than 255 arguments." in capsys.readouterr().err
    assert len(stmt.expression.arguments) == 256


def test_256_parameters_are_reported(session, capsys):
    params = ", ".join(f"p{i}" for i in range(256))
    parse(f"fun f({params}) {{}}", session)
    assert session.had_error
    assert "Can't have more than 255 parameters." in capsys.readouterr().err


def test_error_at_end(session, capsys):
    assert parse("print", session) == []
    assert capsys.readouterr().err == \
        "[Line 1] Error at end: Expected expression.\n"


def test_synchronize_recovers_at_next_statement(session, capsys):
    statements = parse("var = 1;\nprint 2;\nvar x = ;\nfun f() {}", session)
    assert session.had_error
    err = capsys.readouterr().err.splitlines()
    assert err == [
        "[Line 1] Error at '=': Expected variable name.",
        "[Line 3] Error at ';': Expected expression.",
    ]
    assert [type(s) for s in statements] == [Stmt.Print, Stmt.Function]


def test_super_is_not_an_expression(session, capsys):
    parse("super.m();", session)
    assert session.had_error
    assert "Error at 'super': Expected expression." in capsys.readouterr().err


def test_empty_program():
    assert parse("") == []


def test_parsing_is_deterministic():
    source = "fun f(a) { if (a > 1) return a * f(a - 1); return 1; } print f(5);"
    first, second = parse(source), parse(source)
    assert [astuple(s) for s in first] == [astuple(s) for s in second]
    # Structurally equal nodes are still distinct map keys.
    assert first[0] != second[0]
    assert len({first[0], second[0]}) == 2


def test_synchronize_skips_the_offending_keyword(session, capsys):
    statements = parse("1 + print;\nprint 3;", session)
    assert capsys.readouterr().err == \
        "[Line 1] Error at 'print': Expected expression.\n"
    assert [type(s) for s in statements] == [Stmt.Print]
