import io

import pytest

from pylox.__main__ import main


@pytest.fixture
def script(tmp_path):
    def write(source):
        path = tmp_path / "script.lox"
        path.write_text(source, encoding="utf-8")
        return str(path)

    return write


def exit_code(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_successful_script(script, capsys):
    main([script('var greeting = "héllo";\nprint greeting;')])
    captured = capsys.readouterr()
    assert captured.out == "héllo\n"
    assert captured.err == ""


def test_compile_error_exits_65(script, capsys):
    code = exit_code([script("{\n  var a = 1;\n  { var a = a; }\n}")])
    assert code == 65
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Can't read local variable in its own initializer." in captured.err


def test_syntax_error_exits_65(script, capsys):
    assert exit_code([script("print 1")]) == 65
    assert capsys.readouterr().err == \
        "[Line 1] Error at end: Expected ';' after value.\n"


def test_runtime_error_exits_70(script, capsys):
    assert exit_code([script('print "before";\nprint "a" + 1;')]) == 70
    captured = capsys.readouterr()
    assert captured.out == "before\n"
    assert captured.err == \
        "Operands must be two numbers or two strings.\n[line 2]\n"


def test_too_many_arguments_exits_64(capsys):
    assert exit_code(["one.lox", "two.lox"]) == 64
    assert capsys.readouterr().out == "Usage: pylox [script]\n"


def test_missing_script_exits_66(tmp_path, capsys):
    assert exit_code([str(tmp_path / "missing.lox")]) == 66
    assert capsys.readouterr().err.startswith("pylox: ")


def test_prompt_keeps_state_and_survives_errors(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(
        "var a = 1;\n"
        "print b;\n"
        "print a +;\n"
        "print a + 1;\n"))
    main([])
    captured = capsys.readouterr()
    assert captured.out == "> > > > 2\n> \n"
    assert captured.err.splitlines() == [
        "Undefined variable 'b'.",
        "[line 1]",
        "[Line 1] Error at ';': Expected expression.",
    ]


def test_deep_recursion_in_script(script, capsys):
    main([script(
        "fun count(n) { if (n > 0) count(n - 1); }\n"
        "count(3000);\n"
        'print "done";')])
    assert capsys.readouterr().out == "done\n"


def test_stack_overflow_exits_70(script, capsys):
    assert exit_code([script("fun f() { f(); }\nf();")]) == 70
    assert capsys.readouterr().err == "Stack overflow.\n[line 1]\n"
