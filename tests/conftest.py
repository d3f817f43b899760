import pytest

from pylox import Interpreter, Lox, Parser, Scanner, Session


def scan(source, session=None):
    return Scanner(source, session or Session()).scan_tokens()


def parse(source, session=None):
    session = session or Session()
    return Parser(scan(source, session), session).parse()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def interpreter(session):
    return Interpreter(session)


@pytest.fixture
def run(capsys):
    def run(source):
        Lox().run(source)
        captured = capsys.readouterr()
        return captured.out, captured.err

    return run
