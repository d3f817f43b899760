import sys

from .interpreter import Interpreter
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner
from .session import Session

PROMPT = "> "
RECURSION_LIMIT = 25_000


class Lox:
    def __init__(self, session=None):
        self.session = session if session is not None else Session()
        self.interpreter = Interpreter(self.session)
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def run_file(self, filename):
        with open(filename, "r", encoding="utf-8") as file:
            self.run(file.read())

    def run_prompt(self):
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                self.session.output("")
                break
            self.run(line)
            self.session.reset()

    def run(self, source):
        tokens = Scanner(source, self.session).scan_tokens()
        statements = Parser(tokens, self.session).parse()

        if self.session.had_error:
            return

        Resolver(self.interpreter, self.session).resolve(statements)

        if self.session.had_error:
            return

        self.interpreter.interpret(statements)
