import sys

from .tokens import TokenType


class Session:
    def __init__(self, stdout=None, stderr=None):
        self.stdout = stdout
        self.stderr = stderr
        self.had_error = False
        self.had_runtime_error = False

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line, message):
        self.report(line, "", message)

    def token_error(self, token, message):
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def output(self, text):
        print(text, file=self.stdout or sys.stdout)

    def runtime_error(self, error):
        print(f"{error.message}\n[line {error.token.line}]",
              file=self.stderr or sys.stderr)
        self.had_runtime_error = True

    def report(self, line, where, message):
        print(f"[Line {line}] Error{where}: {message}",
              file=self.stderr or sys.stderr)
        self.had_error = True
