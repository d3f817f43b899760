from .tokens import Token, TokenType


class Scanner:
    KEYWORDS = {
        "and": TokenType.AND,
        "class": TokenType.CLASS,
        "else": TokenType.ELSE,
        "false": TokenType.FALSE,
        "for": TokenType.FOR,
        "fun": TokenType.FUN,
        "if": TokenType.IF,
        "nil": TokenType.NIL,
        "or": TokenType.OR,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "this": TokenType.THIS,
        "true": TokenType.TRUE,
        "var": TokenType.VAR,
        "while": TokenType.WHILE,
    }

    def __init__(self, source, session):
        self.source = source
        self.session = session
        self.start = 0
        self.current = 0
        self.line = 1
        self.tokens = []

    def scan_tokens(self):
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        match c := self.advance():
            case "(": self.add_token(TokenType.LEFT_PAREN)
            case ")": self.add_token(TokenType.RIGHT_PAREN)
            case "{": self.add_token(TokenType.LEFT_BRACE)
            case "}": self.add_token(TokenType.RIGHT_BRACE)
            case ",": self.add_token(TokenType.COMMA)
            case ".": self.add_token(TokenType.DOT)
            case "-": self.add_token(TokenType.MINUS)
            case "+": self.add_token(TokenType.PLUS)
            case ";": self.add_token(TokenType.SEMICOLON)
            case "*": self.add_token(TokenType.STAR)
            case "!": self.add_token(TokenType.BANG_EQUAL if self.match("=") else TokenType.BANG)
            case "=": self.add_token(TokenType.EQUAL_EQUAL if self.match("=") else TokenType.EQUAL)
            case "<": self.add_token(TokenType.LESS_EQUAL if self.match("=") else TokenType.LESS)
            case ">": self.add_token(TokenType.GREATER_EQUAL if self.match("=") else TokenType.GREATER)
            case "/": self.comment() if self.match("/") else self.add_token(TokenType.SLASH)
            case " " | "\r" | "\t": pass
            case "\n": self.line += 1
            case "\"": self.string()
            case _:
                if is_digit(c):
                    self.number()
                elif is_alpha(c):
                    self.identifier()
                else:
                    self.session.error(self.line, "Unexpected character.")

    def comment(self):
        while not self.at_end() and self.peek() != "\n":
            self.current += 1

    def string(self):
        while not self.at_end() and self.peek() != "\"":
            if self.peek() == "\n":
                self.line += 1
            self.current += 1

        if self.at_end():
            self.session.error(self.line, "Unterminated string.")
            return

        self.current += 1  # Closing "
        value = self.source[self.start + 1: self.current - 1]
        self.add_token(TokenType.STRING, value)

    def number(self):
        while is_digit(self.peek()):
            self.current += 1

        if self.peek() == "." and is_digit(self.peek_next()):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1

        value = float(self.source[self.start:self.current])
        self.add_token(TokenType.NUMBER, value)

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.current += 1

        text = self.source[self.start:self.current]
        self.add_token(Scanner.KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, type, literal=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(type, lexeme, literal, self.line))

    def match(self, expected):
        if not self.at_end():
            if self.source[self.current] == expected:
                self.current += 1
                return True
        return False

    def advance(self):
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self):
        if self.at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def at_end(self):
        return not self.current < len(self.source)


def is_digit(c):
    return "0" <= c <= "9"


def is_alpha(c):
    return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"


def is_alphanumeric(c):
    return is_alpha(c) or is_digit(c)
