from .interpreter import Interpreter
from .lox import Lox
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner
from .session import Session

__all__ = ["Interpreter", "Lox", "Parser", "Resolver", "Scanner", "Session"]
