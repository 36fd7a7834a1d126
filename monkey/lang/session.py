"""Session control for the monkey language. Drives the lexer, parser and evaluator to run the interpreter, either in
command-line mode or file interpretation mode.
"""

from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator
from monkey.core.parser import Parser
from monkey.core.lexical import Lexer
from monkey.lang.error import GenericException


class Session:
    """Governs a monkey session: one top-level Environment whose bindings persist across every input unit."""
    SH_FILE = "<in>"  # command-line interpreter filename
    OPENERS = "({"
    CLOSERS = ")}"

    def __init__(self, error_handler, path, cmd_line, show_tree=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path              # used for error messages
        self.cmd_line = cmd_line      # whether or not in command-line mode
        self.show_tree = show_tree    # whether or not to print the syntax tree of each unit before running it

        self.environment = Environment()
        self.evaluator = Evaluator()

        self.to_exec = {}   # dict of line num: (source, Program) to execute
        self.results = []   # Values of executed units, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def is_continued(line):
        """Whether or not line has unclosed parentheses/braces."""
        opened = sum(line.count(char) for char in Session.OPENERS)
        closed = sum(line.count(char) for char in Session.CLOSERS)
        return opened > closed

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs, as (expr, line num of its first line)), but add_to_prev will indicate whether a line
        continuation is necessary. Returns updated value of line and add_to_prev. Must be called before calling add.
        """
        line = line.rstrip()

        if exprs is not None:
            if add_to_prev and exprs:
                prev, first_line_num = exprs.pop()
                line = f"{prev} {line.strip()}"
                exprs.append((line, first_line_num))
            elif line and not line.isspace():
                exprs.append((line, line_num))
            else:
                return line, False

        return line, Session.is_continued(line)

    def add(self, expr, line_num):
        """Parses expr and queues it for execution. Evaluation is delayed until run is called. Raises a ValueError if
        expr is empty.
        """
        if not expr.strip():
            raise ValueError("expr cannot be empty")

        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        program = Parser(Lexer(expr)).parse_program()
        if self.show_tree:
            print(program.display())
        self.to_exec[line_num] = (expr, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued programs in order against the session's Environment. Will raise any
        errors that are encountered.
        """
        for line_num, (expr, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                self.results.append(self.evaluator.evaluate(program, self.environment))
            finally:
                del self.to_exec[line_num]  # never rerun a unit, even one that failed

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Pops the oldest result and returns its inspection string."""
        return self.results.pop(0).inspect()
