"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # shown while a unit has unclosed parentheses/braces

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._pending = ""         # partial unit awaiting its closers
        self._first_line_num = 0   # line the pending unit started on, for tracebacks
        self.line_num = 0

    def default(self, line):
        """Evaluates a line of monkey input, or buffers it while parentheses/braces are left open."""
        with self.sess.error_handler:  # cmd.Cmd would end the loop on an uncaught Exception
            unit = self.buffer(line)
            if unit:
                self.execute(unit)

    def buffer(self, line):
        """Joins line to any pending partial unit. Returns the complete unit once every opener is closed, or None
        (and switches to the secondary prompt) while input is still pending.
        """
        self.line_num += 1
        if not self._pending:
            self._first_line_num = self.line_num

        unit, pending = self.sess.preprocess_line(f"{self._pending} {line.strip()}".strip(), self.line_num,
                                                  bool(self._pending))
        self._pending = unit if pending else ""
        self.prompt = Shell.secondary_prompt if pending else Shell.prompt

        return None if pending else unit

    def execute(self, unit):
        """Parses and runs a complete unit, then prints the inspection of every value it produced."""
        self.sess.add(unit, self._first_line_num)
        self.sess.run()

        while self.sess.results:
            print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey is a small language with integers, booleans, first-class functions and \n"
              "closures. Every line you type is evaluated and its value is printed. Bindings \n"
              "made with 'let' are kept for the rest of the session.\n\n"
              "Try it out by typing 'let add = fn(x, y) { x + y };'. This will bind a \n"
              "function to the name 'add'. Next, try typing 'add(1, 2)'. This will print \n"
              "'INTEGER<3>'. Lines with unclosed parentheses or braces are continued on the \n"
              "next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
