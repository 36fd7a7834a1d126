"""Lexically scoped variable bindings."""


class Environment:
    """Mapping from name to Value with an optional enclosing (outer) Environment.

    Lookup walks outward until the root; binding always happens in this (innermost) scope, so an inner binding shadows
    an outer one without modifying it. Closures hold a reference to the Environment they were created in, which keeps
    that Environment (and its outer chain) alive as long as the closure is.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def get(self, name, default=None):
        """Returns the value bound to name in the nearest scope that binds it, or default."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return default

    def set(self, name, value):
        """Binds name in this scope, creating or overwriting a single entry. Returns value."""
        self.store[name] = value
        return value

    def extend(self, bindings=None):
        """Returns a new child scope of this one, optionally prefilled with bindings."""
        child = Environment(self)
        if bindings:
            child.store.update(bindings)
        return child

    @property
    def depth(self):
        """Number of scopes enclosing this one."""
        depth, env = 0, self.outer
        while env is not None:
            depth, env = depth + 1, env.outer
        return depth

    def __contains__(self, name):
        env = self
        while env is not None:
            if name in env.store:
                return True
            env = env.outer
        return False

    def __repr__(self):
        return f"Environment({', '.join(self.store)}, depth={self.depth})"
