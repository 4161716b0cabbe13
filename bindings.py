class bindings(object):
    """Bind a set of variables in the given namespace (usually a module) to
    the given values in the dynamic scope of a with-statement.  Only
    variables that the namespace already defines may be bound.

    The bindings are visible to every thread for as long as they last."""

    def __init__(self, namespace, **bindings):
        self.symbols = vars(namespace)
        unbound = sorted(name for name in bindings if name not in self.symbols)
        if unbound:
            raise AttributeError("%s has no variable%s %s" %
                                 (getattr(namespace, "__name__", namespace),
                                  "s" if len(unbound) > 1 else "",
                                  ", ".join(unbound)))
        self.bindings = bindings

    def __enter__(self):
        self.old_bindings = dict((name, self.symbols[name])
                                 for name in self.bindings)
        self.symbols.update(self.bindings)
        return self

    def __exit__(self, *exc_info):
        self.symbols.update(self.old_bindings)
