"""An implementation of C's printf-style formatting.

A template mixes literal text with directives of the form

    %[flags][width][.precision][length]specifier

where the flags are drawn from "-+ #0", width and precision are decimal
integers or "*" (meaning: take the value from the next argument), the
length modifier is one of "hlL" (accepted and ignored), and the specifier
is one of "cdieEfgGosuxXpn%@".

Malformed templates do not raise.  Output stops at the first piece of the
template that cannot be parsed as a literal run or a directive, and
whatever was produced before it is returned.  Bind printfvars.strict to
a true value to get a FormatParseError instead."""

import logging
import math
import numbers
import re
import sys
from collections import namedtuple
from decimal import Decimal
from io import StringIO

from charcount import CharCountStream
import printfvars

__all__ = ["Formatter", "format", "sprintf", "fprintf", "printf",
           "FormatError", "FormatParseError"]

logger = logging.getLogger(__name__)

class FormatError(Exception):
    pass

class FormatParseError(FormatError):
    def __init__(self, template, offset, message):
        super(FormatParseError, self).__init__(template, offset, message)
        self.template = template
        self.offset = offset
        self.message = message

    def __str__(self):
        return sprintf('%s\n  "%s"\n%*s', self.message, self.template,
                       self.offset + 4, "^")

class Missing(object):
    """The value read from an exhausted argument list."""

    def __repr__(self): return "MISSING"
    def __str__(self): return ""

MISSING = Missing()

class Arguments(object):
    """A container for format arguments.  Essentially a read-only list with
    a cursor that only moves forward; reading past the end yields MISSING
    instead of raising."""

    def __init__(self, args):
        self.args = args
        self.len = len(self.args)
        self.cur = 0

    def __len__(self): return self.len

    def next(self):
        cur = self.cur
        if cur >= self.len:
            return MISSING
        self.cur = cur + 1
        return self.args[cur]

    @property
    def empty(self):
        return self.cur >= self.len

    @property
    def consumed(self):
        return self.cur

    @property
    def remaining(self):
        return self.len - self.cur

# Coercion

NaN = float("nan")

def to_number(value):
    """Coerce a format argument to an int or a float.  Strings are parsed;
    anything that doesn't look like a number becomes NaN."""
    if isinstance(value, numbers.Integral):
        return int(value)
    elif isinstance(value, float):
        return value
    elif isinstance(value, numbers.Real):
        return float(value)
    s = str(value).strip()
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        return NaN

def to_integer(value):
    n = to_number(value)
    return int(n) if isfinite(n) else 0

def isfinite(n):
    # math.isfinite overflows on very large ints.
    return isinstance(n, int) or math.isfinite(n)

# Numeric conversion

Conversion = namedtuple("Conversion", "sign prefix body suffix")

def decimal_digits(i):
    """The decimal digits of the non-negative integer i, however many there
    are.  CPython refuses str() on very long ints, so those are converted a
    chunk at a time."""
    try:
        return str(i)
    except ValueError:
        chunks = []
        while i:
            (i, r) = divmod(i, 10 ** 1000)
            chunks.append(r)
        return str(chunks[-1]) + "".join("%01000d" % c
                                         for c in reversed(chunks[:-1]))

def natural(n):
    """The shortest digits that read back as n, written out positionally
    (never in exponent form) and without a trailing ".0"."""
    if isinstance(n, int):
        return decimal_digits(n)
    s = "{:f}".format(Decimal(repr(n)))
    return s[:-2] if s.endswith(".0") else s

def convert_number(value, specifier, flags=frozenset(), precision=None):
    """Convert value for one of the numeric specifiers "diuxXofeEgG".

    The sign comes from the original value; everything else is computed
    from its absolute value.  The pieces are upper-cased for an upper-case
    specifier and lower-cased otherwise.

    The integer specifiers drop any fractional part: %x of 2.5 is "2"."""
    n = to_number(value)
    sign = "-" if n < 0 else "+" if "+" in flags else " " if " " in flags \
                                                   else ""
    prefix = suffix = ""
    a = abs(n)
    kind = specifier.lower()
    if kind in "eg" or (kind == "f" and precision is not None):
        try:
            a = float(a)
        except OverflowError:
            a = math.inf
    if not isfinite(a):
        body = repr(a)
    elif kind in "diu":
        body = decimal_digits(math.floor(a))
    elif kind in "xo":
        i = math.floor(a)
        if kind == "x":
            body = "%x" % i
            prefix = "0x" if "#" in flags and i else ""
        else:
            body = "%o" % i
            prefix = "0" if "#" in flags and i else ""
    else:
        if kind == "f":
            body = natural(a) if precision is None else "%.*f" % (precision, a)
        elif kind == "e":
            if precision is None:
                precision = printfvars.exponent_precision
            body = "%.*e" % (precision, a)
        else:
            if precision is None:
                precision = printfvars.general_precision
            body = ("%#.*g" if "#" in flags else "%.*g") % (precision, a)
        if "#" in flags and "." not in body:
            suffix = "."
    fold = str.upper if specifier.isupper() else str.lower
    return Conversion._make(map(fold, (sign, prefix, body, suffix)))

# Justification

def justify(conversion, flags, width):
    """Pad a conversion out to width.  Zeros go between the sign & prefix and
    the body; a left-justified field is always padded with spaces."""
    (sign, prefix, body, suffix) = conversion
    pad = (width or 0) - (len(sign) + len(prefix) + len(body) + len(suffix))
    if pad <= 0:
        return "".join(conversion)
    elif "-" in flags:
        return "".join(conversion) + " " * pad
    elif "0" in flags:
        return sign + prefix + "0" * pad + body + suffix
    else:
        return " " * pad + "".join(conversion)

# Directives

class Directive(object):
    """Base class for all format directives.  The template parser creates
    instances of (subclasses of) this class, which produce appropriately
    formatted output via their format methods."""

    dynamic = object()

    def __init__(self, flags, width, precision, length, specifier,
                 template, start, end):
        self.flags = flags; self.width = width; self.precision = precision
        self.length = length; self.specifier = specifier
        self.template = template; self.start = start; self.end = end

    def __str__(self): return self.template[self.start:self.end]

    def __repr__(self):
        return "<%s %r>" % (type(self).__name__, str(self))

    def param(self, p, args):
        return to_integer(args.next()) if p is Directive.dynamic else p

    def params(self, args):
        """Resolve width and precision, in that order, consuming an argument
        for each one given as "*"."""
        width = self.param(self.width, args)
        precision = self.param(self.precision, args)
        if precision is not None and precision < 0:
            precision = None
        return (width, precision)

    def format(self, stream, args):
        (width, precision) = self.params(args)
        stream.write(justify(self.convert(args, precision), self.flags, width))

    def convert(self, args, precision):
        """Consume zero or more arguments and return a Conversion."""
        raise NotImplementedError

class Percent(Directive):
    def convert(self, args, precision):
        return Conversion("", "", "%", "")

class Character(Directive):
    def convert(self, args, precision):
        return Conversion("", "", str(args.next())[:1], "")

class String(Directive):
    def convert(self, args, precision):
        return Conversion("", "", str(args.next()), "")

class Ignore(Directive):
    """There are no pointers or output counts to speak of, so %p and %n
    swallow an argument and produce nothing."""

    def format(self, stream, args):
        self.params(args)
        args.next()

class Numeric(Directive):
    def convert(self, args, precision):
        return convert_number(args.next(), self.specifier, self.flags,
                              precision)

format_directives = {
    "%": Percent, "c": Character, "s": String, "@": String,
    "p": Ignore, "n": Ignore,
    "d": Numeric, "i": Numeric, "u": Numeric, "o": Numeric,
    "x": Numeric, "X": Numeric, "f": Numeric, "e": Numeric, "E": Numeric,
    "g": Numeric, "G": Numeric,
}

# Grammar

tokens = re.compile(r"""
    ([^%]+)                                     # literal run
  | (%[-+\ \#0]*(?:\d+|\*)?(?:\.(?:\d+|\*))?[hlL]?[cdieEfgGosuxXpn%@])
""", re.VERBOSE)

directive = re.compile(r"""
    %
    ([-+\ \#0]*)                # flags
    (\d+|\*)?                   # width
    (?:\.(\d+|\*))?             # precision
    ([hlL]?)                    # length modifier
    ([cdieEfgGosuxXpn%@])       # specifier
""", re.VERBOSE)

def literal_param(s):
    if s is None:
        return None
    elif s == "*":
        return Directive.dynamic
    else:
        return int(s)

def parse_directive(template, start, end):
    """Decompose the directive spanning template[start:end]."""
    m = directive.fullmatch(template, start, end)
    if m is None or len(m.groups()) != 5:
        raise FormatParseError(template, start, "malformed directive")
    (flags, width, precision, length, specifier) = m.groups()
    return format_directives[specifier](frozenset(flags),
                                        literal_param(width),
                                        literal_param(precision),
                                        length, specifier,
                                        template, start, end)

def parse_template(template):
    """Yield a list of strings and Directive instances corresponding to the
    given template.  Raises FormatParseError at the first offset that starts
    neither a literal run nor a complete directive."""

    assert isinstance(template, str), "template must be a string"

    i = 0
    end = len(template)
    while i < end:
        m = tokens.search(template, i)
        if m is None or m.start() != i:
            raise FormatParseError(template, i,
                                   "incomplete directive" if m is None
                                   else "unknown format directive")
        (literal, text) = m.groups()
        if literal is not None:
            yield literal
        else:
            yield parse_directive(template, i, m.end())
        i = m.end()

class Formatter(object):
    """A parsed template, ready to be applied to any number of argument
    lists.  If the template is malformed, the directives parsed before the
    failure are kept and the parse error is saved in the error attribute."""

    def __init__(self, template):
        self.template = template
        self.directives = []
        self.error = None
        try:
            for x in parse_template(template):
                self.directives.append(x)
        except FormatParseError as e:
            self.error = e

    @property
    def truncated(self):
        return self.error is not None

    def __call__(self, stream, args=()):
        if not isinstance(args, Arguments):
            args = Arguments(tuple(args))
        apply_directives(stream, self.directives, args)
        if self.error is not None:
            if printfvars.strict:
                raise self.error
            logger.debug("output truncated at offset %d of %r: %s",
                         self.error.offset, self.template, self.error.message)
        return args

def apply_directives(stream, directives, args):
    write = stream.write
    for x in directives:
        if isinstance(x, str):
            write(x)
        else:
            x.format(stream, args)

def format(template, arguments=()):
    """Render template with the given sequence of arguments."""
    f = template if isinstance(template, Formatter) else Formatter(template)
    stream = StringIO()
    try:
        f(stream, arguments)
        return stream.getvalue()
    finally:
        stream.close()

def sprintf(template, *args):
    return format(template, args)

def fprintf(stream, template, *args):
    """Write the rendered template to stream and return the number of
    characters written."""
    f = template if isinstance(template, Formatter) else Formatter(template)
    stream = CharCountStream(stream)
    f(stream, args)
    return stream.count

def printf(template, *args):
    return fprintf(sys.stdout, template, *args)
