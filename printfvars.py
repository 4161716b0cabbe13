"""Variables that control printf's behavior.

Rebind them for the dynamic extent of a with-statement using
bindings.bindings(printfvars, name=value, ...)."""

# Fractional digits for %e and %E when the directive gives no precision.
exponent_precision = 21

# Significant digits for %g and %G when the directive gives no precision.
general_precision = 6

# If true, a malformed template raises FormatParseError instead of
# producing output up to the point of the error.
strict = False
