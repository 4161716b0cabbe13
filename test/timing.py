import timeit

setup = """
from printf import Formatter, format, parse_template

null = open("/dev/null", "w")
template = "%-10s|%+08.3f|%#x|%.6e|%%"
args = ("name", 3.14159, 255, 1.5)
formatter = Formatter(template)
"""[1:]
stmts = (("parse", """tuple(parse_template(template))"""),
         ("format", """format(template, args)"""),
         ("formatter", """formatter(null, args)"""),
         ("builtin", """template % args"""))
for name, stmt in stmts:
    print(">> %s" % name)
    timeit.main(["-s", setup, stmt])
    print()
