import enum

from rich.pretty import pprint

from argbind import *


class Color(enum.Enum):
    On = "on"
    Off = "off"
    Auto = "auto"


context = Integer(32, default=3, signed=False)
ignore = Bool()
color = Choice(Color, default=Color.Auto)
pattern = String(optional=True)
files = Strings()


if __name__ == '__main__':
    session = ParseSession(None, "search FILEs for lines matching PATTERN")
    session.declare_flag("context", "C", context, metavar="LINES", descr="lines of context around a match")
    session.declare_flag("ignore-case", "i", ignore, descr="match case-insensitively")
    session.declare_flag("color", None, color, descr="colorize the output")
    session.declare_positional(pattern, name="PATTERN", descr="pattern to search for")
    session.declare_extras(files, name="[FILE]", descr="files to search")
    session.parse_or_exit()
    pprint(session.flags)
    pprint((pattern, files))
