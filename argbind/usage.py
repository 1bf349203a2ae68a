"""
Usage renderer: rich help output built from registry metadata only.

Layout
    [ PROG — 11101 | Unrecognized Option ]      (only after a failed parse)
    unrecognized option '--bogus' at first position
     → check the OPTIONS section ...

    usage: PROG [OPTIONS] PATTERN [FILE]...
    summary paragraph, reflowed to the console width

    OPTIONS
       -C, --context=LINES       lines of context around a match
           --color=[On|Off|Auto] colorize the output
    ARGS
       PATTERN                   pattern to search for
       [FILE]                    files to search

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the session is not colorful, styling is suppressed.
- When the session is fancy, everything is wrapped in a panel.
"""
import io
from collections import defaultdict

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

NAME_WIDTH = 25
MAX_WIDTH = 80


def render(session, /):
    """
    Build a rich renderable describing ``session``'s declarations.

    Palette keys
    - usage-label, program-name, usage-section, summary-section
    - section-label, flag-name, metavar, positional-name, description
    - panel-title
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",
        "summary-section": "italic #A3A3A3",

        "section-label": "bold #FFFFFF",
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "positional-name": "bold #36C5F0",
        "description": "#9CA3AF",

        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if session.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if session.colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style))

    prog = session.program_name or "PROGRAM"
    renders = []

    if (fault := session.last_error) is not None:
        renders.append(fault.__replace__(prog=prog, colorful=session.colorful, fancy=False))
        renders.append(Text(""))

    usage = [text("usage:", "usage-label"), text(prog, "program-name")]
    if session.flags:
        usage.append(text("[OPTIONS]", "usage-section"))
    usage.extend(text(spec.name, "usage-section") for spec in session.positionals)
    if session.extras is not None:
        usage.append(text(session.extras.name + "...", "usage-section"))
    renders.append(Text(" ").join(usage))

    if session.program_summary:
        renders.append(text(session.program_summary, "summary-section"))

    renders.append(Text(""))

    def table(rows):
        grid = Table.grid(padding=(0, 1))
        grid.add_column(min_width=NAME_WIDTH, no_wrap=True)
        grid.add_column(overflow="fold")
        for name, descr in rows:
            grid.add_row(name, text(descr, "description"))
        return Padding(grid, (0, 0, 0, 3))

    if session.flags:
        renders.append(text("OPTIONS", "section-label"))
        rows = []
        for spec in session.flags:
            line = spec.render()
            name, equal, metavar = line.partition("=")
            rows.append((Text.assemble(text(name, "flag-name"), equal, text(metavar, "metavar")), spec.descr))
        renders.append(table(rows))
        renders.append(Text(""))

    if session.positionals or session.extras is not None:
        renders.append(text("ARGS", "section-label"))
        rows = [(text(spec.name, "positional-name"), spec.descr) for spec in session.positionals]
        if session.extras is not None:
            rows.append((text(session.extras.name, "positional-name"), session.extras.descr))
        renders.append(table(rows))

    if session.fancy:
        return Panel(Group(*renders), title=text(prog, "panel-title"), title_align="left", width=MAX_WIDTH)
    return Group(*renders)


def render_text(session, /, width=MAX_WIDTH):
    """Render ``session`` to a plain string (no colors, no terminal codes)."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, force_terminal=False, highlight=False)
    console.print(render(session))
    return buffer.getvalue()


__all__ = (
    "render",
    "render_text",
)
