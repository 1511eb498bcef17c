"""Actions that evaluate ``:`` command lines against the session.

The grammar is a plain table of command words; everything with behaviour
lives in :class:`~modal_edit.session.EditorSession`.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List

from modal_edit.editing import operations
from modal_edit.modes.base_mode import ModeContext, ModeResult
from modal_edit.modes.keymap_helpers import line_input_state
from modal_edit.navigation import motions
from modal_edit.session.errors import UserError
from modal_edit.session.status import Severity

if TYPE_CHECKING:  # pragma: no cover
    from modal_edit.keymaps import ResolutionMatch

CommandHandler = Callable[[ModeContext, List[str]], None]

COMMAND_HELP = "Commands: :w=save :q=quit :e=file :n=new :bn=next :bp=prev"


def submit_command_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    text = str(line_input_state(context).get("text", "")).strip()
    context.bus.emit("command.submit", text)
    status = execute_command(context, text)
    return ModeResult(consumed=True, switch_to="normal", status=status, message=text)


def execute_command(context: ModeContext, text: str) -> str:
    """Run one command line; returns a short status tag."""

    if not text:
        return "command_empty"
    command, *args = text.split()
    if command.isdigit():
        document = context.document
        document.set_cursor(
            *motions.goto_line(document.store, document.cursor, int(command))
        )
        return "command_goto"
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        context.session.notify(f"Unknown command: {text}", Severity.ERROR)
        context.bus.emit("command.error", text)
        return "command_error"
    with context.session.reporting():
        handler(context, args)
    return f"command_{command}"


def _require_path(args: List[str]) -> str:
    path = " ".join(args)
    if not path:
        raise UserError("No filename specified", severity=Severity.ERROR)
    return path


def _write(context: ModeContext, args: List[str]) -> None:
    if args:
        context.session.save_as(" ".join(args))
    else:
        context.session.save()


def _save_as(context: ModeContext, args: List[str]) -> None:
    context.session.save_as(_require_path(args))


def _quit(context: ModeContext, args: List[str], *, force: bool = False) -> None:
    del args
    context.session.quit(force=force)


def _write_quit(context: ModeContext, args: List[str]) -> None:
    _write(context, args)
    context.session.quit()


def _edit(context: ModeContext, args: List[str]) -> None:
    context.session.open_document(_require_path(args))


def _new(context: ModeContext, args: List[str]) -> None:
    del args
    context.session.new_document()


def _next(context: ModeContext, args: List[str]) -> None:
    del args
    context.session.next_document()


def _prev(context: ModeContext, args: List[str]) -> None:
    del args
    context.session.prev_document()


def _close(context: ModeContext, args: List[str], *, force: bool = False) -> None:
    del args
    context.session.close_document(force=force)


def _recent(context: ModeContext, args: List[str]) -> None:
    session = context.session
    if not args:
        if not session.recent_files:
            raise UserError("No recent files", severity=Severity.INFO)
        listing = "  ".join(
            f"{index}:{path}" for index, path in enumerate(session.recent_files, 1)
        )
        session.notify(listing, Severity.INFO)
        return
    try:
        number = int(args[0])
    except ValueError:
        raise UserError("Invalid recent file index", severity=Severity.ERROR) from None
    session.open_recent(number - 1)


_SET_OPTIONS: Dict[str, tuple[str, bool]] = {
    "nu": ("line_numbers", True),
    "number": ("line_numbers", True),
    "nonu": ("line_numbers", False),
    "nonumber": ("line_numbers", False),
    "ai": ("auto_indent", True),
    "autoindent": ("auto_indent", True),
    "noai": ("auto_indent", False),
    "noautoindent": ("auto_indent", False),
}


def _set(context: ModeContext, args: List[str]) -> None:
    option = _SET_OPTIONS.get(args[0]) if args else None
    if option is None:
        raise UserError(f"Unknown option: {' '.join(args)}", severity=Severity.ERROR)
    name, enabled = option
    if name == "line_numbers":
        context.session.set_line_numbers(enabled)
    else:
        context.session.set_auto_indent(enabled)


def _syntax(context: ModeContext, args: List[str]) -> None:
    if args not in (["on"], ["off"]):
        raise UserError("Usage: syntax on|off", severity=Severity.ERROR)
    context.session.set_syntax_highlight(args[0] == "on")


def _replace_all(context: ModeContext, args: List[str]) -> None:
    if len(args) != 2:
        raise UserError("Usage: replaceall <find> <replacement>", severity=Severity.ERROR)
    find, replacement = (arg.encode("utf-8") for arg in args)
    context.session.replace_all(find, replacement)


def _numbers(args: List[str], usage: str) -> List[int]:
    try:
        return [int(arg) for arg in args]
    except ValueError:
        raise UserError(usage, severity=Severity.ERROR) from None


def _duplicate(context: ModeContext, args: List[str]) -> None:
    del args
    operations.duplicate_line(context.document)
    context.session.notify("Line duplicated")


def _yank(context: ModeContext, args: List[str]) -> None:
    """``yank <first> [last]`` with 1-based, inclusive line numbers."""

    usage = "Usage: yank <first> [last]"
    numbers = _numbers(args, usage)
    if len(numbers) not in (1, 2):
        raise UserError(usage, severity=Severity.ERROR)
    first, last = numbers[0], numbers[-1]
    count = operations.yank_region(
        context.document, context.clipboard, first - 1, last - 1
    )
    if not count:
        raise UserError("Nothing to yank")
    context.session.notify(f"{count} line(s) yanked")


def _column(context: ModeContext, args: List[str]) -> None:
    usage = "Usage: col <number>"
    numbers = _numbers(args, usage)
    if len(numbers) != 1:
        raise UserError(usage, severity=Severity.ERROR)
    document = context.document
    document.set_cursor(
        *motions.goto_column(document.store, document.cursor, numbers[0] - 1)
    )


def _help(context: ModeContext, args: List[str]) -> None:
    del args
    context.session.notify(COMMAND_HELP)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _write,
    "write": _write,
    "saveas": _save_as,
    "q": _quit,
    "quit": _quit,
    "q!": partial(_quit, force=True),
    "quit!": partial(_quit, force=True),
    "wq": _write_quit,
    "x": _write_quit,
    "e": _edit,
    "edit": _edit,
    "n": _new,
    "new": _new,
    "bn": _next,
    "bnext": _next,
    "bp": _prev,
    "bprev": _prev,
    "bd": _close,
    "bdelete": _close,
    "bd!": partial(_close, force=True),
    "bdelete!": partial(_close, force=True),
    "recent": _recent,
    "set": _set,
    "syntax": _syntax,
    "replaceall": _replace_all,
    "dup": _duplicate,
    "yank": _yank,
    "col": _column,
    "help": _help,
    "h": _help,
}


__all__ = ["COMMAND_HELP", "submit_command_line", "execute_command"]
