from __future__ import annotations

import contextlib
import dataclasses
import io
import json
import sys
from collections import Counter

from . import t

if t.TYPE_CHECKING:
    from .errors import CompileError

MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "warning": 2,
    "fatal": 3,
    "nothing": 4,
}

DEATH_TIMING = [
    "early",  # exit on the first message at or above dieOn
    "late",  # only exit from retroactivelyCheckErrorLevel()
    "never",
]

PRINT_MODES = [
    "plain",
    "console",
    "json",
]


@dataclasses.dataclass()
class MessagesState:
    # Lowest category that counts as a compile failure
    dieOn: str = "fatal"
    # Whether a failure exits immediately, later, or not at all
    dieWhen: str = "late"
    # Lowest category that gets printed
    printOn: str = "everything"
    # Print nothing at all, not even the exit notice
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    fh: t.TextIO = t.cast("t.TextIO", sys.stdout)  # noqa: RUF009
    seenMessages: set[str | tuple[str, str]] = dataclasses.field(default_factory=set)
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def __post_init__(self) -> None:
        for name, allowed in (("dieOn", MESSAGE_LEVELS), ("printOn", MESSAGE_LEVELS)):
            if getattr(self, name) not in allowed:
                msg = f"{name} must be one of {', '.join(allowed)}; got {getattr(self, name)!r}."
                raise ValueError(msg)
        if self.dieWhen not in DEATH_TIMING:
            msg = f"dieWhen must be one of {', '.join(DEATH_TIMING)}; got {self.dieWhen!r}."
            raise ValueError(msg)
        if self.printMode not in PRINT_MODES:
            msg = f"printMode must be one of {', '.join(PRINT_MODES)}; got {self.printMode!r}."
            raise ValueError(msg)

    def record(self, category: str, message: str | tuple[str, str]) -> None:
        self.categoryCounts[category] += 1
        self.seenMessages.add(message)

    def replace(self, **kwargs: t.Any) -> MessagesState:
        # Nested states start with a clean slate of seen messages.
        return dataclasses.replace(self, seenMessages=set(), categoryCounts=Counter(), **kwargs)

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if self.dieWhen == "never" or (self.dieWhen == "late" and timing == "early"):
            return False
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category == "failure":
            return True
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]


state = MessagesState()


def p(msg: str | tuple[str, str]) -> None:
    # A tuple is (fancy, ascii-safe) versions of the same message.
    if isinstance(msg, tuple):
        msg, ascii = msg
    else:
        ascii = msg.encode("ascii", "replace").decode()
    if state.asciiOnly:
        msg = ascii
    try:
        print(msg, file=state.fh)
    except UnicodeEncodeError:
        print(ascii, file=state.fh)


def report(category: str, msg: str, lineNum: str | int | None = None) -> None:
    formattedMsg = formatMessage(category, msg, lineNum=lineNum)
    if formattedMsg not in state.seenMessages:
        state.record(category, formattedMsg)
        if state.shouldPrint(category):
            p(formattedMsg)
    if state.shouldDie(category):
        errorAndExit()


def die(msg: str, lineNum: str | int | None = None) -> None:
    report("fatal", msg, lineNum)


def warn(msg: str, lineNum: str | int | None = None) -> None:
    report("warning", msg, lineNum)


def failure(msg: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage("failure", msg))


def dieFromError(err: CompileError) -> None:
    # Reports a compile failure as a fatal message,
    # for callers that treat a bad markup payload as skippable.
    die(f"{type(err).__name__}: {err.message}", lineNum=err.loc)


def retroactivelyCheckErrorLevel(timing: str = "early") -> bool:
    """
    Exits if anything reported so far is at or above dieOn,
    for states whose dieWhen held the exit back.
    """
    for category, count in state.categoryCounts.items():
        if count and state.shouldDie(category, timing):
            errorAndExit()
    return True


ANSI_COLORS = {
    "red": 31,
    "light cyan": 96,
}

ANSI_STYLES = {
    "bold": 1,
    "invert": 7,
}


def printColor(text: str, color: str, *styles: str) -> str:
    if state.printMode != "console":
        return text
    codes = [str(ANSI_STYLES[style]) for style in styles] + [str(ANSI_COLORS[color])]
    return f"\033[{';'.join(codes)}m{text}\033[0m"


def formatMessage(type: str, text: str, lineNum: str | int | None = None) -> str | tuple[str, str]:
    if state.printMode == "json":
        # One JSON object per line, so partial output stays parseable.
        return json.dumps({"lineNum": lineNum, "messageType": type, "text": text})

    if type == "failure":
        return (
            printColor(" ✘ ", "red", "invert") + " " + text,
            printColor("ERR", "red", "invert") + " " + text,
        )
    if lineNum is not None:
        heading = f"LINE {lineNum}"
    else:
        heading = "FATAL ERROR" if type == "fatal" else "WARNING"
    color = "red" if type == "fatal" else "light cyan"
    return printColor(heading + ":", color, "bold") + " " + text


def errorAndExit() -> None:
    failure("Did not compile, due to errors exceeding the allowed error level.")
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(
    fh: t.TextIO,
    **kwargs: t.Any,
) -> t.Generator[t.TextIO, None, None]:
    global state
    oldState = state
    state = oldState.replace(fh=fh, **kwargs)
    try:
        yield fh
    finally:
        state = oldState


def messagesSilent() -> t.ContextManager[t.TextIO]:
    return withMessageState(io.StringIO(), silent=True)
