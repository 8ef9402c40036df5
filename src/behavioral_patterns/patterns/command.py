"""
Command pattern - editor operations as undoable objects.

Each command captures a request against a ``TextDocument`` (the receiver).
The ``CommandInvoker`` runs commands through a middleware chain and keeps
the undo and redo stacks.
"""
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import (
    NothingToRedoError,
    NothingToUndoError,
    ValidationError,
)
from behavioral_patterns.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class TextDocument:
    """Receiver: a plain text buffer."""

    def __init__(self, content: str = ""):
        self.content = content

    def insert(self, position: int, text: str) -> None:
        self.content = self.content[:position] + text + self.content[position:]

    def delete(self, position: int, length: int) -> str:
        removed = self.content[position:position + length]
        self.content = self.content[:position] + self.content[position + length:]
        return removed

    def __len__(self) -> int:
        return len(self.content)


class Command(ABC):
    """Base command: validate, execute and undo one operation."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable summary used in history listings."""

    def validate(self) -> None:
        """Check the command can run. Override for custom validation."""

    @abstractmethod
    def execute(self) -> None:
        """Apply the operation to the receiver."""

    @abstractmethod
    def undo(self) -> None:
        """Revert exactly what ``execute`` did."""


class InsertTextCommand(Command):
    def __init__(self, document: TextDocument, position: int, text: str):
        self.document = document
        self.position = position
        self.text = text

    @property
    def description(self) -> str:
        return f"insert {self.text!r} at {self.position}"

    def validate(self) -> None:
        if not self.text:
            raise ValidationError("Nothing to insert")
        if not 0 <= self.position <= len(self.document):
            raise ValidationError(
                f"Insert position {self.position} outside document of length {len(self.document)}"
            )

    def execute(self) -> None:
        self.document.insert(self.position, self.text)

    def undo(self) -> None:
        self.document.delete(self.position, len(self.text))


class DeleteTextCommand(Command):
    def __init__(self, document: TextDocument, position: int, length: int):
        self.document = document
        self.position = position
        self.length = length
        self._removed: Optional[str] = None

    @property
    def description(self) -> str:
        return f"delete {self.length} char(s) at {self.position}"

    def validate(self) -> None:
        if self.length < 1:
            raise ValidationError("Delete length must be at least 1")
        if self.position < 0 or self.position + self.length > len(self.document):
            raise ValidationError(
                f"Delete range {self.position}:{self.position + self.length} "
                f"outside document of length {len(self.document)}"
            )

    def execute(self) -> None:
        self._removed = self.document.delete(self.position, self.length)

    def undo(self) -> None:
        if self._removed is None:
            raise ValidationError("Cannot undo a delete that never ran")
        self.document.insert(self.position, self._removed)


class MacroCommand(Command):
    """Composite command; all-or-nothing on execute."""

    def __init__(self, name: str, commands: Sequence[Command]):
        if not commands:
            raise ValidationError("A macro needs at least one command")
        self.name = name
        self.commands = list(commands)

    @property
    def description(self) -> str:
        return f"macro {self.name} ({len(self.commands)} steps)"

    def validate(self) -> None:
        # Later steps depend on earlier ones, so only the first can be checked up front
        self.commands[0].validate()

    def execute(self) -> None:
        done: List[Command] = []
        try:
            for command in self.commands:
                command.validate()
                command.execute()
                done.append(command)
        except Exception:
            for command in reversed(done):
                command.undo()
            raise

    def undo(self) -> None:
        for command in reversed(self.commands):
            command.undo()


class CommandMiddleware(ABC):
    """Base class for invoker middleware."""

    @abstractmethod
    def execute(self, command: Command, next_handler: Callable[[], None]) -> None:
        """Execute middleware logic and call ``next_handler`` to continue."""


class LoggingMiddleware(CommandMiddleware):
    """Middleware for logging command execution."""

    def execute(self, command: Command, next_handler: Callable[[], None]) -> None:
        command_type = type(command).__name__
        start_time = time.time()
        logger.debug(f"Executing {command_type}: {command.description}")
        try:
            next_handler()
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"Failed {command_type} after {execution_time:.3f}s: {str(e)}")
            raise
        execution_time = time.time() - start_time
        logger.debug(f"Completed {command_type} in {execution_time:.3f}s")


class ValidationMiddleware(CommandMiddleware):
    """Middleware for validating commands before they run."""

    def execute(self, command: Command, next_handler: Callable[[], None]) -> None:
        if command is None:
            raise ValidationError("Command cannot be None")
        command.validate()
        next_handler()


class CommandInvoker:
    """
    Invoker with undo/redo history.

    Commands pass through the middleware in the order they were added.
    """

    def __init__(self, max_history: int = 100, middleware: Optional[List[CommandMiddleware]] = None):
        if max_history < 1:
            raise ValidationError("max_history must be at least 1")
        self._undo_stack: Deque[Command] = deque(maxlen=max_history)
        self._redo_stack: List[Command] = []
        if middleware is None:
            middleware = [LoggingMiddleware(), ValidationMiddleware()]
        self.middleware: List[CommandMiddleware] = list(middleware)

    def add_middleware(self, middleware: CommandMiddleware) -> None:
        """Add middleware to the end of the chain."""
        self.middleware.append(middleware)

    def execute(self, command: Command) -> None:
        """Run a command and record it; clears the redo stack."""
        self._run_with_middleware(command)
        self._undo_stack.append(command)
        self._redo_stack.clear()

    def undo(self) -> Command:
        if not self._undo_stack:
            raise NothingToUndoError()
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        logger.debug(f"Undid {command.description}")
        return command

    def redo(self) -> Command:
        if not self._redo_stack:
            raise NothingToRedoError()
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        logger.debug(f"Redid {command.description}")
        return command

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def history(self) -> List[str]:
        """Descriptions of undoable commands, oldest first."""
        return [command.description for command in self._undo_stack]

    def _run_with_middleware(self, command: Command) -> None:
        def final_handler() -> None:
            # Always checked, whatever middleware is configured
            command.validate()
            command.execute()

        # Build middleware chain, first middleware outermost
        handler = final_handler
        for middleware in reversed(self.middleware):
            handler = self._wrap(middleware, command, handler)
        handler()

    @staticmethod
    def _wrap(middleware: CommandMiddleware, command: Command,
              next_handler: Callable[[], None]) -> Callable[[], None]:
        return lambda: middleware.execute(command, next_handler)


@pattern_demo("command")
def demo() -> List[str]:
    """Edit a document, undo twice, redo once, then run a macro."""
    document = TextDocument()
    invoker = CommandInvoker()
    lines = []

    invoker.execute(InsertTextCommand(document, 0, "Hello"))
    invoker.execute(InsertTextCommand(document, 5, " world"))
    invoker.execute(DeleteTextCommand(document, 0, 1))
    lines.append(f"edited:   {document.content!r}")

    invoker.undo()
    invoker.undo()
    lines.append(f"undo x2:  {document.content!r}")

    invoker.redo()
    lines.append(f"redo:     {document.content!r}")

    invoker.execute(MacroCommand("shout", [
        DeleteTextCommand(document, 0, 5),
        InsertTextCommand(document, 0, "HELLO"),
        InsertTextCommand(document, 11, "!"),
    ]))
    lines.append(f"macro:    {document.content!r}")
    lines.append(f"history:  {'; '.join(invoker.history)}")
    return lines
