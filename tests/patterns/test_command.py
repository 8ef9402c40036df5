"""Tests for undoable editor commands and the invoker."""
from unittest.mock import Mock

import pytest

from behavioral_patterns.domain.core.exceptions import (
    InvalidStateTransitionError,
    NothingToRedoError,
    NothingToUndoError,
    ValidationError,
)
from behavioral_patterns.patterns.command import (
    CommandInvoker,
    CommandMiddleware,
    DeleteTextCommand,
    InsertTextCommand,
    LoggingMiddleware,
    MacroCommand,
    TextDocument,
    demo,
)


@pytest.fixture
def document():
    return TextDocument("Hello")


@pytest.fixture
def invoker():
    return CommandInvoker()


class RecordingMiddleware(CommandMiddleware):
    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    def execute(self, command, next_handler):
        self.calls.append(f"{self.name}:before")
        next_handler()
        self.calls.append(f"{self.name}:after")


class TestCommands:
    def test_insert_and_undo(self, document):
        command = InsertTextCommand(document, 5, "!")
        command.execute()
        assert document.content == "Hello!"

        command.undo()
        assert document.content == "Hello"

    def test_insert_validation(self, document):
        with pytest.raises(ValidationError, match="Nothing to insert"):
            InsertTextCommand(document, 0, "").validate()
        with pytest.raises(ValidationError, match="outside document"):
            InsertTextCommand(document, 6, "x").validate()

    def test_delete_restores_removed_text(self, document):
        command = DeleteTextCommand(document, 1, 3)
        command.execute()
        assert document.content == "Ho"

        command.undo()
        assert document.content == "Hello"

    def test_delete_validation(self, document):
        with pytest.raises(ValidationError):
            DeleteTextCommand(document, 0, 0).validate()
        with pytest.raises(ValidationError):
            DeleteTextCommand(document, 3, 3).validate()
        with pytest.raises(ValidationError):
            DeleteTextCommand(document, -1, 1).validate()

    def test_delete_undo_before_execute(self, document):
        with pytest.raises(ValidationError):
            DeleteTextCommand(document, 0, 1).undo()

    def test_descriptions(self, document):
        assert InsertTextCommand(document, 0, "Hi").description == "insert 'Hi' at 0"
        assert DeleteTextCommand(document, 2, 1).description == "delete 1 char(s) at 2"


class TestMacroCommand:
    def test_requires_steps(self):
        with pytest.raises(ValidationError):
            MacroCommand("empty", [])

    def test_runs_and_undoes_all_steps(self, document):
        macro = MacroCommand("wrap", [
            InsertTextCommand(document, 0, "<"),
            InsertTextCommand(document, 6, ">"),
        ])
        macro.execute()
        assert document.content == "<Hello>"
        assert macro.description == "macro wrap (2 steps)"

        macro.undo()
        assert document.content == "Hello"

    def test_failed_step_rolls_back_earlier_steps(self, document):
        macro = MacroCommand("broken", [
            InsertTextCommand(document, 0, "X"),
            DeleteTextCommand(document, 10, 2),
        ])

        with pytest.raises(ValidationError):
            macro.execute()
        assert document.content == "Hello"


class TestCommandInvoker:
    def test_undo_redo_cycle(self, document, invoker):
        invoker.execute(InsertTextCommand(document, 5, " world"))
        invoker.execute(DeleteTextCommand(document, 0, 1))
        assert document.content == "ello world"

        invoker.undo()
        assert document.content == "Hello world"
        assert invoker.can_redo

        invoker.redo()
        assert document.content == "ello world"
        assert not invoker.can_redo

    def test_undo_returns_command(self, document, invoker):
        command = InsertTextCommand(document, 0, ">")
        invoker.execute(command)
        assert invoker.undo() is command

    def test_execute_clears_redo_stack(self, document, invoker):
        invoker.execute(InsertTextCommand(document, 0, "a"))
        invoker.undo()
        invoker.execute(InsertTextCommand(document, 0, "b"))

        assert not invoker.can_redo
        with pytest.raises(NothingToRedoError):
            invoker.redo()

    def test_empty_history(self, invoker):
        assert not invoker.can_undo
        with pytest.raises(NothingToUndoError):
            invoker.undo()

    def test_nothing_to_undo_is_a_state_error(self, invoker):
        with pytest.raises(InvalidStateTransitionError):
            invoker.undo()

    def test_invalid_command_is_not_recorded(self, document, invoker):
        with pytest.raises(ValidationError):
            invoker.execute(InsertTextCommand(document, 99, "x"))

        assert document.content == "Hello"
        assert invoker.history == []

    def test_failed_macro_is_not_recorded(self, document, invoker):
        with pytest.raises(ValidationError):
            invoker.execute(MacroCommand("broken", [
                InsertTextCommand(document, 0, "X"),
                DeleteTextCommand(document, 10, 2),
            ]))

        assert document.content == "Hello"
        assert not invoker.can_undo

    def test_history_is_bounded(self, document):
        invoker = CommandInvoker(max_history=2)
        for text in ("a", "b", "c"):
            invoker.execute(InsertTextCommand(document, 0, text))

        assert invoker.history == ["insert 'b' at 0", "insert 'c' at 0"]

    def test_max_history_must_be_positive(self):
        with pytest.raises(ValidationError):
            CommandInvoker(max_history=0)

    def test_middleware_runs_in_order_added(self, document):
        calls = []
        invoker = CommandInvoker(middleware=[RecordingMiddleware("outer", calls)])
        invoker.add_middleware(RecordingMiddleware("inner", calls))

        invoker.execute(InsertTextCommand(document, 0, "x"))

        assert calls == ["outer:before", "inner:before", "inner:after", "outer:after"]

    def test_middleware_can_block_execution(self, document):
        blocker = Mock(spec=CommandMiddleware)
        invoker = CommandInvoker(middleware=[blocker])

        invoker.execute(InsertTextCommand(document, 0, "x"))

        blocker.execute.assert_called_once()
        assert document.content == "Hello"

    @pytest.mark.parametrize("middleware", [[], [LoggingMiddleware()]])
    def test_commands_are_validated_without_validation_middleware(self, document, middleware):
        invoker = CommandInvoker(middleware=middleware)

        with pytest.raises(ValidationError, match="Insert position 99"):
            invoker.execute(InsertTextCommand(document, 99, "X"))

        assert document.content == "Hello"
        assert not invoker.can_undo


def test_demo_transcript():
    assert demo() == [
        "edited:   'ello world'",
        "undo x2:  'Hello'",
        "redo:     'Hello world'",
        "macro:    'HELLO world!'",
        "history:  insert 'Hello' at 0; insert ' world' at 5; macro shout (3 steps)",
    ]
