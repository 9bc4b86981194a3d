"""Tests for the validated text prompt (core/question.py)."""

from __future__ import annotations

import io

import pytest
from conftest import ScriptedInput

from parex_commander.core.question import INVALID_VALUE_MESSAGE, Question
from parex_commander.exceptions import InputClosedError
from parex_commander.infra.writer import StreamWriter


def _required(text: str) -> bool | str:
    return True if text else "Name is required"


class TestQuestion:
    def test_returns_stripped_text(self, writer: StreamWriter) -> None:
        question = Question(writer, ScriptedInput(lines=["  Alice \n"]))
        assert question.ask("Name?") == "Alice"

    def test_validator_rejects_empty_then_accepts(
        self, writer: StreamWriter, output: io.StringIO,
    ) -> None:
        question = Question(writer, ScriptedInput(lines=["\n", "Alice\n"]))
        assert question.ask("Name?", validator=_required) == "Alice"
        assert output.getvalue() == "Name? Name is required\nName? "

    def test_validator_accepts_immediately(self, writer: StreamWriter) -> None:
        question = Question(writer, ScriptedInput(lines=["Alice\n"]))
        assert question.ask("Name?", validator=_required) == "Alice"

    def test_false_shows_generic_message(
        self, writer: StreamWriter, output: io.StringIO,
    ) -> None:
        answers = iter([False, True])
        question = Question(writer, ScriptedInput(lines=["x\n", "y\n"]))
        assert question.ask("Value?", validator=lambda _: next(answers)) == "y"
        assert f"{INVALID_VALUE_MESSAGE}\n" in output.getvalue()

    def test_non_true_truthy_is_invalid(self, writer: StreamWriter) -> None:
        answers = iter([1, True])
        question = Question(writer, ScriptedInput(lines=["x\n", "y\n"]))
        assert question.ask("Value?", validator=lambda _: next(answers)) == "y"  # type: ignore[arg-type,return-value]


class TestDefault:
    def test_prompt_shows_default_once(
        self, writer: StreamWriter, output: io.StringIO,
    ) -> None:
        Question(writer, ScriptedInput(lines=["\n"])).ask("Env?", default="prod")
        assert output.getvalue() == "Env? [prod] "

    def test_empty_input_uses_default(self, writer: StreamWriter) -> None:
        question = Question(writer, ScriptedInput(lines=["\n"]))
        assert question.ask("Env?", default="prod") == "prod"

    def test_default_is_validated(self, writer: StreamWriter) -> None:
        seen: list[str] = []

        def validator(text: str) -> bool:
            seen.append(text)
            return True

        Question(writer, ScriptedInput(lines=["\n"])).ask("Env?", "prod", validator)
        assert seen == ["prod"]

    def test_typed_text_overrides_default(self, writer: StreamWriter) -> None:
        question = Question(writer, ScriptedInput(lines=["dev\n"]))
        assert question.ask("Env?", default="prod") == "dev"


class TestErrors:
    def test_end_of_file(self, writer: StreamWriter) -> None:
        with pytest.raises(InputClosedError):
            Question(writer, ScriptedInput()).ask("Name?")
