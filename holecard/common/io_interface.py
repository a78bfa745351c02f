"""
Ways of talking to the player.

Every game reports through an `IOInterface`. The console variant talks to a
person, the logging variant writes a transcript to a file, and the dummy and
test variants stand in for a person during simulations and tests.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, TypeVar

import aiofiles

from holecard.blackjack.action import Action

MAX_ATTEMPTS = 3

T = TypeVar("T")


class IOInterface(ABC):
    """
    What a game needs from its surroundings: somewhere to send messages and
    someone to answer questions.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Show ``message`` to the player."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Ask for a line of text."""
        pass

    @abstractmethod
    def get_player_action(self, valid_actions: list[Action]) -> Action:
        """Retrieve one of ``valid_actions`` from the player."""
        pass

    @abstractmethod
    def check_numeric_response(self, ctx: str) -> int:
        """Ask for a whole number."""
        pass

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question."""
        pass


class DummyIOInterface(IOInterface):
    """Discards output and answers every question with a fixed default."""

    def output(self, message: str) -> None:
        pass

    def input(self, prompt: str) -> str:
        return ""

    def get_player_action(self, valid_actions: list[Action]) -> Action:
        if not valid_actions:
            raise ValueError("There is no action to choose from.")
        return valid_actions[0]

    def check_numeric_response(self, ctx: str) -> int:
        return 1

    def confirm(self, prompt: str) -> bool:
        return False


class TestIOInterface(IOInterface):
    """
    Records every message and replays scripted answers.

    Fill ``input_responses`` with the lines to type and queue actions with
    `add_player_action`. Running out of scripted actions is an error.
    """

    __test__ = False

    def __init__(self):
        self.sent_messages: list[str] = []
        self.player_actions: list[Action] = []
        self.input_responses: list[str] = []

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        return self.input_responses.pop(0) if self.input_responses else "test_input"

    def add_player_action(self, action: Action):
        self.player_actions.append(action)

    def get_player_action(self, valid_actions: list[Action]) -> Action:
        if not self.player_actions:
            raise ValueError("The scripted player has no actions left.")
        return self.player_actions.pop(0)

    def check_numeric_response(self, ctx: str) -> int:
        return int(self.input(ctx))

    def confirm(self, prompt: str) -> bool:
        return self.input(prompt).strip().lower() in ("y", "yes")


class ConsoleIOInterface(IOInterface):
    """Plays through standard input and output. Gives up after repeated bad answers."""

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)

    def _ask(self, prompt: str, parse: Callable[[str], T]) -> T:
        for _ in range(MAX_ATTEMPTS):
            try:
                return parse(input(prompt))
            except ValueError as exc:
                print(exc)
        raise RuntimeError("Too many invalid answers, giving up.")

    def get_player_action(self, valid_actions: list[Action]) -> Action:
        menu = "".join(f"{str(action):15}" for action in valid_actions)

        def parse(text: str) -> Action:
            action = Action.parse(text)
            if action not in valid_actions:
                choices = ", ".join(a.value for a in valid_actions)
                raise ValueError(f"You can't {action.value} now. Choose from: {choices}")
            return action

        return self._ask(f"What would you like to do?\n{menu}\n", parse)

    def check_numeric_response(self, ctx: str) -> int:
        def parse(text: str) -> int:
            try:
                return int(text)
            except ValueError:
                raise ValueError("Please enter a whole number.") from None

        return self._ask(ctx, parse)

    def confirm(self, prompt: str) -> bool:
        def parse(text: str) -> bool:
            answer = text.strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            raise ValueError("Please answer y or n.")

        return self._ask(f"{prompt} (y/n) ", parse)


class LoggingIOInterface(IOInterface):
    """
    Appends the game transcript to ``log_file_path``.

    Nobody is there to answer, so questions are written to the file and get
    the cautious answer: stand, bet nothing, decline.
    """

    def __init__(self, log_file_path: str):
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        asyncio.run(self.output_async(message))

    def input(self, prompt: str) -> str:
        self.output(f"[INPUT PROMPT] {prompt}")
        return ""

    def get_player_action(self, valid_actions: list[Action]) -> Action:
        self.output(f"[ACTION PROMPT] {[a.value for a in valid_actions]}")
        return Action.STAND if Action.STAND in valid_actions else valid_actions[0]

    def check_numeric_response(self, ctx: str) -> int:
        self.output(f"[NUMERIC PROMPT] {ctx}")
        return 0

    def confirm(self, prompt: str) -> bool:
        self.output(f"[CONFIRM PROMPT] {prompt}")
        return False

    async def output_async(self, message: str) -> None:
        """Append one line to the transcript without blocking the event loop."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as transcript:
            await transcript.write(f"{message}\n")
