# -*- coding: utf-8 -*-
"""Interactive console.

A bare move string plays a move; everything else is a named command. The board
status is printed after every command.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import ProtocolError
from .rules import Color, Game
from .translator import MoveTranslator

log = logging.getLogger(__name__)

HELP_TEXT = (
    "\nChessBot Help:\n"
    "help\t\tDisplay this text.\n"
    "reset\t\tReset board to start of game.\n"
    "quit\t\tLeave the program.\n"
    "move_string\tUse no command name to make a move (SAN like exd5, O-O, e8=Q or UCI like e2e4).\n"
)
HINT = 'Type "help" to see list of available commands'


class Console:
    def __init__(
        self,
        game: Game,
        translator: MoveTranslator,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
    ):
        self.game = game
        self.translator = translator
        self.input_fn = input_fn or input
        self.output = output or print
        self.running = True

    def status(self) -> None:
        self.output("\nCurrent board:")
        self.output(self.game.ascii())
        self.output("")
        side = "White" if self.game.turn == Color.WHITE else "Black"
        self.output(f"{side} to move")

    def confirm(self, question: str) -> bool:
        answer = self.input_fn(f"{question} (y/n) ")
        return answer.strip().lower() == "y"

    def handle(self, line: str) -> str:
        """Run one command line and return the text to show the user."""
        parts = line.split()
        if not parts:
            return ""
        op, args = parts[0], parts[1:]

        if op == "help":
            return HELP_TEXT

        if op == "reset":
            if args:
                return f'"reset" command expects 0 args but got {len(args)}'
            if self.confirm("Are you sure?"):
                self.game.reset()
                return "Board reset."
            return ""

        if op in ("quit", "exit"):
            self.running = False
            return ""

        if args:
            return f"To move input a single argument (got {len(args)} args)\n{HINT}"

        try:
            rejected = self.translator.play(self.game, op)
        except ProtocolError as e:
            log.error("Move %s aborted: %s", op, e)
            return (
                f"Board failed: {e}\n"
                "The game has recorded the move but the physical board may not match."
            )
        if rejected is not None:
            return f'Invalid move "{rejected.move}" ({rejected.reason})\n{HINT}'
        return ""

    def run(self) -> None:
        self.status()
        self.output(f"\n{HINT}")
        while self.running:
            try:
                line = self.input_fn("Input command: ")
            except EOFError:
                break
            result = self.handle(line)
            if not self.running:
                break
            self.status()
            if result:
                self.output(result)
