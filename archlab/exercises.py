"""Small pointer-era exercises: bracket balancing, edit distance and a stack machine."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

_CLOSERS = {")": "(", "]": "[", "}": "{", ">": "<"}
_OPENERS = frozenset(_CLOSERS.values())


def is_balanced(text: str) -> bool:
    """Return True if every bracket in ``text`` is closed in the right order.

    The bracket pairs are ``()``, ``[]``, ``{}`` and ``<>``; any other
    character is ignored.
    """
    stack: List[str] = []
    for char in text:
        if char in _OPENERS:
            stack.append(char)
        elif char in _CLOSERS:
            if not stack or stack.pop() != _CLOSERS[char]:
                return False
    return not stack


def edit_distance(source: str, target: str) -> int:
    """Return the Levenshtein distance between ``source`` and ``target``."""
    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, 1):
        current = [i]
        for j, target_char in enumerate(target, 1):
            if source_char == target_char:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(current[j - 1], previous[j - 1], previous[j]))
        previous = current
    return previous[-1]


class Stack:
    """A last-in, first-out stack of integers."""

    def __init__(self) -> None:
        self._items: List[int] = []

    def push(self, number: int) -> None:
        """Put ``number`` on top of the stack."""
        self._items.append(number)

    def pop(self) -> int:
        """Remove and return the top number; raise IndexError when empty."""
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


def run_stack_program(text: str) -> List[int]:
    """Run ``PUSH n`` and ``POP`` commands and return what is left, top first.

    A ``POP`` on an empty stack does nothing. Raises ValueError on any
    other command or on a ``PUSH`` without a number.
    """
    stack = Stack()
    tokens = iter(text.split())
    for token in tokens:
        if token == "PUSH":
            number = next(tokens, None)
            if number is None:
                raise ValueError("PUSH needs a number")
            stack.push(int(number))
        elif token == "POP":
            try:
                stack.pop()
            except IndexError:
                pass
        else:
            raise ValueError(f"unexpected input {token!r}")
    return [stack.pop() for _ in range(len(stack))]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the exercises on an input file and print its result."""
    parser = argparse.ArgumentParser(
        prog="archlab-exercises",
        description="Bracket balancing, edit distance and a stack machine.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, text in (
        ("balanced", "check that brackets are balanced"),
        ("edit-distance", "edit distance between two words"),
        ("stack", "run PUSH and POP commands"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("input", help="path to the input file")
    args = parser.parse_args(argv)

    try:
        with open(args.input, "r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"fopen failed: {exc.strerror}", file=sys.stderr)
        return 1

    if args.command == "balanced":
        sys.stdout.write("yes" if is_balanced(text) else "no")
    elif args.command == "edit-distance":
        words = text.split()
        if len(words) < 2:
            print("invalid input: expected two words", file=sys.stderr)
            return 1
        sys.stdout.write(f"{edit_distance(words[0], words[1])}\n")
    else:
        try:
            remaining = run_stack_program(text)
        except ValueError:
            sys.stdout.write("UNEXPECTED INPUT\n")
            return 1
        sys.stdout.write("".join(f"{number}\n" for number in remaining))
    return 0