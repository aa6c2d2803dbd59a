"""
Core types for the Markov model.
"""

from typing import TypeAlias

Token: TypeAlias = str
State: TypeAlias = tuple[Token, ...]
Transitions: TypeAlias = dict[Token, int]
TransitionTable: TypeAlias = dict[State, Transitions]
TokenSequence: TypeAlias = list[Token]
AliasGroups: TypeAlias = list[list[str]]
