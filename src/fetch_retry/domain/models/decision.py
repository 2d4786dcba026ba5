"""Retry decisions produced after each attempt"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Proceed:
    """Run another attempt after sleeping `wait` seconds"""

    wait: float


@dataclass(frozen=True)
class GiveUp:
    """Stop and surface the current outcome"""

    pass


GIVE_UP = GiveUp()

RetryDecision = Union[Proceed, GiveUp]
