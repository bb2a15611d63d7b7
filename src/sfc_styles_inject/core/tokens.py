"""
Placeholder Id Generation.

Issues short random identifiers used to name injected `<style>` elements and
to build the placeholder markers embedded in rewritten modules. Every id a
generator has handed out is remembered, so the same generator never issues a
duplicate.
"""

import random
import string
from typing import Optional, Set

PLACEHOLDER_ALPHABET = string.ascii_lowercase + string.digits


class PlaceholderIdExhaustedError(RuntimeError):
  """
  Raised when no unused id could be drawn within the retry bound.

  This is fatal for the build: it means the id space is exhausted or the
  random source is not behaving as a uniform draw.
  """


class PlaceholderIdGenerator:
  """
  Collision-free random token source.

  Attributes:
      length (int): Characters per token.
      max_attempts (int): Draws allowed per call before giving up.
      issued (Set[str]): Every token returned so far.
  """

  def __init__(self, length: int = 8, max_attempts: int = 10, rng: Optional[random.Random] = None) -> None:
    """
    Args:
        length: Characters per token.
        max_attempts: Draws allowed per `generate` call.
        rng: Random source. Defaults to a fresh `random.Random`.
    """
    self.length = length
    self.max_attempts = max_attempts
    self.issued: Set[str] = set()
    self._rng = rng or random.Random()

  def _draw(self) -> str:
    return "".join(self._rng.choice(PLACEHOLDER_ALPHABET) for _ in range(self.length))

  def generate(self) -> str:
    """
    Draws a token that has not been issued before and records it.

    Returns:
        str: The new token.

    Raises:
        PlaceholderIdExhaustedError: If every draw within `max_attempts`
            collided with an issued token.
    """
    for _ in range(self.max_attempts):
      token = self._draw()
      if token not in self.issued:
        self.issued.add(token)
        return token

    raise PlaceholderIdExhaustedError(
      f"Failed to generate a placeholder id after {self.max_attempts} attempts ({len(self.issued)} already issued)."
    )

  def __len__(self) -> int:
    return len(self.issued)

  def __contains__(self, token: object) -> bool:
    return token in self.issued
