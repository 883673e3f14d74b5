"""Parsed form of a message template.

A template such as ``"Order {0} has {1,choice,0#no items|1#one item|1<{1} items}"``
parses into a Pattern of Text and Placeholder elements. Patterns are
immutable and cached by the parser, so a template is parsed once no
matter how many faults use it.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from faultcodes.enums import ArgumentType

__all__ = [
    "ChoiceOption",
    "Pattern",
    "PatternElement",
    "Placeholder",
    "Text",
]


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text, quotes already removed."""

    value: str


@dataclass(frozen=True, slots=True)
class ChoiceOption:
    """One range of a choice placeholder.

    Attributes:
        limit: Smallest value selecting this option ('<' limits are stored
            as the next representable float)
        text: Output for the range, quotes removed
        pattern: Parsed text when it contains nested placeholders, else None
    """

    limit: float
    text: str
    pattern: "Pattern | None" = None


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Positional argument reference: {index[,type[,style]]}.

    Attributes:
        index: Zero-based argument position
        format_type: Declared format type, None for a plain {n}
        style: Raw style text (keyword or CLDR pattern), None if absent
        choices: Parsed options for choice placeholders
        position: Offset of the opening brace in the template
    """

    index: int
    format_type: ArgumentType | None = None
    style: str | None = None
    choices: tuple[ChoiceOption, ...] = ()
    position: int = 0


type PatternElement = Text | Placeholder


@dataclass(frozen=True, slots=True)
class Pattern:
    """Parsed template.

    Attributes:
        source: Template text the pattern was parsed from
        elements: Text and placeholders in output order
    """

    source: str
    elements: tuple[PatternElement, ...]

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """All placeholders, in template order."""
        return tuple(e for e in self.elements if isinstance(e, Placeholder))
