"""Exceptions raised while compiling a stamp template."""


class TemplateError(ValueError):
    """Base class for structural template errors.

    All of these are raised at compile time, before any input is read.
    """

    pass


class UnterminatedTokenError(TemplateError):
    def __init__(self) -> None:
        super().__init__("unterminated '{' in template")


class DuplicatePlaceholderError(TemplateError):
    def __init__(self) -> None:
        super().__init__("template contains multiple '{}' placeholders")


class EmptyTokenError(TemplateError):
    def __init__(self) -> None:
        super().__init__("empty token in template")


class UnknownTokenError(TemplateError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown token '{name}'")
        self.name = name


class InvalidModifierError(TemplateError):
    """Raised for a numeric format modifier outside the supported subset."""

    def __init__(self, kind: str, modifier: str) -> None:
        super().__init__(f"invalid {kind} modifier '{modifier}'")
        self.modifier = modifier


class UnsupportedDirectiveError(TemplateError):
    """Raised for a ``%`` date directive with no layout equivalent."""

    def __init__(self, directive: str) -> None:
        super().__init__(f"unsupported date directive '%{directive}'")
        self.directive = directive


class IncompleteDirectiveError(TemplateError):
    def __init__(self) -> None:
        super().__init__("incomplete date directive at end of layout")
