# Cliflag — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Prompt Toolkit validator backed by a `FlagSpec`.

`FlagSpecValidator` lets an interactive session reject input with the same
rules and messages the command line uses. It only validates; prompting stays
with the caller.

Example:
    session.prompt("Ports: ", validator=FlagSpecValidator(ports_spec))
"""
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from cliflag.flag_spec import FlagSpec


class FlagSpecValidator(Validator):
    """Validate prompt input as if it was passed through the flag's long form."""

    def __init__(self, spec: FlagSpec, is_arg: bool = False) -> None:
        self.spec = spec
        self.is_arg = is_arg
        super().__init__()

    def validate(self, document: Document) -> None:
        error = self.spec.validate_value(self.is_arg, document.text.strip(), "")
        if error is not None:
            raise ValidationError(
                message=error.message, cursor_position=len(document.text)
            )
