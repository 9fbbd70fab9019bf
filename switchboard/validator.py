"""
Switchboard argument validator.

validate(operation, tokens) checks raw command-line tokens against an operation's
parameters, strictly in parameter order, and stops at the first violation:

- a required parameter (no default, not *args) without a token → MissingArgumentError;
- an "int" parameter accepts only a non-empty run of ASCII digits (no sign, no spaces);
- a "float" parameter accepts a numeric literal: optional sign, integer or decimal
  digits, optional exponent;
- untyped parameters (and any other annotation) accept every string;
- a variadic (*args) parameter checks every remaining token against its kind;
- tokens beyond the declared parameters are not inspected and pass through.

Tokens are never converted: on success the same strings come back, ready to be
forwarded positionally. Converting them is the provider's business.

Positions are 0-based in fault payloads; messages use 1-based ordinals.
"""
import logging
import re

from .faults import FaultCode, MissingArgumentError, TypeMismatchError, getdoc
from .utils import ordinal

logger = logging.getLogger(__name__)

PATTERNS = {
    "int": re.compile(r"[0-9]+"),
    "float": re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"),
}

ARTICLES = {
    "int": "an integer",
    "float": "a float",
}


def compatible(kind, value, /):
    """
    Return True when value is acceptable for the given primitive kind.

    Unknown kinds (None included) accept everything.
    """
    try:
        pattern = PATTERNS[kind]
    except KeyError:
        return True
    return pattern.fullmatch(value) is not None


def validate(operation, tokens, /):
    """
    Validate tokens against operation.parameters.

    Returns
    - tuple[str, ...]: the tokens, unchanged.

    Raises
    - MissingArgumentError(position, name) for the first required parameter lacking a token.
    - TypeMismatchError(position, expected, value) for the first incompatible token.
    """
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("validate() tokens must be strings")

    for position, parameter in enumerate(operation.parameters):
        if parameter.variadic:
            for offset, token in enumerate(tokens[position:], position):
                _check(operation, parameter, offset, token)
            break

        if position >= len(tokens):
            if parameter.optional:
                continue
            logger.debug("%s: missing argument %r at position %d", operation.qualname, parameter.name, position)
            raise MissingArgumentError(
                "missing argument %d for $%s at %s position (no default value)" % (
                    position + 1, parameter.name, ordinal(position + 1)
                ),
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                position=position,
                name=parameter.name,
                operation=operation,
                hint="pass a value for $%s after '%s'" % (parameter.name, operation.qualname),
                docs=getdoc(FaultCode.MISSING_ARGUMENT),
            )

        _check(operation, parameter, position, tokens[position])

    return tokens


def _check(operation, parameter, position, token):
    if compatible(parameter.kind, token):
        return
    logger.debug("%s: %r is not %s at position %d", operation.qualname, token, parameter.kind, position)
    raise TypeMismatchError(
        "argument %d (%r) at %s position must be %s" % (
            position + 1, token, ordinal(position + 1), ARTICLES[parameter.kind]
        ),
        title="type mismatch",
        code=FaultCode.TYPE_MISMATCH,
        position=position,
        expected=parameter.kind,
        value=token,
        name=parameter.name,
        operation=operation,
        hint="$%s expects %s, for example %s" % (
            parameter.name, ARTICLES[parameter.kind], "42" if parameter.kind == "int" else "3.14"
        ),
        docs=getdoc(FaultCode.TYPE_MISMATCH),
    )


__all__ = (
    "validate",
    "compatible",
)
