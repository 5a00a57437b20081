"""Registry builder utilities for creating event registries from signatures.

This module provides the core tools for building EventRegistry instances:
- `event_spec_from_signature()` for Solidity-style event signatures
- Generic `registry_from_signatures()` for single or multiple signatures
"""

from __future__ import annotations

import re

from abidecode.core.errors import InvalidABIType
from abidecode.decoding.parser import parse_type, split_top_level
from abidecode.decoding.registry import make_registry
from abidecode.decoding.specs import EventParam, EventRegistry, EventSpec


_ARRAY_DIMS = re.compile(r"((?:\s*\[\s*\d*\s*\])*)\s*(.*)$")


def _closing_paren(s: str) -> int:
    depth = 0
    for i, ch in enumerate(s):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    raise InvalidABIType(f"Unbalanced parentheses in {s!r}")


def _parse_param(p: str) -> tuple[str, str, bool]:
    """Parse one parameter fragment into (name, abi_type, indexed).

    Tuple members may carry their own names, e.g. `(uint256 a, address b)[] pool`;
    those are dropped from the type string.
    """
    s = " ".join(p.strip().split())  # normalize spaces
    indexed = False
    if " indexed " in f" {s} ":
        indexed = True
        s = f" {s} ".replace(" indexed ", " ").strip()
    if s.startswith("tuple("):
        s = s[len("tuple") :]
    if s.startswith("("):
        close = _closing_paren(s)
        members = [_parse_param(m)[1] for m in split_top_level(s[1:close])]
        dims, rest = _ARRAY_DIMS.match(s, close + 1).groups()
        return (rest, "(" + ",".join(members) + ")" + dims.replace(" ", ""), indexed)
    tokens = s.split()
    if not tokens:
        raise InvalidABIType(f"Empty parameter in {p!r}")
    if len(tokens) == 1 or tokens[-1].endswith("]"):
        # Unnamed parameter
        return ("", "".join(tokens), indexed)
    # Last token is the name, the rest is the type
    return (tokens[-1], "".join(tokens[:-1]), indexed)


def event_spec_from_signature(signature: str, *, anonymous: bool = False) -> EventSpec:
    """Build an EventSpec from a Solidity event signature string.

    Example input:
      "Transfer(address indexed from, address indexed to, uint256 value)"
    """
    sig = signature.strip()
    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise InvalidABIType(f"Invalid event signature: {signature}")
    name = sig[:open_paren].strip()
    params_str = sig[open_paren + 1 : close_paren].strip()

    params = []
    for part in split_top_level(params_str):
        param_name, abi_type, is_indexed = _parse_param(part)
        params.append(EventParam(param_name, parse_type(abi_type), is_indexed))

    return EventSpec(name=name, params=tuple(params), anonymous=anonymous)


def registry_from_signatures(signatures: str | list[str]) -> EventRegistry:
    """Create a registry from one or multiple event signatures."""
    sig_list = [signatures] if isinstance(signatures, str) else signatures
    return make_registry(event_spec_from_signature(s) for s in sig_list)
