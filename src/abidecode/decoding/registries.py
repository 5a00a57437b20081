"""Prebuilt registries for standard token events.

All registries are built from signatures via the registry_builder module and
can be merged with `{**a, **b}` syntax. ERC20 and ERC721 `Transfer`/`Approval`
share their topic0 but differ in which parameters are indexed, so merging
those two keeps only the right-hand one.

Example
-------
>>> from abidecode.decoding.registries import make_erc20_registry, make_erc777_registry
>>> reg = {**make_erc20_registry(), **make_erc777_registry()}
"""

from __future__ import annotations

from .registry_builder import registry_from_signatures
from .specs import EventRegistry


def make_erc20_registry() -> EventRegistry:
    """Return registry for ERC20 Transfer/Approval."""
    return registry_from_signatures([
        "Transfer(address indexed from, address indexed to, uint256 value)",
        "Approval(address indexed owner, address indexed spender, uint256 value)",
    ])


def make_erc721_registry() -> EventRegistry:
    """Return registry for ERC721 Transfer/Approval/ApprovalForAll."""
    return registry_from_signatures([
        "Transfer(address indexed from, address indexed to, uint256 indexed tokenId)",
        "Approval(address indexed owner, address indexed approved, uint256 indexed tokenId)",
        "ApprovalForAll(address indexed owner, address indexed operator, bool approved)",
    ])


def make_erc777_registry() -> EventRegistry:
    """Return registry for ERC777 operator and movement events."""
    return registry_from_signatures([
        "Sent(address indexed operator, address indexed from, address indexed to, uint256 amount, bytes data, bytes operatorData)",
        "Minted(address indexed operator, address indexed to, uint256 amount, bytes data, bytes operatorData)",
        "Burned(address indexed operator, address indexed from, uint256 amount, bytes data, bytes operatorData)",
        "AuthorizedOperator(address indexed operator, address indexed tokenHolder)",
        "RevokedOperator(address indexed operator, address indexed tokenHolder)",
    ])
