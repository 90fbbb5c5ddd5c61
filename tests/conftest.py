"""Shared test fixtures for Solnaming."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def _loc(line: int, column: int = 0) -> dict[str, Any]:
    return {"start": {"line": line, "column": column}, "end": {"line": line, "column": column}}


@pytest.fixture()
def token_ast() -> dict[str, Any]:
    """AST of a small library plus a contract, with known violations.

    Source shape::

        library MathLib {
            function mulDiv(uint256 x_, uint256 y) internal pure returns (uint256) { ... }
        }
        contract Vault {
            function deposit(uint256 amount_) external returns (uint256 shares_) {
                uint256 fee = 1;
            }
        }

    Expected diagnostics, in order: ``mulDiv`` (library, line 2),
    ``y`` (parameter, line 2), ``fee`` (local, line 7).
    """
    return {
        "type": "SourceUnit",
        "loc": _loc(1),
        "children": [
            {
                "type": "ContractDefinition",
                "name": "MathLib",
                "kind": "library",
                "loc": _loc(1),
                "baseContracts": [],
                "subNodes": [
                    {
                        "type": "FunctionDefinition",
                        "name": "mulDiv",
                        "visibility": "internal",
                        "loc": _loc(2, 4),
                        "parameters": [
                            {"type": "VariableDeclaration", "name": "x_", "loc": _loc(2, 20)},
                            {"type": "VariableDeclaration", "name": "y", "loc": _loc(2, 32)},
                        ],
                        "returnParameters": [
                            {"type": "VariableDeclaration", "name": None, "loc": _loc(2, 60)},
                        ],
                        "body": {"type": "Block", "statements": [], "loc": _loc(2, 70)},
                    }
                ],
            },
            {
                "type": "ContractDefinition",
                "name": "Vault",
                "kind": "contract",
                "loc": _loc(5),
                "baseContracts": [],
                "subNodes": [
                    {
                        "type": "FunctionDefinition",
                        "name": "deposit",
                        "visibility": "external",
                        "loc": _loc(6, 4),
                        "parameters": [
                            {"type": "VariableDeclaration", "name": "amount_", "loc": _loc(6, 21)},
                        ],
                        "returnParameters": [
                            {"type": "VariableDeclaration", "name": "shares_", "loc": _loc(6, 58)},
                        ],
                        "body": {
                            "type": "Block",
                            "loc": _loc(6, 75),
                            "statements": [
                                {
                                    "type": "VariableDeclarationStatement",
                                    "loc": _loc(7, 8),
                                    "variables": [
                                        {
                                            "type": "VariableDeclaration",
                                            "name": "fee",
                                            "loc": _loc(7, 16),
                                        }
                                    ],
                                    "initialValue": {
                                        "type": "NumberLiteral",
                                        "number": "1",
                                        "loc": _loc(7, 22),
                                    },
                                }
                            ],
                        },
                    }
                ],
            },
        ],
    }


@pytest.fixture()
def clean_ast() -> dict[str, Any]:
    """AST of a contract that follows every naming rule."""
    return {
        "type": "SourceUnit",
        "loc": _loc(1),
        "children": [
            {
                "type": "ContractDefinition",
                "name": "Clean",
                "kind": "contract",
                "loc": _loc(1),
                "subNodes": [
                    {
                        "type": "FunctionDefinition",
                        "name": "run",
                        "visibility": "public",
                        "loc": _loc(2, 4),
                        "parameters": [
                            {"type": "VariableDeclaration", "name": "value_", "loc": _loc(2, 17)},
                        ],
                        "returnParameters": None,
                        "body": {"type": "Block", "statements": [], "loc": _loc(2, 40)},
                    }
                ],
            }
        ],
    }


@pytest.fixture()
def write_ast(tmp_path: Path) -> Any:
    """Return a helper that writes an AST dict to ``tmp_path/<name>`` as JSON."""

    def _write(tree: dict[str, Any], name: str = "Token.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(tree), encoding="utf-8")
        return path

    return _write
