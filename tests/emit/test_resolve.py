# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resolved JSON schema output."""

import json
import textwrap

import pytest

from fieldschema.compiler.derive import derive_module
from fieldschema.config import DeriveConfig
from fieldschema.emit.resolve import ResolutionError, render_json, resolve_schemas
from fieldschema.frontend.loader import parse_declarations
from fieldschema.model.schema import DeclarationSchema
from fieldschema.model.types import Literal, LiteralKind


def _schemas(source: str, config: DeriveConfig | None = None) -> list[DeclarationSchema]:
    return derive_module(parse_declarations(textwrap.dedent(source)), config).schemas


class TestResolveSchemas:
    def test_references_are_inlined(self) -> None:
        resolved = resolve_schemas(
            _schemas(
                """
                declarations:
                  - name: Team
                    attributes: [Schema]
                    members:
                      - {name: members, type: "[Member]"}
                  - name: Member
                    attributes: [Schema]
                    members:
                      - {name: handle, type: String?}
                """
            )
        )
        assert list(resolved) == ["Team", "Member"]
        assert resolved["Team"]["properties"]["members"]["items"] == {
            "type": "object",
            "properties": {"handle": {"type": "string", "required": False}},
        }

    def test_raw_literals(self) -> None:
        resolved = resolve_schemas(
            _schemas(
                """
                declarations:
                  - name: Product
                    attributes: [Schema]
                    members:
                      - {name: price, type: Double, default: 19.990}
                """
            ),
            raw_literals=True,
        )
        assert resolved["Product"]["properties"]["price"]["default"] == Literal(kind=LiteralKind.FLOAT, text="19.990")

    def test_missing_reference(self) -> None:
        schemas = _schemas(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: born, type: Date}
            """
        )
        with pytest.raises(ResolutionError, match="'Date': no schema was derived"):
            resolve_schemas(schemas)

    def test_cycle(self) -> None:
        schemas = _schemas(
            """
            declarations:
              - name: Node
                attributes: [Schema]
                members:
                  - {name: next, type: Node?}
            """,
            DeriveConfig(check_cycles=False),
        )
        with pytest.raises(ResolutionError, match="references form a cycle"):
            resolve_schemas(schemas)


class TestRenderJson:
    SOURCE = """
        declarations:
          - name: Product
            attributes: [Schema]
            members:
              - {name: price, type: Double, default: 19.990}
              - {name: stock, type: Int, default: 0x10}
              - {name: tags, type: "[String]"}
        """

    def test_exact_output(self) -> None:
        expected = (
            "{\n"
            '  "Product": {\n'
            '    "type": "object",\n'
            '    "properties": {\n'
            '      "price": {\n'
            '        "type": "number",\n'
            '        "required": true,\n'
            '        "default": 19.990\n'
            "      },\n"
            '      "stock": {\n'
            '        "type": "number",\n'
            '        "required": true,\n'
            '        "default": 16\n'
            "      },\n"
            '      "tags": {\n'
            '        "type": "array",\n'
            '        "items": {\n'
            '          "type": "string"\n'
            "        },\n"
            '        "required": true\n'
            "      }\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
        assert render_json(_schemas(self.SOURCE)) == expected

    def test_output_is_valid_json(self) -> None:
        document = json.loads(render_json(_schemas(self.SOURCE)))
        assert document["Product"]["properties"]["price"]["default"] == pytest.approx(19.99)

    def test_enum_values_render_inline(self) -> None:
        text = render_json(
            _schemas(
                """
                declarations:
                  - name: Level
                    kind: enum
                    members:
                      - {name: low, kind: case, value: 1}
                      - {name: high, kind: case, value: 2.5}
                  - name: Alarm
                    attributes: [Schema]
                    members:
                      - {name: level, type: Level}
                """
            )
        )
        assert '"enum": [1, 2.5]' in text

    def test_float_leading_zeros_and_sign_are_normalised(self) -> None:
        text = render_json(
            _schemas(
                """
                declarations:
                  - name: Score
                    attributes: [Schema]
                    members:
                      - {name: score, type: Double, default: 007.5}
                      - {name: offset, type: Double, default: +00.25e1}
                      - {name: delta, type: Double, default: -000.125}
                """
            )
        )
        assert '"default": 7.5' in text
        assert '"default": 0.25e1' in text
        assert '"default": -0.125' in text
        properties = json.loads(text)["Score"]["properties"]
        assert properties["score"]["default"] == pytest.approx(7.5)
        assert properties["offset"]["default"] == pytest.approx(2.5)
        assert properties["delta"]["default"] == pytest.approx(-0.125)

    def test_signed_integer_default(self) -> None:
        text = render_json(
            _schemas(
                """
                declarations:
                  - name: Step
                    attributes: [Schema]
                    members:
                      - {name: size, type: Int, default: +5}
                """
            )
        )
        assert json.loads(text)["Step"]["properties"]["size"]["default"] == 5

    def test_empty(self) -> None:
        assert render_json([]) == "{}\n"
