"""Tests for dict/JSON serialization of chatmark trees."""

import json

import pytest

from chatmark import DeserializationError, from_dict, from_json, parse, to_dict, to_json
from chatmark.builder import block_quote, bold, document, multi_line_code, plain
from chatmark.nodes import Bold, Plain


class TestToDict:
    """Typed nodes to JSON-compatible dicts."""

    def test_leaf(self) -> None:
        assert to_dict(Plain("x")) == {"_type": "Plain", "content": "x"}

    def test_code_block(self) -> None:
        assert to_dict(multi_line_code("\nx", "js")) == {
            "_type": "MultiLineCode",
            "content": "\nx",
            "language": "js",
        }

    def test_document_shape(self) -> None:
        assert to_dict(parse("**a**")) == {
            "_type": "Document",
            "children": {
                "_type": "ElementCollection",
                "elements": [
                    {
                        "_type": "Bold",
                        "children": {
                            "_type": "ElementCollection",
                            "elements": [{"_type": "Plain", "content": "a"}],
                        },
                    }
                ],
            },
        }


class TestJson:
    """Documents survive a JSON trip."""

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "plain",
            "*italics*, ||spoilers||, `*inline code*`",
            "```js\nconst x = 1;\n```",
            "__*nested* styles__ supported",
        ],
    )
    def test_parsed_documents(self, source: str) -> None:
        doc = parse(source)
        assert from_json(to_json(doc)) == doc

    def test_block_quote(self) -> None:
        doc = document([plain("said "), block_quote(bold("hi"))])
        assert from_json(to_json(doc)) == doc

    def test_deterministic(self) -> None:
        doc = parse("**a** `b`")
        assert to_json(doc) == to_json(parse("**a** `b`"))
        assert to_json(doc).index('"_type"') < to_json(doc).index('"children"')

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("a"), indent=2)

    def test_from_dict_element(self) -> None:
        assert from_dict(to_dict(bold("x"))) == Bold(bold("x").children)


class TestDeserializationErrors:
    """Malformed input raises DeserializationError."""

    def test_invalid_json(self) -> None:
        with pytest.raises(DeserializationError, match="Invalid JSON"):
            from_json("{not json")

    def test_missing_type(self) -> None:
        with pytest.raises(DeserializationError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(DeserializationError, match="Heading"):
            from_dict({"_type": "Heading"})

    def test_missing_required_field(self) -> None:
        with pytest.raises(DeserializationError, match="Plain"):
            from_dict({"_type": "Plain"})

    def test_not_a_document(self) -> None:
        with pytest.raises(DeserializationError, match="Expected Document"):
            from_json(json.dumps({"_type": "Plain", "content": "x"}))

    def test_not_an_object(self) -> None:
        with pytest.raises(DeserializationError):
            from_json("[1, 2]")

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            from_json("")


class TestFieldValidation:
    """Loaded trees hold only the value kinds the node types define."""

    def test_children_must_be_a_collection(self) -> None:
        with pytest.raises(DeserializationError, match="'children' for Document: got tuple"):
            from_json('{"_type": "Document", "children": []}')

    def test_styled_children_must_be_a_collection(self) -> None:
        data = {"_type": "Bold", "children": {"_type": "Plain", "content": "x"}}
        with pytest.raises(DeserializationError, match="'children' for Bold: got Plain"):
            from_dict(data)

    def test_document_is_not_an_element(self) -> None:
        data = {
            "_type": "ElementCollection",
            "elements": [{"_type": "Document", "children": {"_type": "ElementCollection"}}],
        }
        with pytest.raises(DeserializationError, match="a Document item"):
            from_dict(data)

    def test_elements_must_be_a_list(self) -> None:
        with pytest.raises(DeserializationError, match="'elements'"):
            from_dict({"_type": "ElementCollection", "elements": "abc"})

    @pytest.mark.parametrize("content", [3, None, ["x"], {"_type": "Plain", "content": "x"}])
    def test_content_must_be_str(self, content: object) -> None:
        with pytest.raises(DeserializationError, match="'content' for OneLineCode"):
            from_dict({"_type": "OneLineCode", "content": content})

    def test_language_must_be_str_or_null(self) -> None:
        with pytest.raises(DeserializationError, match="'language'"):
            from_dict({"_type": "MultiLineCode", "content": "x", "language": 1})
        node = from_dict({"_type": "MultiLineCode", "content": "x", "language": None})
        assert node == multi_line_code("x")

    def test_loaded_tree_renders(self) -> None:
        doc = from_json(to_json(parse("**a** ||b||")))
        assert doc.render_markdown() == "**a** ||b||"
        assert len(list(doc.walk())) == 9


class TestNestedTrees:
    """Hand-built nesting well beyond parsed depth still round-trips."""

    def test_sixty_levels(self) -> None:
        node = plain("core")
        for _ in range(60):
            node = bold(node)
        doc = document(node)
        assert from_json(to_json(doc)) == doc
