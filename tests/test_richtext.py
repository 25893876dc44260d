from cms.richtext import (
    coerce_document,
    document_from_text,
    empty_document,
    extract_plain_text,
    render_html,
    sanitize_html,
)

DOC = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Title"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Hello "},
                {"type": "text", "text": "world", "marks": [{"type": "bold"}]},
                {"type": "hardBreak"},
                {"type": "text", "text": "again"},
            ],
        },
        {
            "type": "bulletList",
            "content": [
                {"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "one"}]}]},
                {"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "two"}]}]},
            ],
        },
    ],
}


class TestPlainText:
    def test_blocks_become_lines(self):
        assert extract_plain_text(DOC) == "Title\nHello world\nagain\none\ntwo"

    def test_string_is_returned_unchanged(self):
        assert extract_plain_text("already text") == "already text"

    def test_empty(self):
        assert extract_plain_text(empty_document()) == ""
        assert extract_plain_text(None) == ""

    def test_document_from_text(self):
        doc = document_from_text("first\n\nsecond")
        assert [p["content"][0]["text"] for p in doc["content"]] == ["first", "second"]
        assert document_from_text("  ") == empty_document()


class TestCoerce:
    def test_passes_documents_through(self):
        assert coerce_document(DOC) == DOC

    def test_json_string(self):
        assert coerce_document('{"type": "doc", "content": []}') == {"type": "doc", "content": []}

    def test_plain_text_and_junk(self):
        assert coerce_document("line")["content"][0]["content"][0]["text"] == "line"
        assert coerce_document(42) == empty_document()
        assert coerce_document("{not json") == document_from_text("{not json")


class TestHtml:
    def test_render(self):
        html = render_html(DOC)
        assert html.startswith("<h2>Title</h2><p>Hello <strong>world</strong><br>again</p>")
        assert "<ul><li><p>one</p></li>" in html

    def test_text_is_escaped(self):
        doc = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "<script>x</script>"}]}]}
        assert "<script>" not in render_html(doc)

    def test_unsafe_links_are_dropped(self):
        doc = {
            "type": "doc",
            "content": [
                {
                    "type": "paragraph",
                    "content": [{"type": "text", "text": "go", "marks": [{"type": "link", "attrs": {"href": "javascript:alert(1)"}}]}],
                }
            ],
        }
        assert "javascript" not in render_html(doc)

    def test_sanitize_strips_disallowed_tags(self):
        cleaned = sanitize_html('<p onclick="x()">hi<script>bad()</script></p>')
        assert cleaned.startswith("<p>hi")
        assert "<script" not in cleaned
        assert "onclick" not in cleaned
        assert sanitize_html(None) == ""
