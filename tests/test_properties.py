"""Property-based tests for the scanner and attribute parser.

These tests verify invariants that should hold for any input:
1. Expansion never raises, whatever the markup looks like
2. Text the lookup does not handle comes back unchanged
3. Handled tags are replaced exactly where they appear
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from squaretag import TagInfo, expand, parse_attributes

# Text biased towards markup characters
markup_text = st.text(alphabet=st.sampled_from('[]/"\\= abx'), max_size=60) | st.text(max_size=60)
plain_text = st.text().filter(lambda s: "[" not in s and "]" not in s)

_SELF_CLOSING = TagInfo(wraps=False, content_processor=lambda attrs, content: "B")
_WRAPPING = TagInfo(wraps=True, content_processor=lambda attrs, content: f"<{content}>")


def lookup(tag: str) -> TagInfo | None:
    return {"a": _WRAPPING, "b": _SELF_CLOSING}.get(tag)


def miss(tag: str) -> None:
    return None


class TestExpandProperties:
    @given(text=markup_text)
    @settings(max_examples=300)
    def test_never_raises(self, text: str) -> None:
        assert isinstance(expand(text, lookup), str)

    @given(text=markup_text)
    def test_unhandled_text_unchanged(self, text: str) -> None:
        assert expand(text, miss) == text

    @given(text=st.text().filter(lambda s: "]" not in s))
    def test_text_without_closing_bracket_unchanged(self, text: str) -> None:
        assert expand(text, lookup) == text

    @given(before=plain_text, after=plain_text)
    def test_self_closing_replaced_in_place(self, before: str, after: str) -> None:
        assert expand(f"{before}[b]{after}", lookup) == f"{before}B{after}"

    @given(before=plain_text, inner=plain_text, after=plain_text)
    def test_wrapped_content_passed_through(self, before: str, inner: str, after: str) -> None:
        assert expand(f"{before}[a]{inner}[/a]{after}", lookup) == f"{before}<{inner}>{after}"


class TestParseAttributesProperties:
    @given(text=markup_text)
    @settings(max_examples=300)
    def test_never_raises(self, text: str) -> None:
        attributes = parse_attributes(text)
        assert all(isinstance(key, str) and key for key in attributes)
        assert all(value is True or isinstance(value, str) for value in attributes.values())

    @given(names=st.lists(st.text(alphabet="abcxyz", min_size=1, max_size=5), max_size=5))
    def test_bare_names_are_flags(self, names: list[str]) -> None:
        assert parse_attributes(" ".join(names)) == dict.fromkeys(names, True)
