"""Tests for the expansion environment."""

import copy

from squaretag import Environment, make_environment
from squaretag.environment import FORMAT_HTML, FORMAT_PLAIN


class TestMakeEnvironment:
    def test_defaults(self) -> None:
        env = make_environment()
        assert env == Environment()
        assert env.original_format == FORMAT_PLAIN
        assert env.options == {}

    def test_known_fields_and_extra_options(self) -> None:
        page = object()
        env = make_environment(page, noclean=True, original_format=FORMAT_HTML, trusted=True)
        assert env.context is page
        assert env.noclean is True
        assert env.original_format == FORMAT_HTML
        assert env.options == {"trusted": True}

    def test_user(self) -> None:
        assert make_environment(user={"firstname": "Ada"}).user == {"firstname": "Ada"}

    def test_environments_do_not_share_options(self) -> None:
        first = make_environment()
        first.options["x"] = 1
        assert make_environment().options == {}

    def test_copy(self) -> None:
        env = make_environment("ctx", noclean=True)
        clone = copy.copy(env)
        clone.noclean = False
        assert env.noclean is True
        assert clone.context == "ctx"
