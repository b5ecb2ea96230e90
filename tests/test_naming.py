"""Tests for routegen.compiler.naming — handler name derivation."""

import pytest

from routegen.compiler.naming import derive_handler, derive_handlers
from routegen.core.types import Method
from routegen.dsl.ast_nodes import PathTemplate


class TestDeriveHandler:
    def test_qualified_template(self) -> None:
        derived = derive_handler(PathTemplate(("s3", "bucket")), Method.POST)
        assert derived.segments == ("s3", "post_bucket")

    def test_single_segment(self) -> None:
        derived = derive_handler(PathTemplate(("index",)), Method.GET)
        assert derived.segments == ("get_index",)

    def test_only_last_segment_changes(self) -> None:
        derived = derive_handler(PathTemplate(("api", "v1", "users")), Method.DELETE)
        assert derived.segments == ("api", "v1", "delete_users")

    def test_template_is_not_mutated(self) -> None:
        template = PathTemplate(("paste", "paste"))
        derive_handler(template, Method.PUT)
        assert template.segments == ("paste", "paste")

    def test_per_method_in_order(self) -> None:
        handlers = derive_handlers(PathTemplate(("bar",)), (Method.PUT, Method.GET))
        assert [h.render() for h in handlers] == ["put_bar", "get_bar"]


class TestPathTemplate:
    def test_render_separators(self) -> None:
        template = PathTemplate(("paste", "get_paste"))
        assert template.render() == "paste::get_paste"
        assert template.render(".") == "paste.get_paste"
        assert str(template) == "paste::get_paste"

    def test_requires_a_segment(self) -> None:
        with pytest.raises(ValueError):
            PathTemplate(())
