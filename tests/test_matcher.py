"""Pattern compiler tests."""

import pytest
from roadrouter_core.routing.matcher import (
    InvalidPatternError,
    Key,
    ParameterError,
    PatternCompiler,
    compile_path,
    compile_pattern,
    parse,
)


class TestParse:
    """Test template parsing."""

    def test_parse_named_parameter(self):
        """Test literal text and parameter keys are separated."""
        tokens = parse("/users/:id")

        assert tokens[0] == "/users"
        assert isinstance(tokens[1], Key)
        assert tokens[1].name == "id"
        assert tokens[1].prefix == "/"

    def test_parse_unnamed_groups_are_numbered(self):
        """Test unnamed patterns get sequential names."""
        tokens = parse("/(\\d+)/(\\w+)")
        keys = [t for t in tokens if isinstance(t, Key)]

        assert [k.name for k in keys] == ["0", "1"]

    def test_parse_escaped_characters(self):
        """Test escaped characters stay literal."""
        assert parse("/a\\:b") == ["/a:b"]


class TestCompilePattern:
    """Test template to matcher compilation."""

    def test_named_parameter(self):
        """Test matching and extracting a named parameter."""
        pattern = compile_pattern("/users/:id")

        assert pattern.test("/users/42")
        assert pattern.exec("/users/42") == ["42"]
        assert pattern.extract("/users/42") == {"id": "42"}
        assert [k.name for k in pattern.keys] == ["id"]

    def test_no_match(self):
        """Test non-matching urls."""
        pattern = compile_pattern("/users/:id")

        assert not pattern.test("/users")
        assert not pattern.test("/users/42/posts")
        assert pattern.exec("/posts/1") is None
        assert pattern.extract("/posts/1") is None

    def test_trailing_delimiter_allowed(self):
        """Test non-strict patterns accept a trailing slash."""
        assert compile_pattern("/about").test("/about/")
        assert not compile_pattern("/about", strict=True).test("/about/")

    def test_case_sensitivity(self):
        """Test matching is case-insensitive by default."""
        assert compile_pattern("/About").test("/about")
        assert not compile_pattern("/About", sensitive=True).test("/about")

    def test_custom_pattern(self):
        """Test parameter with custom regex."""
        pattern = compile_pattern("/users/:id(\\d+)")

        assert pattern.test("/users/42")
        assert not pattern.test("/users/abc")

    def test_catch_all(self):
        """Test unnamed catch-all group."""
        pattern = compile_pattern("/files(.*)")

        assert pattern.test("/files")
        assert pattern.exec("/files/a/b") == ["/a/b"]
        assert pattern.keys[0].name == "0"

    def test_optional_parameter(self):
        """Test optional parameter with its prefix."""
        pattern = compile_pattern("/users/:id?")

        assert pattern.test("/users")
        assert pattern.test("/users/7")
        assert pattern.exec("/users") == [None]
        assert pattern.extract("/users") == {}

    def test_repeated_parameter(self):
        """Test one-or-more parameter."""
        pattern = compile_pattern("/tags/:tag+")

        assert pattern.exec("/tags/a/b") == ["a/b"]
        assert not pattern.test("/tags")

    def test_group_with_prefix(self):
        """Test braces group."""
        pattern = compile_pattern("/users{/:id}?")

        assert pattern.test("/users")
        assert pattern.extract("/users/9") == {"id": "9"}

    def test_non_end_matching(self):
        """Test prefix matching when end is disabled."""
        pattern = compile_pattern("/users", end=False)

        assert pattern.test("/users")
        assert pattern.test("/users/42")
        assert not pattern.test("/usersx")


class TestInvalidPatterns:
    """Test malformed templates."""

    @pytest.mark.parametrize("template", [
        "[invalid",
        "/users/:",
        "/users/(\\d+",
        "/users/()",
        "/users/((a))",
        "/files/*",
        "/users/{:id",
        "/:id([)",
        ":id+",
    ])
    def test_invalid_template_raises(self, template):
        """Test invalid templates raise InvalidPatternError."""
        with pytest.raises(InvalidPatternError):
            compile_pattern(template)

    def test_error_carries_template_and_index(self):
        """Test error details."""
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_pattern("/users/:")

        assert exc_info.value.template == "/users/:"
        assert exc_info.value.index == 7
        assert "Missing parameter name" in str(exc_info.value)

    def test_invalid_pattern_is_value_error(self):
        """Test error hierarchy."""
        assert issubclass(InvalidPatternError, ValueError)


class TestCompilePath:
    """Test parameters to path rendering."""

    def test_render_named_parameter(self):
        """Test rendering string and integer values."""
        to_path = compile_path("/users/:id")

        assert to_path({"id": "42"}) == "/users/42"
        assert to_path({"id": 7}) == "/users/7"

    def test_render_static_template(self):
        """Test templates without parameters."""
        assert compile_path("/about")() == "/about"
        assert compile_path("")({}) == ""

    def test_missing_required_parameter(self):
        """Test missing values raise ParameterError."""
        with pytest.raises(ParameterError):
            compile_path("/users/:id")({})

    def test_value_must_match_pattern(self):
        """Test values are validated against the key pattern."""
        with pytest.raises(ParameterError):
            compile_path("/users/:id(\\d+)")({"id": "abc"})

    def test_optional_parameter_skipped(self):
        """Test absent optional values are skipped."""
        assert compile_path("/users/:id?")({}) == "/users"

    def test_repeated_values(self):
        """Test list values for repeating keys."""
        to_path = compile_path("/tags/:tag+")

        assert to_path({"tag": ["a", "b"]}) == "/tags/a/b"
        with pytest.raises(ParameterError):
            compile_path("/users/:id")({"id": ["1", "2"]})

    def test_parameter_error_is_type_error(self):
        """Test error hierarchy."""
        assert issubclass(ParameterError, TypeError)


class TestPatternCompiler:
    """Test caching compiler."""

    def test_compile_is_cached(self):
        """Test compiled matchers are reused."""
        compiler = PatternCompiler()

        assert compiler.compile("/users/:id") is compiler.compile("/users/:id")
        assert compiler.to_path("/users/:id") is compiler.to_path("/users/:id")

    def test_compiler_options(self):
        """Test options are applied to compiled matchers."""
        compiler = PatternCompiler(sensitive=True, strict=True)

        assert not compiler.compile("/About").test("/about")
        assert not compiler.compile("/about").test("/about/")
