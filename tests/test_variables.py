"""
Tests for variable scope merging and {{placeholder}} substitution.
"""

from apispecs.runner.variables import VariableSubstitutor, merge_scopes, substitute


class TestMergeScopes:
    """Test collection/environment merging."""

    def test_environment_wins(self):
        assert merge_scopes({"a": "1"}, {"a": "2"}) == {"a": "2"}

    def test_union_of_keys(self):
        assert merge_scopes({"a": "1"}, {"b": "2"}) == {"a": "1", "b": "2"}

    def test_missing_scopes(self):
        assert merge_scopes(None, None) == {}
        assert merge_scopes({"a": "1"}) == {"a": "1"}

    def test_inputs_not_mutated(self):
        collection_vars = {"a": "1"}
        merge_scopes(collection_vars, {"a": "2"})

        assert collection_vars == {"a": "1"}


class TestSubstitute:
    """Test placeholder substitution."""

    def test_replaces_all_occurrences(self):
        assert substitute("{{a}}/{{a}}", {"a": "x"}) == "x/x"

    def test_unknown_key_left_verbatim(self):
        assert substitute("{{a}} {{missing}}", {"a": "x"}) == "x {{missing}}"

    def test_not_recursive(self):
        scope = {"a": "{{b}}", "b": "deep"}

        assert substitute("{{a}}", scope) == "{{b}}"

    def test_not_recursive_regardless_of_key_order(self):
        scope = {"b": "deep", "a": "{{b}}"}

        assert substitute("{{a}}-{{b}}", scope) == "{{b}}-deep"

    def test_self_reference_does_not_loop(self):
        assert substitute("{{a}}", {"a": "{{a}}"}) == "{{a}}"

    def test_unclosed_braces_untouched(self):
        assert substitute("{{a", {"a": "x"}) == "{{a"

    def test_single_braces_untouched(self):
        assert substitute("{a}", {"a": "x"}) == "{a}"

    def test_extra_brace_around_placeholder(self):
        assert substitute("{{{a}}}", {"a": "x"}) == "{x}"

    def test_special_characters_in_key(self):
        assert substitute("{{a.b+c}}", {"a.b+c": "ok"}) == "ok"

    def test_empty_scope(self):
        assert substitute("{{a}}", {}) == "{{a}}"

    def test_empty_text(self):
        assert substitute("", {"a": "x"}) == ""


class TestVariableSubstitutor:
    """Test the substitutor wrapper."""

    def test_substitute_headers_values_only(self):
        substitutor = VariableSubstitutor({"t": "secret", "h": "X-Name"})

        headers = substitutor.substitute_headers([("Authorization", "Bearer {{t}}"), ("{{h}}", "v")])

        assert headers == [("Authorization", "Bearer secret"), ("{{h}}", "v")]

    def test_scope_copied(self):
        scope = {"a": "1"}
        substitutor = VariableSubstitutor(scope)
        scope["a"] = "2"

        assert substitutor.substitute("{{a}}") == "1"
