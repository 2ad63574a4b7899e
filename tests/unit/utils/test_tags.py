"""Unit tests for the tags module."""

# Local Modules
from fluent_cdk.utils.tags import collapse_tags, to_cfn_tags


class TestCollapseTags:
    """Test cases for collapse_tags."""

    def test_distinct_keys(self):
        """Test distinct keys are all kept in order."""
        assert collapse_tags([("a", "1"), ("b", "2")]) == {"a": "1", "b": "2"}

    def test_last_value_wins(self):
        """Test the last value for a repeated key wins."""
        collapsed = collapse_tags([("env", "dev"), ("team", "x"), ("env", "prod")])

        assert collapsed == {"env": "prod", "team": "x"}
        assert list(collapsed) == ["env", "team"]

    def test_empty(self):
        """Test no tags produce an empty mapping."""
        assert collapse_tags([]) == {}


class TestToCfnTags:
    """Test cases for to_cfn_tags."""

    def test_one_tag_per_key(self):
        """Test duplicates collapse into a single CfnTag."""
        tags = to_cfn_tags([("Owner", "ops"), ("Owner", "dev"), ("Env", "prod")])

        assert [(tag.key, tag.value) for tag in tags] == [
            ("Owner", "dev"),
            ("Env", "prod"),
        ]
